"""Admin listing bindings, one per object type."""

from .base import RowActionsTable
from .registry import get_table, list_tables, register_table

# Import all bindings to register them
from .post import PostTable
from .user import UserTable
from .taxonomy import TaxonomyTable
from .comment import CommentTable
from .media import MediaTable

__all__ = [
    "RowActionsTable",
    "register_table",
    "get_table",
    "list_tables",
    "PostTable",
    "UserTable",
    "TaxonomyTable",
    "CommentTable",
    "MediaTable",
]
