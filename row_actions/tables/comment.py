"""Row actions for the comment listing."""

from typing import Any

from .base import RowActionsTable, read_id
from .registry import register_table


@register_table("comment")
class CommentTable(RowActionsTable):
    """Binds row actions to the comment listing."""

    def listing_hook(self) -> str:
        return "comment_row_actions"

    def object_id(self, row: Any) -> int:
        return read_id(row, "comment_id")
