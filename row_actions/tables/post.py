"""Row actions for posts and custom post types."""

from typing import Any

from .base import RowActionsTable, read_id
from .registry import register_table


@register_table("post")
class PostTable(RowActionsTable):
    """Binds row actions to a post type listing."""

    def listing_hook(self) -> str:
        return f"{self.object_subtype}_row_actions"

    def object_id(self, row: Any) -> int:
        return read_id(row, "id")
