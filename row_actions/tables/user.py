"""Row actions for the user listing."""

from typing import Any

from .base import RowActionsTable, read_id
from .registry import register_table


@register_table("user")
class UserTable(RowActionsTable):
    """Binds row actions to the user listing."""

    def listing_hook(self) -> str:
        return "user_row_actions"

    def object_id(self, row: Any) -> int:
        return read_id(row, "id")
