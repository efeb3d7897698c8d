"""Row actions for the media library listing."""

from typing import Any

from .base import RowActionsTable, read_id
from .registry import register_table


@register_table("attachment")
class MediaTable(RowActionsTable):
    """Binds row actions to the media library listing."""

    def listing_hook(self) -> str:
        return "media_row_actions"

    def object_id(self, row: Any) -> int:
        return read_id(row, "id")
