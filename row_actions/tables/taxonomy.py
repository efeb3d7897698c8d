"""Row actions for taxonomy term listings."""

from typing import Any

from .base import RowActionsTable, read_id
from .registry import register_table


@register_table("term")
class TaxonomyTable(RowActionsTable):
    """Binds row actions to a taxonomy's term listing."""

    def listing_hook(self) -> str:
        return f"{self.object_subtype}_row_actions"

    def object_id(self, row: Any) -> int:
        return read_id(row, "term_id")
