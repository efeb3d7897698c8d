"""Base class for admin listing bindings."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

import structlog

from ..actions.base import AsyncResponse, ajax_hook_name, parse_object_id
from ..exceptions import ActionValidationError

if TYPE_CHECKING:
    from ..app import RowActions

logger = structlog.get_logger(__name__)


def read_id(row: Any, attribute: str) -> int:
    """Read an ID from a row object or mapping; malformed values read as 0."""
    if isinstance(row, Mapping):
        value = row.get(attribute, 0)
    else:
        value = getattr(row, attribute, 0)
    return parse_object_id(value)


class RowActionsTable(ABC):
    """Binds registered row actions to one admin listing.

    Subclasses set ``OBJECT_TYPE`` and supply the listing hook name and the
    object ID of a host row.
    """

    OBJECT_TYPE: str = ""

    def __init__(
        self,
        row_actions: "RowActions",
        actions: Mapping[Any, Any],
        object_subtype: str,
        keys_to_remove: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize the binding and register its actions.

        Args:
            row_actions: Composition root owning the registry and host
            actions: Mapping of action key to action configuration
            object_subtype: Object subtype (e.g. post type or taxonomy)
            keys_to_remove: Host action keys to strip from the listing

        Raises:
            ActionValidationError: If OBJECT_TYPE is unset or an action is invalid
        """
        if not self.OBJECT_TYPE:
            raise ActionValidationError("Table binding must define OBJECT_TYPE.")

        self.row_actions = row_actions
        self.object_type = self.OBJECT_TYPE
        self.object_subtype = object_subtype
        self.keys_to_remove: list[str] = []
        self._hooks_loaded = False

        self.set_keys_to_remove(keys_to_remove or [])
        self.add_actions(actions)

    def set_keys_to_remove(self, keys: Iterable[str]) -> None:
        self.keys_to_remove = list(keys)

    def add_actions(self, actions: Mapping[Any, Any]) -> None:
        """Register more actions for this listing."""
        self.row_actions.registry.register_many(self.object_type, self.object_subtype, actions)

    @abstractmethod
    def listing_hook(self) -> str:
        """Name of the host filter that builds this listing's row actions."""
        pass

    @abstractmethod
    def object_id(self, row: Any) -> int:
        """Extract the object ID from a host row object."""
        pass

    def ajax_hook(self) -> str:
        return ajax_hook_name(self.object_type, self.object_subtype)

    def register_actions(self, actions: Mapping[str, str], row: Any) -> dict[str, str]:
        """Filter callback: merge the registered actions into a host row's actions."""
        return self.row_actions.dispatcher.render(
            self.object_type,
            self.object_subtype,
            actions,
            self.object_id(row),
            self.keys_to_remove,
        )

    async def handle_ajax(self, params: Mapping[str, Any]) -> AsyncResponse:
        """Async hook callback: run a requested action."""
        return await self.row_actions.handler.handle(
            self.object_type, self.object_subtype, params
        )

    def enqueue_assets(self, *args: Any) -> None:
        """Admin page hook callback: load the client script when needed."""
        if self.row_actions.registry.has_async_actions(self.object_type, self.object_subtype):
            self.row_actions.enqueue_assets()

    def load_hooks(self) -> None:
        """Wire this binding into the host's hooks, once."""
        if self._hooks_loaded:
            return

        host = self.row_actions.host
        host.add_filter(self.listing_hook(), self.register_actions)
        host.add_ajax_handler(self.ajax_hook(), self.handle_ajax)
        host.add_action("admin_enqueue_scripts", self.enqueue_assets)
        self._hooks_loaded = True

        logger.info(
            "Loaded row action hooks",
            object_type=self.object_type,
            object_subtype=self.object_subtype,
            listing_hook=self.listing_hook(),
            ajax_hook=self.ajax_hook(),
        )
