"""Composition root wiring the registry, dispatcher and listing bindings."""

import time
from typing import Any, Iterable, List, Mapping, Optional, Union

import structlog

from .actions import ActionDispatcher, ActionRegistry, AsyncActionHandler
from .config import RowActionsSettings
from .exceptions import ActionValidationError
from .host import Host
from .tables import RowActionsTable, get_table


logger = structlog.get_logger(__name__)

CLIENT_STRINGS = {
    "processing": "Processing...",
    "error": "Error",
    "success": "Success",
}

Subtypes = Union[str, Iterable[str]]


class RowActions:
    """Owns the row action registry and the bindings registered against a host.

    Registration calls make up the configuration phase. ``activate()`` wires
    every binding into the host once all collaborators exist.
    """

    def __init__(
        self,
        host: Host,
        settings: Optional[RowActionsSettings] = None,
        registry: Optional[ActionRegistry] = None,
    ) -> None:
        """Initialize the row actions root.

        Args:
            host: Host application services
            settings: Settings; read from the environment when omitted
            registry: Action registry; a fresh one when omitted
        """
        self.settings = settings or RowActionsSettings()
        self.host = host
        self.registry = registry or ActionRegistry(self.settings.default_capability)
        self.dispatcher = ActionDispatcher(self.registry, host, self.settings)
        self.handler = AsyncActionHandler(self.registry, self.dispatcher, self.settings)

        self.bindings: List[RowActionsTable] = []
        self._active = False
        self._assets_enqueued = False

        logger.info("Initialized RowActions")

    @property
    def active(self) -> bool:
        return self._active

    def register(
        self,
        object_type: str,
        subtypes: Subtypes,
        actions: Mapping[Any, Any],
        keys_to_remove: Optional[Iterable[str]] = None,
    ) -> List[RowActionsTable]:
        """Register actions for one object type and one or more subtypes.

        A subtype whose registration fails is logged and skipped; the others
        are still registered.

        Args:
            object_type: Object type (post, user, term, comment, attachment)
            subtypes: One subtype or several
            actions: Mapping of action key to action configuration
            keys_to_remove: Host action keys to strip from the listing

        Returns:
            One binding per successfully registered subtype
        """
        if isinstance(subtypes, str):
            subtypes = [subtypes]

        keys = list(keys_to_remove or [])
        bindings = []

        for subtype in subtypes:
            try:
                binding = get_table(object_type)(self, actions, subtype, keys)
            except ActionValidationError as e:
                logger.error(
                    "Row action registration failed",
                    object_type=object_type,
                    object_subtype=subtype,
                    action=e.key,
                    error=str(e),
                )
                continue

            self.bindings.append(binding)
            bindings.append(binding)

            # Bindings registered after activation are wired straight away
            if self._active:
                binding.load_hooks()

        return bindings

    def _register_single(
        self,
        object_type: str,
        subtype: str,
        actions: Mapping[Any, Any],
        keys_to_remove: Optional[Iterable[str]],
    ) -> Optional[RowActionsTable]:
        bindings = self.register(object_type, subtype, actions, keys_to_remove)
        return bindings[0] if bindings else None

    def register_post_row_actions(
        self,
        post_types: Subtypes,
        actions: Mapping[Any, Any],
        keys_to_remove: Optional[Iterable[str]] = None,
    ) -> List[RowActionsTable]:
        """Register row actions for one or more post types."""
        return self.register("post", post_types, actions, keys_to_remove)

    def register_user_row_actions(
        self, actions: Mapping[Any, Any], keys_to_remove: Optional[Iterable[str]] = None
    ) -> Optional[RowActionsTable]:
        """Register row actions for the user listing."""
        return self._register_single("user", "user", actions, keys_to_remove)

    def register_taxonomy_row_actions(
        self,
        taxonomies: Subtypes,
        actions: Mapping[Any, Any],
        keys_to_remove: Optional[Iterable[str]] = None,
    ) -> List[RowActionsTable]:
        """Register row actions for one or more taxonomies."""
        return self.register("term", taxonomies, actions, keys_to_remove)

    def register_comment_row_actions(
        self, actions: Mapping[Any, Any], keys_to_remove: Optional[Iterable[str]] = None
    ) -> Optional[RowActionsTable]:
        """Register row actions for the comment listing."""
        return self._register_single("comment", "comment", actions, keys_to_remove)

    def register_media_row_actions(
        self, actions: Mapping[Any, Any], keys_to_remove: Optional[Iterable[str]] = None
    ) -> Optional[RowActionsTable]:
        """Register row actions for the media library listing."""
        return self._register_single("attachment", "attachment", actions, keys_to_remove)

    def activate(self) -> None:
        """Wire every registered binding into the host's hooks."""
        if self._active:
            logger.warning("RowActions already activated")
            return

        for binding in self.bindings:
            binding.load_hooks()

        self._active = True
        logger.info("Activated row actions", bindings=len(self.bindings))

    def client_config(self) -> dict[str, Any]:
        """Configuration handed to the client script."""
        return {
            "ajaxUrl": self.host.admin_url(self.settings.ajax_path),
            "nonceField": self.settings.nonce_field,
            "triggerClass": self.settings.trigger_class,
            "strings": dict(CLIENT_STRINGS),
        }

    def enqueue_assets(self) -> None:
        """Ask the host to load the client script, at most once."""
        if self._assets_enqueued:
            return

        version = str(int(time.time())) if self.settings.debug else self.settings.asset_version
        self.host.enqueue_script(self.settings.asset_handle, version, self.client_config())
        self._assets_enqueued = True

        logger.info("Enqueued row action assets", handle=self.settings.asset_handle)

    def get_stats(self) -> dict[str, Any]:
        """Get row actions statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "active": self._active,
            "bindings": len(self.bindings),
            "registry": self.registry.get_stats(),
        }
