"""Merges registered row actions into a host-supplied action list."""

from typing import Iterable, Mapping

import structlog
from prometheus_client import Counter

from ..config import RowActionsSettings
from ..host.base import Host
from ..utils.arr import insert_after, insert_before
from .base import (
    ActionDefinition,
    AlwaysAllow,
    CapabilityCheck,
    CustomResolver,
)
from .links import LinkBuilder
from .registry import ActionRegistry

logger = structlog.get_logger(__name__)

# Prometheus metrics
ACTIONS_RENDERED = Counter(
    "row_actions_rendered_total",
    "Total number of row action links rendered",
    ["object_type", "object_subtype"],
)

ACTIONS_SKIPPED = Counter(
    "row_actions_permission_skipped_total",
    "Total number of row actions hidden by a failed permission check",
    ["object_type", "object_subtype"],
)


class ActionDispatcher:
    """Renders the permitted actions of one object and splices them in place."""

    def __init__(
        self, registry: ActionRegistry, host: Host, settings: RowActionsSettings
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Registry holding the action definitions
            host: Host providing capability checks and security tokens
            settings: Row actions settings
        """
        self.registry = registry
        self.host = host
        self.links = LinkBuilder(host, settings)

    def check_permission(self, action: ActionDefinition, object_id: int) -> bool:
        """Check whether the current user may see and run an action.

        Fails closed: the capability is checked first, then the resolver. A
        resolver that raises denies the action.
        """
        permission = action.permission

        if isinstance(permission, AlwaysAllow):
            return True
        if isinstance(permission, CapabilityCheck):
            return self.host.current_user_can(permission.capability)
        if isinstance(permission, CustomResolver):
            if permission.capability and not self.host.current_user_can(
                permission.capability
            ):
                return False
            try:
                return bool(permission.resolver(object_id))
            except Exception as e:
                logger.error(
                    "Row action permission check failed",
                    action=action.key,
                    object_id=object_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return False

        raise TypeError(f"Unknown permission type: {type(permission).__name__}")

    def render(
        self,
        object_type: str,
        object_subtype: str,
        existing_actions: Mapping[str, str],
        object_id: int,
        keys_to_remove: Iterable[str] = (),
    ) -> dict[str, str]:
        """Build the action list for one row.

        Args:
            object_type: Object type of the listing
            object_subtype: Object subtype of the listing
            existing_actions: Host-supplied key to HTML mapping
            object_id: ID of the row object
            keys_to_remove: Host action keys to strip first

        Returns:
            New key to HTML mapping with the permitted actions spliced in
        """
        removed = set(keys_to_remove)
        actions = {key: html for key, html in existing_actions.items() if key not in removed}

        for key, action in self.registry.get_actions(object_type, object_subtype).items():
            if not self.check_permission(action, object_id):
                ACTIONS_SKIPPED.labels(
                    object_type=object_type, object_subtype=object_subtype
                ).inc()
                logger.debug(
                    "Skipping row action without permission",
                    object_type=object_type,
                    object_subtype=object_subtype,
                    action=key,
                    object_id=object_id,
                )
                continue

            html = self.links.build(action, object_type, object_subtype, object_id)
            actions = self._splice(actions, key, html, action.position)

            ACTIONS_RENDERED.labels(
                object_type=object_type, object_subtype=object_subtype
            ).inc()

        return actions

    def _splice(
        self, actions: dict[str, str], key: str, html: str, position: str
    ) -> dict[str, str]:
        if position.startswith("after:"):
            return insert_after(actions, position[len("after:"):], {key: html})
        if position.startswith("before:"):
            return insert_before(actions, position[len("before:"):], {key: html})

        actions[key] = html
        return actions
