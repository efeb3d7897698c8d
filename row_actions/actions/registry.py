"""Row action registry."""

from typing import Any, Dict, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from ..config import DEFAULT_CAPABILITY, ActionConfig
from ..exceptions import ActionValidationError
from .base import ActionDefinition


logger = structlog.get_logger(__name__)

ActionInput = Union[ActionConfig, Mapping[str, Any]]


class ActionRegistry:
    """Stores action definitions keyed by object type, subtype and action key."""

    def __init__(self, default_capability: str = DEFAULT_CAPABILITY) -> None:
        """Initialize the action registry.

        Args:
            default_capability: Capability required by actions that do not set one
        """
        self.default_capability = default_capability
        self._actions: Dict[str, Dict[str, Dict[str, ActionDefinition]]] = {}

        logger.info("Initialized ActionRegistry", default_capability=default_capability)

    def build(self, key: Any, config: ActionInput) -> ActionDefinition:
        """Validate one action configuration and normalize it.

        Args:
            key: Action key
            config: Action configuration mapping or model

        Returns:
            Normalized definition

        Raises:
            ActionValidationError: If the key or the configuration is invalid
        """
        if not isinstance(key, str) or not key:
            raise ActionValidationError(
                "Invalid action key provided. It must be a non-empty string.",
                key=repr(key),
            )

        if not isinstance(config, ActionConfig):
            try:
                config = ActionConfig.model_validate(dict(config))
            except (ValidationError, TypeError, ValueError) as e:
                raise ActionValidationError(
                    f"Invalid configuration for action '{key}': {e}", key=key
                ) from e

        return ActionDefinition.from_config(key, config, self.default_capability)

    def register(
        self, object_type: str, object_subtype: str, key: Any, config: ActionInput
    ) -> ActionDefinition:
        """Register an action, replacing any previous one with the same key.

        Args:
            object_type: Object type (post, user, term, comment, attachment)
            object_subtype: Object subtype (e.g. post type or taxonomy)
            key: Action key
            config: Action configuration

        Returns:
            The stored definition
        """
        definition = self.build(key, config)
        self._store(object_type, object_subtype, definition)
        return definition

    def register_many(
        self,
        object_type: str,
        object_subtype: str,
        actions: Mapping[Any, ActionInput],
    ) -> list[ActionDefinition]:
        """Register several actions; nothing is stored if any of them is invalid.

        Args:
            object_type: Object type
            object_subtype: Object subtype
            actions: Mapping of action key to configuration

        Returns:
            The stored definitions in registration order
        """
        definitions = [self.build(key, config) for key, config in actions.items()]

        for definition in definitions:
            self._store(object_type, object_subtype, definition)

        return definitions

    def _store(
        self, object_type: str, object_subtype: str, definition: ActionDefinition
    ) -> None:
        actions = self._actions.setdefault(object_type, {}).setdefault(object_subtype, {})

        if definition.key in actions:
            logger.warning(
                "Overriding existing row action",
                object_type=object_type,
                object_subtype=object_subtype,
                action=definition.key,
            )

        actions[definition.key] = definition

        logger.debug(
            "Registered row action",
            object_type=object_type,
            object_subtype=object_subtype,
            action=definition.key,
            is_async=definition.is_async,
        )

    def get_actions(self, object_type: str, object_subtype: str) -> Dict[str, ActionDefinition]:
        """Get the actions registered for an object type and subtype.

        Returns:
            Copy of the key to definition mapping, empty if nothing is registered
        """
        return dict(self._actions.get(object_type, {}).get(object_subtype, {}))

    def get_action_by_key(
        self, key: str, object_type: str, object_subtype: str
    ) -> Optional[ActionDefinition]:
        """Get one action definition, or None if it is not registered."""
        return self._actions.get(object_type, {}).get(object_subtype, {}).get(key)

    def has_async_actions(self, object_type: str, object_subtype: str) -> bool:
        """Whether any action for the object type and subtype is async."""
        return any(
            definition.is_async
            for definition in self.get_actions(object_type, object_subtype).values()
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "registered_actions": sum(
                len(actions)
                for subtypes in self._actions.values()
                for actions in subtypes.values()
            ),
            "object_types": {
                object_type: sorted(subtypes)
                for object_type, subtypes in self._actions.items()
            },
        }
