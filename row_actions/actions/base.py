"""Data model for row actions."""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from ..config import DEFAULT_CAPABILITY, ActionConfig


@dataclass(frozen=True)
class StaticUrl:
    """Link to a fixed URL, with the object ID appended as a query argument."""

    url: str = ""


@dataclass(frozen=True)
class UrlResolver:
    """Link to a URL computed from the object ID."""

    resolver: Callable[[int], str]


@dataclass(frozen=True)
class AsyncCallback:
    """Run a callback through the async endpoint instead of navigating."""

    callback: Optional[Callable[..., Any]] = None


LinkTarget = Union[StaticUrl, UrlResolver, AsyncCallback]


@dataclass(frozen=True)
class AlwaysAllow:
    """No permission gate."""


@dataclass(frozen=True)
class CapabilityCheck:
    """Gate on a host capability."""

    capability: str


@dataclass(frozen=True)
class CustomResolver:
    """Gate on an optional capability, then on a per-object resolver."""

    capability: Optional[str]
    resolver: Callable[[int], bool]


Permission = Union[AlwaysAllow, CapabilityCheck, CustomResolver]


@dataclass(frozen=True)
class ActionDefinition:
    """A registered row action."""

    key: str
    label: str = ""
    label_resolver: Optional[Callable[[int], str]] = None
    target: LinkTarget = field(default_factory=StaticUrl)
    position: str = ""
    permission: Permission = field(
        default_factory=lambda: CapabilityCheck(DEFAULT_CAPABILITY)
    )
    confirm: str = ""
    css_class: str = ""
    link_target: str = ""
    icon: str = ""

    @property
    def is_async(self) -> bool:
        """Whether the action runs through the async endpoint."""
        return isinstance(self.target, AsyncCallback)

    @classmethod
    def from_config(
        cls, key: str, config: ActionConfig, default_capability: str
    ) -> "ActionDefinition":
        """Build a definition from validated configuration.

        Args:
            key: Action key
            config: Validated action configuration
            default_capability: Capability used when the config leaves it unset

        Returns:
            The normalized definition
        """
        if config.ajax:
            target: LinkTarget = AsyncCallback(config.callback)
        elif config.url_callback is not None:
            target = UrlResolver(config.url_callback)
        else:
            target = StaticUrl(config.url)

        if "capability" in config.model_fields_set:
            capability = config.capability
        else:
            capability = default_capability

        if config.permission_callback is not None:
            permission: Permission = CustomResolver(capability, config.permission_callback)
        elif capability:
            permission = CapabilityCheck(capability)
        else:
            permission = AlwaysAllow()

        return cls(
            key=key,
            label=config.label,
            label_resolver=config.label_callback,
            target=target,
            position=config.position,
            permission=permission,
            confirm=config.confirm,
            css_class=config.css_class,
            link_target=config.link_target,
            icon=config.icon,
        )


@dataclass
class AsyncResponse:
    """Outcome of an async action request."""

    success: bool
    data: dict[str, Any]
    status: int = 200

    @classmethod
    def ok(cls, data: dict[str, Any]) -> "AsyncResponse":
        return cls(success=True, data=data, status=200)

    @classmethod
    def error(cls, message: str, status: int) -> "AsyncResponse":
        return cls(success=False, data={"message": message}, status=status)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON envelope sent to the client."""
        return {"success": self.success, "data": self.data}


def nonce_action(object_type: str, object_subtype: str, action_key: str, object_id: int) -> str:
    """Name of the security token action bound to one action on one object."""
    return f"row_action_{object_type}_{object_subtype}_{action_key}_{object_id}"


def ajax_hook_name(object_type: str, object_subtype: str) -> str:
    """Name of the async hook serving one object type and subtype."""
    return f"row_action_{object_type}_{object_subtype}"


_LEADING_INT = re.compile(r"\s*[+-]?(\d+)")


def parse_object_id(value: Any) -> int:
    """Coerce a request or row value to a non-negative integer.

    Leading digits are kept and the sign is dropped; anything else becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        return abs(int(value)) if math.isfinite(value) else 0

    match = _LEADING_INT.match(str(value)) if value is not None else None
    return int(match.group(1)) if match else 0
