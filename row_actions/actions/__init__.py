"""Row action registry, rendering and async execution."""

from .base import (
    ActionDefinition,
    AlwaysAllow,
    AsyncCallback,
    AsyncResponse,
    CapabilityCheck,
    CustomResolver,
    StaticUrl,
    UrlResolver,
)
from .registry import ActionRegistry
from .dispatcher import ActionDispatcher
from .handler import AsyncActionHandler

__all__ = [
    "ActionDefinition",
    "ActionRegistry",
    "ActionDispatcher",
    "AsyncActionHandler",
    "AsyncResponse",
    "StaticUrl",
    "UrlResolver",
    "AsyncCallback",
    "AlwaysAllow",
    "CapabilityCheck",
    "CustomResolver",
]
