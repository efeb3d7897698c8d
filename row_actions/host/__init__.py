"""Host application integration."""

from .base import Host
from .local import CurrentUser, EnqueuedScript, LocalHost

__all__ = ["Host", "LocalHost", "CurrentUser", "EnqueuedScript"]
