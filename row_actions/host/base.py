"""Contract between the row actions library and its host application."""

from abc import ABC, abstractmethod
from typing import Any, Callable


class Host(ABC):
    """Services the host application provides to the row actions library."""

    @abstractmethod
    def add_filter(self, hook: str, callback: Callable[..., Any]) -> None:
        """Register a filter that transforms a value passed through ``hook``."""
        pass

    @abstractmethod
    def add_action(self, hook: str, callback: Callable[..., Any]) -> None:
        """Register a callback run when ``hook`` fires."""
        pass

    @abstractmethod
    def add_ajax_handler(self, name: str, callback: Callable[..., Any]) -> None:
        """Register a coroutine serving async requests named ``name``.

        The callback receives the request parameters and returns an
        :class:`~row_actions.actions.base.AsyncResponse`.
        """
        pass

    @abstractmethod
    def current_user_can(self, capability: str) -> bool:
        """Check whether the current user holds ``capability``."""
        pass

    @abstractmethod
    def create_nonce(self, action: str) -> str:
        """Create a security token bound to ``action`` and the current user."""
        pass

    @abstractmethod
    def verify_nonce(self, nonce: str, action: str) -> bool:
        """Check a security token created for ``action``."""
        pass

    @abstractmethod
    def get_meta(self, object_type: str, object_id: int, key: str) -> Any:
        """Read a metadata value, or None when unset."""
        pass

    @abstractmethod
    def update_meta(self, object_type: str, object_id: int, key: str, value: Any) -> None:
        """Write a metadata value."""
        pass

    @abstractmethod
    def admin_url(self, path: str = "") -> str:
        """Absolute URL of an admin path."""
        pass

    @abstractmethod
    def enqueue_script(self, handle: str, version: str, config: dict[str, Any]) -> None:
        """Load a client script on the current admin page with its configuration."""
        pass
