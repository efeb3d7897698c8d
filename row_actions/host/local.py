"""In-process host with hook tables, capability checks and signed tokens."""

import hashlib
import hmac
import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Set
from urllib.parse import urljoin

import structlog

from ..actions.base import AsyncResponse
from .base import Host


logger = structlog.get_logger(__name__)


@dataclass
class CurrentUser:
    """The user a request runs as."""

    id: int
    capabilities: Set[str] = field(default_factory=set)


@dataclass
class EnqueuedScript:
    """A client script requested for the current admin page."""

    handle: str
    version: str
    config: Dict[str, Any]


class LocalHost(Host):
    """Self-contained host implementation.

    Hooks are kept in per-name tables in registration order. Security tokens
    are HMAC signatures over a time tick, the token action and the current
    user, valid for the current and the previous half of their lifetime.
    """

    def __init__(
        self,
        secret: str,
        nonce_lifetime: int = 86400,
        base_url: str = "http://localhost/admin/",
        user: Optional[CurrentUser] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the local host.

        Args:
            secret: Secret used to sign security tokens
            nonce_lifetime: Token lifetime in seconds
            base_url: Base URL for admin links
            user: User requests run as; anonymous when omitted
            clock: Time source, in seconds
        """
        self._secret = secret.encode()
        self.nonce_lifetime = nonce_lifetime
        self.base_url = base_url
        self.current_user = user or CurrentUser(id=0)
        self._clock = clock

        self._filters: Dict[str, List[Callable[..., Any]]] = {}
        self._actions: Dict[str, List[Callable[..., Any]]] = {}
        self._ajax_handlers: Dict[str, Callable[..., Any]] = {}
        self._meta: Dict[tuple[str, int, str], Any] = {}
        self.enqueued_scripts: Dict[str, EnqueuedScript] = {}

        logger.info("Initialized LocalHost", base_url=base_url)

    def set_current_user(self, user: CurrentUser) -> None:
        """Switch the user subsequent calls run as."""
        self.current_user = user

    # Hooks

    def add_filter(self, hook: str, callback: Callable[..., Any]) -> None:
        self._filters.setdefault(hook, []).append(callback)

    def add_action(self, hook: str, callback: Callable[..., Any]) -> None:
        self._actions.setdefault(hook, []).append(callback)

    def add_ajax_handler(self, name: str, callback: Callable[..., Any]) -> None:
        if name in self._ajax_handlers:
            logger.warning("Overriding existing async handler", name=name)
        self._ajax_handlers[name] = callback

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` through every filter registered on ``hook``."""
        for callback in self._filters.get(hook, []):
            value = callback(value, *args)
        return value

    def do_action(self, hook: str, *args: Any) -> None:
        """Run every callback registered on ``hook``."""
        for callback in self._actions.get(hook, []):
            callback(*args)

    def has_ajax_handler(self, name: str) -> bool:
        return name in self._ajax_handlers

    async def dispatch_ajax(
        self, name: str, params: Mapping[str, Any]
    ) -> Optional[AsyncResponse]:
        """Run the async handler registered as ``name``.

        Returns:
            The handler response, or None when no handler is registered
        """
        handler = self._ajax_handlers.get(name)
        if handler is None:
            logger.warning("No async handler registered", name=name)
            return None
        return await handler(params)

    # Capabilities

    def current_user_can(self, capability: str) -> bool:
        return capability in self.current_user.capabilities

    # Security tokens

    def _tick(self) -> int:
        return math.ceil(self._clock() / (self.nonce_lifetime / 2))

    def _sign(self, tick: int, action: str) -> str:
        message = f"{tick}|{action}|{self.current_user.id}".encode()
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()[-12:-2]

    def create_nonce(self, action: str) -> str:
        return self._sign(self._tick(), action)

    def verify_nonce(self, nonce: str, action: str) -> bool:
        if not nonce:
            return False

        tick = self._tick()
        return any(
            hmac.compare_digest(nonce.encode(), self._sign(candidate, action).encode())
            for candidate in (tick, tick - 1)
        )

    # Metadata

    def get_meta(self, object_type: str, object_id: int, key: str) -> Any:
        return self._meta.get((object_type, object_id, key))

    def update_meta(self, object_type: str, object_id: int, key: str, value: Any) -> None:
        self._meta[(object_type, object_id, key)] = value

    # Admin pages

    def admin_url(self, path: str = "") -> str:
        return urljoin(self.base_url, path.lstrip("/"))

    def enqueue_script(self, handle: str, version: str, config: dict[str, Any]) -> None:
        self.enqueued_scripts[handle] = EnqueuedScript(handle, version, dict(config))
        logger.debug("Enqueued client script", handle=handle, version=version)
