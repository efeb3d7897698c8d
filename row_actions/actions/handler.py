"""Async row action request handling."""

import inspect
import json
import time
from typing import Any, Mapping

import structlog
from prometheus_client import Counter, Histogram

from ..config import RowActionsSettings
from .base import AsyncCallback, AsyncResponse, nonce_action, parse_object_id
from .dispatcher import ActionDispatcher
from .registry import ActionRegistry

logger = structlog.get_logger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Action completed successfully"

# Prometheus metrics
ASYNC_REQUESTS = Counter(
    "row_actions_async_requests_total",
    "Total number of async row action requests",
    ["object_type", "object_subtype", "action", "status"],
)

CALLBACK_DURATION = Histogram(
    "row_actions_async_callback_duration_seconds",
    "Time spent running async row action callbacks",
    ["object_type", "object_subtype", "action"],
)


def parse_options(value: Any) -> dict[str, Any]:
    """Decode the free-form options payload; {} when absent or not an object."""
    if isinstance(value, Mapping):
        return dict(value)
    if not value or not isinstance(value, (str, bytes)):
        return {}

    try:
        options = json.loads(value)
    except ValueError:
        logger.debug("Ignoring unparseable async action options")
        return {}

    return options if isinstance(options, dict) else {}


class AsyncActionHandler:
    """Validates, authorizes and runs async row action requests."""

    def __init__(
        self,
        registry: ActionRegistry,
        dispatcher: ActionDispatcher,
        settings: RowActionsSettings,
    ) -> None:
        """Initialize the handler.

        Args:
            registry: Registry holding the action definitions
            dispatcher: Dispatcher used for the permission re-check
            settings: Row actions settings
        """
        self.registry = registry
        self.dispatcher = dispatcher
        self.host = dispatcher.host
        self.settings = settings

    async def handle(
        self, object_type: str, object_subtype: str, params: Mapping[str, Any]
    ) -> AsyncResponse:
        """Handle one async action request.

        Args:
            object_type: Object type the request is routed to
            object_subtype: Object subtype the request is routed to
            params: Request parameters (action_key, object_id, options, token)

        Returns:
            Structured response; failures carry a message and status code
        """
        action_key = str(params.get("action_key") or "").strip()
        object_id = parse_object_id(params.get("object_id"))
        options = parse_options(params.get("options"))
        nonce = str(params.get(self.settings.nonce_field) or "")

        action = self.registry.get_action_by_key(action_key, object_type, object_subtype)
        if action is None:
            return self._fail(object_type, object_subtype, "unknown", "Invalid action", 400)

        token_action = nonce_action(object_type, object_subtype, action_key, object_id)
        if not self.host.verify_nonce(nonce, token_action):
            return self._fail(
                object_type, object_subtype, action_key, "Invalid security token", 403,
                object_id=object_id,
            )

        if not self.dispatcher.check_permission(action, object_id):
            return self._fail(
                object_type, object_subtype, action_key, "Insufficient permissions", 403,
                object_id=object_id,
            )

        target = action.target
        if not isinstance(target, AsyncCallback) or not callable(target.callback):
            return self._fail(
                object_type, object_subtype, action_key, "Invalid callback function", 500,
                object_id=object_id,
            )

        logger.info(
            "Executing async row action",
            object_type=object_type,
            object_subtype=object_subtype,
            action=action_key,
            object_id=object_id,
        )

        start_time = time.time()
        try:
            result = target.callback(object_id, options)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(
                "Async row action failed",
                object_type=object_type,
                object_subtype=object_subtype,
                action=action_key,
                object_id=object_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._fail(object_type, object_subtype, action_key, str(e), 500)
        finally:
            CALLBACK_DURATION.labels(
                object_type=object_type, object_subtype=object_subtype, action=action_key
            ).observe(time.time() - start_time)

        data = dict(result) if isinstance(result, Mapping) else {"success": True}
        if data.get("message") is None:
            data["message"] = DEFAULT_SUCCESS_MESSAGE

        ASYNC_REQUESTS.labels(
            object_type=object_type,
            object_subtype=object_subtype,
            action=action_key,
            status="success",
        ).inc()

        logger.info(
            "Async row action completed",
            object_type=object_type,
            object_subtype=object_subtype,
            action=action_key,
            object_id=object_id,
        )

        return AsyncResponse.ok(data)

    def _fail(
        self,
        object_type: str,
        object_subtype: str,
        action_key: str,
        message: str,
        status: int,
        **context: Any,
    ) -> AsyncResponse:
        ASYNC_REQUESTS.labels(
            object_type=object_type,
            object_subtype=object_subtype,
            action=action_key,
            status=str(status),
        ).inc()

        logger.warning(
            "Rejected async row action request",
            object_type=object_type,
            object_subtype=object_subtype,
            action=action_key,
            status=status,
            message=message,
            **context,
        )

        return AsyncResponse.error(message, status)
