"""Main entry point for the row actions async endpoint."""

import importlib
from typing import Optional

from aiohttp import web

from .app import RowActions
from .config import RowActionsSettings
from .host import LocalHost
from .utils import setup_logging
from .utils.server import AsyncActionServer


def load_actions(row_actions: RowActions, module_path: Optional[str]) -> None:
    """Import the integrator module and let it register its actions.

    The module must expose ``configure(row_actions)``.
    """
    if not module_path:
        return

    module = importlib.import_module(module_path)
    configure = getattr(module, "configure", None)
    if not callable(configure):
        raise AttributeError(f"Module '{module_path}' has no configure(row_actions) function")

    configure(row_actions)


def create_server(settings: RowActionsSettings) -> AsyncActionServer:
    """Build the host, the row actions root and the HTTP server."""
    host = LocalHost(secret=settings.nonce_secret, nonce_lifetime=settings.nonce_lifetime)
    row_actions = RowActions(host, settings)

    load_actions(row_actions, settings.actions_module)
    row_actions.activate()

    return AsyncActionServer(
        host,
        ajax_path=settings.ajax_path,
        bind_host=settings.server_host,
        port=settings.server_port,
        metrics_enabled=settings.metrics_enabled,
    )


def main() -> None:
    """Main entry point for the server."""
    settings = RowActionsSettings()
    logger = setup_logging(settings.log_level, settings.log_format)

    logger.info(
        "Starting row actions server",
        version="1.0.0",
        actions_module=settings.actions_module,
    )

    server = create_server(settings)
    web.run_app(server.app, host=settings.server_host, port=settings.server_port, print=None)


if __name__ == "__main__":
    main()
