"""HTTP endpoint serving async row action requests."""

import json
from typing import Any, Dict, Optional

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
import structlog

from ..host.local import LocalHost


logger = structlog.get_logger(__name__)


class AsyncActionServer:
    """aiohttp server routing async requests to the host's async handlers."""

    def __init__(
        self,
        host: LocalHost,
        ajax_path: str = "/admin-ajax",
        bind_host: str = "127.0.0.1",
        port: int = 8080,
        metrics_enabled: bool = True,
    ) -> None:
        """Initialize the async action server.

        Args:
            host: Host whose async handlers serve the requests
            ajax_path: Path of the async endpoint
            bind_host: Address to listen on
            port: Port to listen on
            metrics_enabled: Expose Prometheus metrics on /metrics
        """
        self.host = host
        self.ajax_path = ajax_path
        self.bind_host = bind_host
        self.port = port
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self.site: Optional[web.TCPSite] = None

        # Setup routes
        self.app.router.add_post(ajax_path, self._ajax_handler)
        if metrics_enabled:
            self.app.router.add_get("/metrics", self._metrics_handler)

        logger.info("Initialized AsyncActionServer", path=ajax_path, port=port)

    async def start(self) -> None:
        """Start the server."""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        self.site = web.TCPSite(self.runner, self.bind_host, self.port)
        await self.site.start()

        logger.info("Async action server started", host=self.bind_host, port=self.port)

    async def stop(self) -> None:
        """Stop the server."""
        if self.site:
            await self.site.stop()
            self.site = None

        if self.runner:
            await self.runner.cleanup()
            self.runner = None

        logger.info("Async action server stopped")

    async def _read_params(self, request: web.Request) -> Dict[str, Any]:
        if request.content_type == "application/json":
            try:
                body = await request.json()
            except json.JSONDecodeError:
                return {}
            return body if isinstance(body, dict) else {}

        form = await request.post()
        return {key: form.get(key) for key in form.keys()}

    async def _ajax_handler(self, request: web.Request) -> web.Response:
        """Handle async row action requests."""
        params = await self._read_params(request)
        name = str(params.get("action") or "")

        if not self.host.has_ajax_handler(name):
            return web.json_response(
                {"success": False, "data": {"message": "Unknown action"}}, status=400
            )

        response = await self.host.dispatch_ajax(name, params)
        return web.json_response(response.to_payload(), status=response.status)

    async def _metrics_handler(self, request: web.Request) -> web.Response:
        """Handle Prometheus metrics exposition."""
        try:
            return web.Response(body=generate_latest(), headers={"Content-Type": CONTENT_TYPE_LATEST})
        except Exception as e:
            logger.error("Error generating metrics", error=str(e))
            return web.json_response(
                {"error": f"Failed to generate metrics: {str(e)}"},
                status=500
            )
