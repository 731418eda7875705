from __future__ import annotations

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable
from urllib.parse import urlparse

from ..config.loader import AppConfig
from ..services.photos import photos_response
from ..services.profile import ApiResponse, RowSource, profile_response

logger = logging.getLogger(__name__)

"""HTTP endpoints for the homepage: /api/profile and /api/photos.

Every request runs its own fetch-normalize cycle; nothing is cached.
"""

__all__ = [
    "ROUTES",
    "ProfileRequestHandler",
    "make_server",
]

ROUTES: dict[str, Callable[..., ApiResponse]] = {
    "/api/profile": profile_response,
    "/api/photos": photos_response,
}


class ProfileRequestHandler(BaseHTTPRequestHandler):
    config: AppConfig  # set by make_server
    client_factory: Callable[[], RowSource | None] = staticmethod(lambda: None)  # type: ignore[assignment]

    def do_GET(self) -> None:
        path = urlparse(self.path).path.rstrip("/")
        route = ROUTES.get(path)
        if route is None:
            self._send(ApiResponse(status=404, body={"error": "not found"}))
            return
        self._send(route(self.config, self.client_factory()))

    def _send(self, response: ApiResponse) -> None:
        payload = json.dumps(response.body, ensure_ascii=False).encode("utf-8")
        self.send_response(response.status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args) -> None:
        logger.debug(f"{self.address_string()} {format % args}")


def make_server(
    config: AppConfig,
    host: str | None = None,
    port: int | None = None,
    client_factory: Callable[[], RowSource | None] | None = None,
) -> ThreadingHTTPServer:
    """Create (but do not start) the HTTP server bound to host/port."""
    attrs: dict[str, object] = {"config": config}
    if client_factory is not None:
        attrs["client_factory"] = staticmethod(client_factory)
    handler = type("BoundProfileRequestHandler", (ProfileRequestHandler,), attrs)
    return ThreadingHTTPServer(
        (host or config.server.host, config.server.port if port is None else port), handler
    )
