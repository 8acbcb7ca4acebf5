"""WSGI Adapter - Serve a Router from a long-lived process.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional

from funcrouter_core.errors import NoRouteMatched
from funcrouter_core.http.cors import CORSConfig, CORSPolicy
from funcrouter_core.http.request import Request
from funcrouter_core.http.response import Response
from funcrouter_core.views import ViewRenderer

if TYPE_CHECKING:
    from funcrouter_core.routing.router import Router
    from funcrouter_core.utils.config import Config

logger = logging.getLogger(__name__)


def to_response(result: Any) -> Response:
    """Coerce a handler's return value into a Response."""
    if isinstance(result, Response):
        return result
    if result is None:
        return Response(status=204)
    if isinstance(result, (dict, list)):
        return Response.json(result)
    if isinstance(result, str):
        return Response.html(result)
    if isinstance(result, bytes):
        return Response(body=result, headers={"Content-Type": "application/octet-stream"})
    raise TypeError(f"Cannot convert handler result of type {type(result).__name__} to a response")


class RouterApp:
    """WSGI application around a Router.

    Each request gets its own Dispatcher, so the at-most-once guard
    applies per request. Handlers receive only the path parameters;
    the current Request is available as ``app.request`` while the
    handler runs.

    Usage:
        router = Router()
        router.get("/hello/{name}", lambda params: {"hello": params["name"]})
        app = RouterApp(router)
        serve(app, port=8080)
    """

    def __init__(
        self,
        router: "Router",
        cors: Optional[CORSPolicy] = None,
        views: Optional[ViewRenderer] = None,
    ):
        self.router = router
        self.cors = cors
        self.views = views or ViewRenderer()
        self._local = threading.local()

    @property
    def request(self) -> Optional[Request]:
        """Request being handled by the current thread."""
        return getattr(self._local, "request", None)

    @classmethod
    def from_config(cls, router: "Router", config: "Config") -> "RouterApp":
        """Build an app with CORS and views taken from config."""
        cors = None
        if config.cors_enabled:
            cors = CORSPolicy(CORSConfig(
                origin=config.cors_origin,
                methods=list(config.cors_methods),
                headers=list(config.cors_headers),
                max_age=config.cors_max_age,
            ))
        return cls(router, cors=cors, views=ViewRenderer(config.views_directory))

    def handle(self, request: Request) -> Response:
        """Handle one request through CORS and routing.

        Returns:
            Response from the handler or an error response
        """
        if self.cors is not None:
            preflight = self.cors.preflight(request.method)
            if preflight is not None:
                return preflight

        self._local.request = request
        try:
            result = self.router.dispatcher().dispatch(request.method, request.uri)
            response = to_response(result)
        except NoRouteMatched as e:
            response = Response.json({"error": str(e), "uri": e.uri}, status=404)
        except Exception:
            logger.exception(f"Handler failed for {request.method} {request.path}")
            response = Response.error(500)
        finally:
            self._local.request = None

        if self.cors is not None:
            self.cors.apply(response)
        return response

    def __call__(
        self,
        environ: Dict[str, Any],
        start_response: Callable[[str, List[Any]], Any],
    ) -> Iterable[bytes]:
        start = time.time()
        request = Request.from_environ(environ)
        response = self.handle(request)

        duration_ms = (time.time() - start) * 1000
        logger.info(f"{request.method} {request.path} -> {response.status} ({duration_ms:.2f}ms)")

        start_response(response.wsgi_status, response.wsgi_headers())
        return [response.body]


def serve(app: RouterApp, host: str = "127.0.0.1", port: int = 8080) -> None:
    """Run the app on the wsgiref development server."""
    from wsgiref.simple_server import make_server

    logger.info(f"Serving on http://{host}:{port}")
    with make_server(host, port, app) as server:
        server.serve_forever()


__all__ = [
    "RouterApp",
    "serve",
    "to_response",
]
