"""Router - Route table and registration.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from funcrouter_core.routing.formatter import format_path, join_paths, normalize_uri
from funcrouter_core.routing.matcher import CompiledPattern, PatternCompiler
from funcrouter_core.utils.helpers import pipe

if TYPE_CHECKING:
    from funcrouter_core.routing.dispatcher import Dispatcher
    from funcrouter_core.utils.config import Config

logger = logging.getLogger(__name__)

HTTP_GET = "GET"
HTTP_POST = "POST"
HTTP_PUT = "PUT"
HTTP_PATCH = "PATCH"
HTTP_DELETE = "DELETE"

Handler = Callable[[Dict[str, str]], Any]

normalize_method = pipe(str.strip, str.upper)


@dataclass(frozen=True)
class Route:
    """Route definition.

    ``path`` carries the group prefix but never the router prefix.
    """

    path: str
    method: str
    handler: Handler


@dataclass(frozen=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: Dict[str, str]
    path: str


class Registrar:
    """Shared registration API for routers and route groups.

    Subclasses provide the router that stores routes and the group
    prefix composed in front of every path they register.
    """

    _router: "Router"
    _group_prefix: str = ""

    @property
    def group_prefix(self) -> str:
        """Prefix applied to paths registered through this object."""
        return self._group_prefix

    def add_route(self, method: str, path: str, handler: Handler) -> "Registrar":
        """Add a route.

        Args:
            method: HTTP method (trimmed and uppercased)
            path: Route path, may contain {name} or {name:regex}
            handler: Called with the dict of path parameters
        """
        full_path = join_paths(self._group_prefix, path)
        self._router._register(method, full_path, handler)
        return self

    def add_route_group(
        self,
        prefix: str,
        callback: Callable[["RouteGroup"], Any],
    ) -> "Registrar":
        """Register a group of routes under a shared prefix.

        The callback receives a RouteGroup bound to the composed prefix
        and runs synchronously. Groups nest through the group they get.

        Usage:
            def admin(group):
                group.get("/users", list_users)
                group.add_route_group("/reports", reports)

            router.add_route_group("/admin", admin)
        """
        group = RouteGroup(self._router, join_paths(self._group_prefix, prefix))
        callback(group)
        return self

    def _shortcut(self, method: str, path: str, handler: Optional[Handler]) -> Any:
        if handler is not None:
            return self.add_route(method, path, handler)

        def decorator(fn: Handler) -> Handler:
            self.add_route(method, path, fn)
            return fn

        return decorator

    def get(self, path: str, handler: Optional[Handler] = None) -> Any:
        """Add GET route (decorator when handler is omitted)."""
        return self._shortcut(HTTP_GET, path, handler)

    def post(self, path: str, handler: Optional[Handler] = None) -> Any:
        """Add POST route (decorator when handler is omitted)."""
        return self._shortcut(HTTP_POST, path, handler)

    def put(self, path: str, handler: Optional[Handler] = None) -> Any:
        """Add PUT route (decorator when handler is omitted)."""
        return self._shortcut(HTTP_PUT, path, handler)

    def patch(self, path: str, handler: Optional[Handler] = None) -> Any:
        """Add PATCH route (decorator when handler is omitted)."""
        return self._shortcut(HTTP_PATCH, path, handler)

    def delete(self, path: str, handler: Optional[Handler] = None) -> Any:
        """Add DELETE route (decorator when handler is omitted)."""
        return self._shortcut(HTTP_DELETE, path, handler)


class RouteGroup(Registrar):
    """Registrar bound to a composed group prefix."""

    def __init__(self, router: "Router", prefix: str):
        self._router = router
        self._group_prefix = prefix

    def __repr__(self) -> str:
        return f"RouteGroup(prefix={self._group_prefix!r})"


class Router(Registrar):
    """Request Router.

    Features:
    - Braced path parameters (/users/{id}, /users/{id:\\d+})
    - Nested route groups
    - Global router prefix, applied once at dispatch time
    - First registered match wins

    Usage:
        router = Router()
        router.set_prefix("/api")
        router.get("/users/{id}", show_user)
        router.add_route_group("/admin", lambda g: g.delete("/users/{id}", drop_user))

        router.dispatch("GET", "/api/users/42")
    """

    def __init__(self, prefix: str = ""):
        self._router = self
        self._routes: Dict[str, List[Route]] = {}
        self._prefix = ""
        self._lock = threading.RLock()
        self._compiler = PatternCompiler()
        self._dispatcher: Optional["Dispatcher"] = None
        if prefix:
            self.set_prefix(prefix)

    @classmethod
    def from_config(cls, config: "Config") -> "Router":
        """Create a router using the configured prefix."""
        return cls(prefix=config.router_prefix)

    @property
    def prefix(self) -> str:
        """Global router prefix ("" until set)."""
        return self._prefix

    def set_prefix(self, prefix: str) -> "Router":
        """Set the global prefix for every registered route.

        Raises:
            PatternError: The prefix is malformed or clashes with the
                placeholders of an already registered route
        """
        new_prefix = format_path(prefix)
        with self._lock:
            self._compiler.compile(new_prefix)
            for route in self.get_routes():
                self._compiler.compile(join_paths(new_prefix, route.path))
            self._prefix = new_prefix

        logger.debug(f"Router prefix set to {self._prefix}")
        return self

    set_router_prefix = set_prefix

    @property
    def compiler(self) -> PatternCompiler:
        return self._compiler

    def _register(self, method: str, full_path: str, handler: Handler) -> Route:
        """Append a route to its method bucket."""
        if not callable(handler):
            raise TypeError(f"Handler for {full_path} is not callable: {handler!r}")

        method = normalize_method(method)
        if not method:
            raise ValueError(f"Empty HTTP method for route {full_path}")

        route = Route(path=full_path, method=method, handler=handler)
        with self._lock:
            # Fail fast on malformed patterns, with and without the prefix
            self._compiler.compile(full_path)
            self.pattern_for(route)
            self._routes.setdefault(method, []).append(route)

        logger.debug(f"Registered {method} {full_path}")
        return route

    def effective_path(self, route: Route) -> str:
        """Path a route is matched against (router prefix applied)."""
        return join_paths(self._prefix, route.path)

    def pattern_for(self, route: Route) -> CompiledPattern:
        """Compiled pattern for a route's effective path."""
        return self._compiler.compile(self.effective_path(route))

    def routes_for(self, method: str) -> List[Route]:
        """Routes registered for a method, in registration order."""
        with self._lock:
            return list(self._routes.get(normalize_method(method), []))

    def get_routes(self, method: Optional[str] = None) -> List[Route]:
        """Get all routes, or only those of one method."""
        if method is not None:
            return self.routes_for(method)
        with self._lock:
            return [route for bucket in self._routes.values() for route in bucket]

    def methods(self) -> List[str]:
        """Methods that have at least one route."""
        with self._lock:
            return [method for method, bucket in self._routes.items() if bucket]

    def match(self, method: str, uri: str) -> Optional[RouteMatch]:
        """Match a request to a route without invoking it.

        Args:
            method: HTTP method
            uri: Raw request URI, query string allowed

        Returns:
            RouteMatch for the first matching route, None otherwise
        """
        path = normalize_uri(uri)
        for route in self.routes_for(method):
            params = self.pattern_for(route).match(path)
            if params is not None:
                return RouteMatch(route=route, params=params, path=path)
        return None

    def dispatcher(self, **kwargs) -> "Dispatcher":
        """Create a fresh dispatcher (one per request in servers)."""
        from funcrouter_core.routing.dispatcher import Dispatcher

        return Dispatcher(self, **kwargs)

    def dispatch(self, method: str, uri: str) -> Any:
        """Dispatch once through this router's own dispatcher.

        Later calls are no-ops. See Dispatcher.dispatch.
        """
        if self._dispatcher is None:
            self._dispatcher = self.dispatcher()
        return self._dispatcher.dispatch(method, uri)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(bucket) for bucket in self._routes.values())

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Router(prefix={self._prefix!r}, routes={len(self)})"


__all__ = [
    "HTTP_GET",
    "HTTP_POST",
    "HTTP_PUT",
    "HTTP_PATCH",
    "HTTP_DELETE",
    "Handler",
    "Route",
    "RouteMatch",
    "Registrar",
    "RouteGroup",
    "Router",
    "normalize_method",
]
