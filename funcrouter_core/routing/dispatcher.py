"""Dispatcher - Resolve a request to a route and invoke its handler.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from funcrouter_core.errors import NoRouteMatched
from funcrouter_core.http.response import welcome_response
from funcrouter_core.routing.formatter import normalize_uri
from funcrouter_core.routing.router import normalize_method

if TYPE_CHECKING:
    from funcrouter_core.routing.router import Router

logger = logging.getLogger(__name__)


class Dispatcher:
    """One-shot request dispatcher.

    A dispatcher moves from idle to dispatched on its first call and
    never back. Every later call returns None without looking at its
    arguments. Servers handling many requests create one dispatcher
    per request through ``Router.dispatcher()``.

    Usage:
        dispatcher = Dispatcher(router)
        result = dispatcher.dispatch("GET", "/users/42?full=1")
    """

    def __init__(
        self,
        router: "Router",
        on_empty: Optional[Callable[[], Any]] = None,
    ):
        self.router = router
        self.on_empty = on_empty or welcome_response
        self._dispatched = False

    @property
    def dispatched(self) -> bool:
        """True once dispatch() has been called."""
        return self._dispatched

    def dispatch(self, method: str, uri: str) -> Any:
        """Invoke the handler of the first route matching the request.

        Args:
            method: HTTP request method
            uri: Raw request URI (query string and fragment are ignored)

        Returns:
            The handler's return value, the welcome response when no
            routes are registered, or None on repeated calls

        Raises:
            NoRouteMatched: No route of this method matches the URI
        """
        if self._dispatched:
            logger.debug(f"Dispatcher already used, ignoring {method} {uri}")
            return None
        self._dispatched = True

        if len(self.router) == 0:
            logger.info("No routes registered, sending welcome response")
            return self.on_empty()

        method = normalize_method(method)
        path = normalize_uri(uri)

        for route in self.router.routes_for(method):
            params = self.router.pattern_for(route).match(path)
            if params is None:
                continue

            logger.debug(f"{method} {path} matched {route.path} params={params}")
            return route.handler(params)

        logger.info(f"No route matches {method} {path}")
        raise NoRouteMatched(path, method)


__all__ = [
    "Dispatcher",
]
