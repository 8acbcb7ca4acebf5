"""funcrouter - Function-registration HTTP router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

funcrouter maps (method, path-pattern, handler) registrations to incoming
requests:
- Braced path parameters with optional inline regex fragments
- Nested route groups and a global router prefix
- Ordered first-match dispatch, at most once per dispatcher
- Request/response helpers, CORS headers and template views
- WSGI adapter for long-lived servers

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────┐
│                              funcrouter                                  │
├─────────────────────────────────────────────────────────────────────────┤
│                                                                          │
│  Registration:                                                           │
│    add_route / add_route_group ──▶ format_path ──▶ Router (per method)  │
│                                                                          │
│  Dispatch:                                                               │
│    (method, uri) ──▶ normalize_uri ──▶ method bucket ──▶ compile_pattern │
│                  ──▶ first match ──▶ handler(params)                     │
│                                                                          │
│  ┌────────────────┐  ┌────────────────┐  ┌───────────────────────────┐  │
│  │    Routing     │  │      HTTP      │  │          Utils            │  │
│  │                │  │                │  │                           │  │
│  │ - Formatter    │  │ - Request      │  │ - Config (file/env)       │  │
│  │ - Matcher      │  │ - Response     │  │ - Logging setup           │  │
│  │ - Router       │  │ - CORS         │  │ - Helpers                 │  │
│  │ - Dispatcher   │  │ - WSGI adapter │  │                           │  │
│  └────────────────┘  └────────────────┘  └───────────────────────────┘  │
│                                                                          │
└─────────────────────────────────────────────────────────────────────────┘

Usage:
    from funcrouter_core import Router

    router = Router()
    router.set_prefix("/api")

    router.get("/users/{id:\\d+}", show_user)
    router.add_route_group("/admin", lambda group: group.delete("/users/{id}", drop_user))

    router.dispatch("GET", "/api/users/42?expand=1")
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Errors
from funcrouter_core.errors import (
    RouterError,
    NoRouteMatched,
    PatternError,
    ViewNotFound,
    ResponseAlreadySent,
)

# Utils
from funcrouter_core.utils.config import Config, load_config, configure_logging

# Routing
from funcrouter_core.routing.formatter import format_path, join_paths
from funcrouter_core.routing.matcher import CompiledPattern, PatternCompiler, compile_pattern
from funcrouter_core.routing.router import Route, RouteGroup, RouteMatch, Router
from funcrouter_core.routing.dispatcher import Dispatcher

# HTTP
from funcrouter_core.http.request import Request
from funcrouter_core.http.response import Response
from funcrouter_core.http.cors import CORSConfig, CORSPolicy
from funcrouter_core.http.wsgi import RouterApp, serve

# Views
from funcrouter_core.views import ViewRenderer

__all__ = [
    # Version
    "__version__",
    # Errors
    "RouterError",
    "NoRouteMatched",
    "PatternError",
    "ViewNotFound",
    "ResponseAlreadySent",
    # Utils
    "Config",
    "load_config",
    "configure_logging",
    # Routing
    "format_path",
    "join_paths",
    "CompiledPattern",
    "PatternCompiler",
    "compile_pattern",
    "Route",
    "RouteGroup",
    "RouteMatch",
    "Router",
    "Dispatcher",
    # HTTP
    "Request",
    "Response",
    "CORSConfig",
    "CORSPolicy",
    "RouterApp",
    "serve",
    # Views
    "ViewRenderer",
]
