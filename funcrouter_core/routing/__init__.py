"""Routing module - Route table, pattern compilation and dispatch."""

from funcrouter_core.routing.formatter import format_path, join_paths, normalize_uri
from funcrouter_core.routing.matcher import CompiledPattern, PatternCompiler, compile_pattern
from funcrouter_core.routing.router import Route, RouteGroup, RouteMatch, Router
from funcrouter_core.routing.dispatcher import Dispatcher

__all__ = [
    "format_path",
    "join_paths",
    "normalize_uri",
    "CompiledPattern",
    "PatternCompiler",
    "compile_pattern",
    "Route",
    "RouteGroup",
    "RouteMatch",
    "Router",
    "Dispatcher",
]
