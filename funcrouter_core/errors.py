"""Errors - Router exception hierarchy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Optional


class RouterError(Exception):
    """Base class for all router errors."""


class NoRouteMatched(RouterError):
    """No registered route matches the request URI.

    Raised by dispatch. The caller decides the HTTP response,
    usually a 404.
    """

    def __init__(self, uri: str, method: Optional[str] = None):
        self.uri = uri
        self.method = method
        super().__init__(f'The request URI "{uri}" does not match any route.')


class PatternError(RouterError, ValueError):
    """Malformed path pattern."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f'Invalid route pattern "{path}": {reason}')


class ViewNotFound(RouterError, FileNotFoundError):
    """Template file does not exist."""

    def __init__(self, template: str):
        self.template = template
        super().__init__(f'Template file "{template}" does not exist.')


class ResponseAlreadySent(RouterError, RuntimeError):
    """Response.send() called a second time."""


__all__ = [
    "RouterError",
    "NoRouteMatched",
    "PatternError",
    "ViewNotFound",
    "ResponseAlreadySent",
]
