"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import os
from functools import reduce
from types import SimpleNamespace
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import parse_qsl


def pipe(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose functions left to right.

    Example::

        pipe(str.strip, str.lower, str.title)("  jOHn dOE  ")  -> "John Doe"
    """
    def run(initial: Any) -> Any:
        return reduce(lambda value, fn: fn(value), fns, initial)

    return run


def to_namespace(mapping: Mapping[str, Any]) -> SimpleNamespace:
    """Expose mapping keys as attributes."""
    return SimpleNamespace(**dict(mapping))


def env(name: str, default: Any = None) -> Any:
    """Get an environment variable, or default if unset."""
    return os.environ.get(name.strip(), default)


def parse_query(query_string: str) -> Dict[str, str]:
    """Parse a query string into a single-valued dict.

    The last value wins for repeated keys.
    """
    return dict(parse_qsl(query_string, keep_blank_values=True))


def merge_headers(
    *headers_list: Optional[Mapping[str, str]],
    case_insensitive: bool = True,
) -> Dict[str, str]:
    """Merge multiple header dictionaries (later ones win)."""
    result: Dict[str, str] = {}

    for headers in headers_list:
        if not headers:
            continue
        for key, value in headers.items():
            if case_insensitive:
                for existing in list(result):
                    if existing.lower() == key.lower():
                        del result[existing]
            result[key] = value

    return result


__all__ = [
    "pipe",
    "to_namespace",
    "env",
    "parse_query",
    "merge_headers",
]
