"""Path Formatter - Canonical path strings.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import string

# Characters trimmed from both ends of every path
_TRIM_CHARS = "/\\" + string.whitespace


def format_path(path: str) -> str:
    """Format a path into canonical form.

    Leading and trailing slashes, backslashes and whitespace are
    trimmed, then a single leading slash is added back. The root
    path and the empty string both become ``/``.

    Examples::

        format_path("users/")      -> "/users"
        format_path("  /api// ")   -> "/api"
        format_path("")            -> "/"
    """
    return "/" + path.strip(_TRIM_CHARS)


def join_paths(*parts: str) -> str:
    """Join path segments into one canonical path.

    Each part is formatted before concatenation, so empty parts
    and stray slashes never produce ``//``.
    """
    joined = "".join(format_path(part) for part in parts if part)
    return format_path(joined)


def normalize_uri(uri: str) -> str:
    """Reduce a raw request URI to the path matched against routes.

    The query string and fragment are dropped, then trailing slashes
    and backslashes are trimmed. The left side is kept as sent, so
    ``//users`` or ``users`` never match ``/users``.
    """
    path = uri.split("?", 1)[0]
    path = path.split("#", 1)[0]
    return path.rstrip("/\\") or "/"


__all__ = [
    "format_path",
    "join_paths",
    "normalize_uri",
]
