"""Pattern Compiler - Braced path patterns to anchored regexes.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from funcrouter_core.errors import PatternError

logger = logging.getLogger(__name__)

# {name} or {name:fragment}
PLACEHOLDER = re.compile(r"\{([A-Za-z0-9_]+)(?::([^{}]+))?\}")

# One or more characters excluding the segment separator
DEFAULT_FRAGMENT = r"[^/]+"


@dataclass(frozen=True)
class CompiledPattern:
    """A path pattern compiled to an anchored regex."""

    path: str
    regex: re.Pattern
    param_names: Tuple[str, ...] = ()

    @property
    def is_static(self) -> bool:
        """True when the pattern has no placeholders."""
        return not self.param_names

    def match(self, subject: str) -> Optional[Dict[str, str]]:
        """Match the whole subject.

        Returns:
            Captured parameters in left-to-right placeholder order,
            or None if the subject does not match
        """
        match = self.regex.fullmatch(subject)
        if match is None:
            return None
        return {name: match.group(name) for name in self.param_names}


def compile_pattern(path: str) -> CompiledPattern:
    """Compile a path pattern.

    Literal text is escaped, ``{name}`` becomes a named group matching
    one or more non-slash characters and ``{name:fragment}`` becomes a
    named group matching ``fragment`` verbatim.

    Example::

        '/user/{id:\\d+}/post/{slug}'
        -> '/user/(?P<id>\\d+)/post/(?P<slug>[^/]+)'

    Raises:
        PatternError: duplicate names, stray braces or an invalid fragment
    """
    param_names: List[str] = []
    regex_parts: List[str] = []
    position = 0

    for placeholder in PLACEHOLDER.finditer(path):
        regex_parts.append(_escape_literal(path, path[position:placeholder.start()]))

        name, fragment = placeholder.group(1), placeholder.group(2)
        if name in param_names:
            raise PatternError(path, f'duplicate placeholder "{name}"')
        param_names.append(name)

        if fragment is None:
            regex_parts.append(f"(?P<{name}>{DEFAULT_FRAGMENT})")
        else:
            _check_fragment(path, fragment)
            regex_parts.append(f"(?P<{name}>{fragment})")

        position = placeholder.end()

    regex_parts.append(_escape_literal(path, path[position:]))

    try:
        regex = re.compile("".join(regex_parts))
    except re.error as e:
        raise PatternError(path, str(e)) from e

    return CompiledPattern(path=path, regex=regex, param_names=tuple(param_names))


def _escape_literal(path: str, literal: str) -> str:
    """Escape literal text between placeholders."""
    if "{" in literal or "}" in literal:
        raise PatternError(path, "unbalanced brace")
    return re.escape(literal)


def _check_fragment(path: str, fragment: str) -> None:
    """Reject fragments that do not compile on their own."""
    try:
        re.compile(fragment)
    except re.error as e:
        raise PatternError(path, f'invalid fragment "{fragment}": {e}') from e


class PatternCompiler:
    """Caching pattern compiler.

    Compiled patterns are keyed by their path string, so routes sharing
    an effective path share one regex.

    Usage:
        compiler = PatternCompiler()
        pattern = compiler.compile("/user/{id}")
        pattern.match("/user/42")  # {"id": "42"}
    """

    def __init__(self):
        self._cache: Dict[str, CompiledPattern] = {}
        self._lock = threading.Lock()

    def compile(self, path: str) -> CompiledPattern:
        """Get compiled pattern (cached)."""
        pattern = self._cache.get(path)
        if pattern is not None:
            return pattern

        pattern = compile_pattern(path)
        with self._lock:
            self._cache.setdefault(path, pattern)
        logger.debug(f"Compiled {path} -> {pattern.regex.pattern}")
        return pattern

    def match(self, path: str, subject: str) -> Optional[Dict[str, str]]:
        """Compile path and match subject against it."""
        return self.compile(path).match(subject)

    def clear(self) -> None:
        """Drop all cached patterns."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


__all__ = [
    "PLACEHOLDER",
    "DEFAULT_FRAGMENT",
    "CompiledPattern",
    "compile_pattern",
    "PatternCompiler",
]
