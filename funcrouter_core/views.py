"""Views - Template fetching and rendering.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from pathlib import Path
from string import Template
from typing import Any, Dict, Optional

from funcrouter_core.errors import ViewNotFound

logger = logging.getLogger(__name__)

_TRIM_CHARS = "/\\ "


class ViewRenderer:
    """Renders ``string.Template`` files from a views directory.

    Usage:
        views = ViewRenderer("templates")
        html = views.fetch_view("user.html", {"name": "Ada"})
    """

    def __init__(self, directory: str = ""):
        self.directory = directory

    def resolve(self, template: str) -> Path:
        """Path of a template, relative to the views directory if set."""
        if not self.directory:
            return Path(template)
        return Path(self.directory.rstrip(_TRIM_CHARS)) / template.strip(_TRIM_CHARS)

    def fetch_view(self, template: str, data: Optional[Dict[str, Any]] = None) -> str:
        """Render a template with ``$name`` placeholders filled from data.

        Raises:
            ViewNotFound: The template file does not exist
            KeyError: A placeholder has no value in data
        """
        path = self.resolve(template)
        if not path.is_file():
            raise ViewNotFound(str(path))

        logger.debug(f"Rendering view {path}")
        source = path.read_text(encoding="utf-8")
        return Template(source).substitute(data or {})


__all__ = [
    "ViewRenderer",
]
