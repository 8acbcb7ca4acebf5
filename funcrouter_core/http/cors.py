"""CORS - Cross-Origin Resource Sharing headers.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from funcrouter_core.http.response import Response

logger = logging.getLogger(__name__)


@dataclass
class CORSConfig:
    """CORS configuration."""

    origin: str = "*"
    methods: List[str] = field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    headers: List[str] = field(
        default_factory=lambda: ["Content-Type", "Authorization"]
    )
    max_age: int = 86400


class CORSPolicy:
    """Emits CORS headers.

    OPTIONS (pre-flight) requests get a 204 carrying all four
    Access-Control headers. Any other response gets origin, methods
    and headers added.
    """

    def __init__(self, config: Optional[CORSConfig] = None):
        self.config = config or CORSConfig()

    def headers(self, preflight: bool = False) -> Dict[str, str]:
        """Access-Control headers for a response."""
        headers = {
            "Access-Control-Allow-Origin": self.config.origin,
            "Access-Control-Allow-Methods": ", ".join(self.config.methods),
            "Access-Control-Allow-Headers": ", ".join(self.config.headers),
        }
        if preflight:
            headers["Access-Control-Max-Age"] = str(self.config.max_age)
        return headers

    def preflight(self, method: str) -> Optional[Response]:
        """Pre-flight response for OPTIONS requests, None otherwise."""
        if method.strip().upper() != "OPTIONS":
            return None
        logger.debug("Answering CORS pre-flight request")
        return Response(status=204, headers=self.headers(preflight=True))

    def apply(self, response: Response) -> Response:
        """Add CORS headers to a response."""
        for name, value in self.headers().items():
            response.set_header(name, value)
        return response


__all__ = [
    "CORSConfig",
    "CORSPolicy",
]
