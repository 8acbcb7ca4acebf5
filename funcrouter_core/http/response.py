"""Response - HTTP response object.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from funcrouter_core.errors import ResponseAlreadySent
from funcrouter_core.utils.helpers import merge_headers

JSON_CONTENT_TYPE = "application/json;charset=utf-8"
HTML_CONTENT_TYPE = "text/html;charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain;charset=utf-8"


@dataclass
class Response:
    """HTTP Response object.

    Status, headers and body are written at most once by send().
    """

    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    _sent: bool = field(default=False, repr=False, compare=False)

    # Common status messages
    STATUS_MESSAGES = {
        200: "OK",
        201: "Created",
        204: "No Content",
        301: "Moved Permanently",
        302: "Found",
        304: "Not Modified",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        500: "Internal Server Error",
    }

    @property
    def status_message(self) -> str:
        """Get status message."""
        return self.STATUS_MESSAGES.get(self.status, "Unknown")

    @property
    def is_success(self) -> bool:
        """Check if response is successful (2xx)."""
        return 200 <= self.status < 300

    @property
    def is_error(self) -> bool:
        """Check if response is error (4xx or 5xx)."""
        return self.status >= 400

    @property
    def sent(self) -> bool:
        return self._sent

    @property
    def wsgi_status(self) -> str:
        """Status line in WSGI form, e.g. "404 Not Found"."""
        return f"{self.status} {self.status_message}"

    def set_header(self, name: str, value: str) -> "Response":
        """Set header value."""
        self.headers[name] = value
        return self

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return default

    def wsgi_headers(self) -> List[Tuple[str, str]]:
        """Header list for start_response, Content-Length included."""
        headers = dict(self.headers)
        if "Content-Length" not in headers:
            headers["Content-Length"] = str(len(self.body))
        return list(headers.items())

    def to_bytes(self) -> bytes:
        """Convert to raw HTTP response."""
        lines = [f"HTTP/1.1 {self.status} {self.status_message}"]
        for key, value in self.wsgi_headers():
            lines.append(f"{key}: {value}")

        lines.append("")
        header_bytes = "\r\n".join(lines).encode()

        return header_bytes + b"\r\n" + self.body

    def send(self, stream: BinaryIO) -> None:
        """Write status, headers and body to a stream.

        Raises:
            ResponseAlreadySent: The response was already written
        """
        if self._sent:
            raise ResponseAlreadySent(f"Response {self.wsgi_status} was already sent")
        stream.write(self.to_bytes())
        self._sent = True

    @classmethod
    def json(
        cls,
        data: Any,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create pretty-printed JSON response."""
        body = json.dumps(data, indent=4, ensure_ascii=False).encode()
        resp_headers = merge_headers(headers, {"Content-Type": JSON_CONTENT_TYPE})
        return cls(status=status, body=body, headers=resp_headers)

    @classmethod
    def text(
        cls,
        text: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create text response."""
        resp_headers = merge_headers(headers, {"Content-Type": TEXT_CONTENT_TYPE})
        return cls(status=status, body=text.encode(), headers=resp_headers)

    @classmethod
    def html(
        cls,
        html: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create HTML response."""
        resp_headers = merge_headers(headers, {"Content-Type": HTML_CONTENT_TYPE})
        return cls(status=status, body=html.encode(), headers=resp_headers)

    @classmethod
    def redirect(
        cls,
        location: str,
        status: int = 302,
    ) -> "Response":
        """Create redirect response."""
        return cls(
            status=status,
            headers={"Location": location},
        )

    @classmethod
    def error(
        cls,
        status: int,
        message: Optional[str] = None,
    ) -> "Response":
        """Create JSON error response."""
        msg = message or cls.STATUS_MESSAGES.get(status, "Error")
        return cls.json({"error": msg}, status=status)


WELCOME_HINTS = [
    "Add routes using add_route() or the shortcuts get(), post(), put(), patch(), delete()",
    "Check your route configuration",
    "Ensure handlers are properly set up",
]


def welcome_response() -> Response:
    """Informational response sent when no routes are registered."""
    return Response.json({
        "message": "Welcome to funcrouter!",
        "status": "No routes registered",
        "hints": list(WELCOME_HINTS),
    })


__all__ = [
    "JSON_CONTENT_TYPE",
    "HTML_CONTENT_TYPE",
    "TEXT_CONTENT_TYPE",
    "Response",
    "welcome_response",
]
