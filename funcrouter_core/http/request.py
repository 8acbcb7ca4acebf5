"""Request - HTTP request object.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from http.cookies import SimpleCookie
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from funcrouter_core.utils.helpers import parse_query


def get_request_method(environ: Mapping[str, Any]) -> str:
    """Current request method from a WSGI/CGI environ."""
    return str(environ.get("REQUEST_METHOD", "GET"))


# RFC 3986 pchar characters besides unreserved ones, plus the separator
_PATH_SAFE = "/!$&'()*+,;=:@"


def get_request_uri(environ: Mapping[str, Any]) -> str:
    """Current request URI from a WSGI/CGI environ.

    The path is always percent-encoded, as sent by the client, so
    handlers get the same params whichever server runs them; decode
    them with ``urllib.parse.unquote`` where needed. REQUEST_URI is
    used as is. Without it the URI is rebuilt from PATH_INFO (which
    WSGI servers hand over decoded, as latin-1) by re-encoding it.
    """
    uri = environ.get("REQUEST_URI")
    if uri:
        return str(uri)

    path = str(environ.get("SCRIPT_NAME", "")) + str(environ.get("PATH_INFO", ""))
    try:
        raw = path.encode("latin-1")
    except UnicodeEncodeError:
        raw = path.encode("utf-8")
    path = quote(raw, safe=_PATH_SAFE)

    query = environ.get("QUERY_STRING", "")
    return f"{path or '/'}?{query}" if query else path or "/"


@dataclass
class Request:
    """HTTP Request object.

    Represents an incoming HTTP request with all its components.
    """

    method: str
    uri: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    cookies: Dict[str, str] = field(default_factory=dict)
    server: Dict[str, Any] = field(default_factory=dict)
    remote_addr: str = ""
    protocol: str = "HTTP/1.1"
    timestamp: float = field(default_factory=time.time)

    @property
    def path(self) -> str:
        """URI without query string."""
        return self.uri.split("?", 1)[0]

    @property
    def query_string(self) -> str:
        if "?" not in self.uri:
            return ""
        return self.uri.split("?", 1)[1].split("#", 1)[0]

    @property
    def query(self) -> Dict[str, str]:
        """Parsed query string."""
        return parse_query(self.query_string)

    @property
    def content_type(self) -> str:
        """Get Content-Type header."""
        return self.get_header("Content-Type")

    @property
    def is_json(self) -> bool:
        """Check if request is JSON."""
        return "application/json" in self.content_type

    def json(self) -> Any:
        """Parse body as JSON."""
        return json.loads(self.body.decode())

    def text(self) -> str:
        """Get body as text."""
        return self.body.decode()

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        for key, value in self.headers.items():
            if key.lower() == name.strip().lower():
                return value
        return default

    def get_query(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Query parameter by name, or all of them when key is None."""
        return _lookup(self.query, key, default)

    def get_post(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Form-encoded body field by name, or all of them."""
        form = {}
        if "application/x-www-form-urlencoded" in self.content_type:
            form = parse_query(self.body.decode())
        return _lookup(form, key, default)

    def get_server(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Server/environ variable by name, or all of them."""
        return _lookup(self.server, key, default)

    def get_cookie(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Cookie by name, or all of them."""
        return _lookup(self.cookies, key, default)

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> "Request":
        """Build a request from a WSGI/CGI environ."""
        headers = {}
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                headers[key[5:].replace("_", "-").title()] = value
        if environ.get("CONTENT_TYPE"):
            headers["Content-Type"] = environ["CONTENT_TYPE"]
        if environ.get("CONTENT_LENGTH"):
            headers["Content-Length"] = environ["CONTENT_LENGTH"]

        body = b""
        stream = environ.get("wsgi.input")
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        if stream is not None and length > 0:
            body = stream.read(length)

        return cls(
            method=get_request_method(environ),
            uri=get_request_uri(environ),
            headers=headers,
            body=body,
            cookies=_parse_cookies(environ.get("HTTP_COOKIE", "")),
            server=dict(environ),
            remote_addr=environ.get("REMOTE_ADDR", ""),
            protocol=environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
        )

    @classmethod
    def from_raw(cls, data: bytes) -> "Request":
        """Parse request from raw HTTP data."""
        lines = data.split(b"\r\n")

        # Parse request line
        request_line = lines[0].decode()
        parts = request_line.split(" ")
        method = parts[0]
        uri = parts[1] if len(parts) > 1 else "/"
        protocol = parts[2] if len(parts) > 2 else "HTTP/1.1"

        # Parse headers
        headers = {}
        body_start = 0
        for i, line in enumerate(lines[1:], 1):
            if line == b"":
                body_start = i + 1
                break
            if b":" in line:
                key, value = line.decode().split(":", 1)
                headers[key.strip()] = value.strip()

        body = b"\r\n".join(lines[body_start:]) if body_start else b""

        request = cls(
            method=method,
            uri=uri,
            headers=headers,
            body=body,
            protocol=protocol,
        )
        request.cookies = _parse_cookies(request.get_header("Cookie"))
        return request


def _lookup(values: Mapping[str, Any], key: Optional[str], default: Any) -> Any:
    if key is None:
        return dict(values)
    return values.get(key.strip(), default)


def _parse_cookies(header: str) -> Dict[str, str]:
    if not header:
        return {}
    cookie = SimpleCookie()
    cookie.load(header)
    return {name: morsel.value for name, morsel in cookie.items()}


__all__ = [
    "Request",
    "get_request_method",
    "get_request_uri",
]
