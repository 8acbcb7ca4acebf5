"""HTTP module - Request, response and CORS collaborators."""

from funcrouter_core.http.request import Request, get_request_method, get_request_uri
from funcrouter_core.http.response import Response, welcome_response
from funcrouter_core.http.cors import CORSConfig, CORSPolicy

__all__ = [
    "Request",
    "Response",
    "CORSConfig",
    "CORSPolicy",
    "get_request_method",
    "get_request_uri",
    "welcome_response",
]
