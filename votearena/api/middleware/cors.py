"""
CORS handling for the vote API.

Echoes the request origin when it is allowed (configured or loopback),
otherwise falls back to the first configured origin, otherwise "*".
Preflight requests are answered here with 204 and no body.
"""

from typing import Dict, List, Optional
from urllib.parse import urlparse

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

LOOPBACK_HOSTS = {"localhost", "127.0.0.1"}

ALLOW_METHODS = "POST, GET, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization, apikey, x-client-info"
MAX_AGE = "86400"


def is_loopback_origin(origin: str) -> bool:
    try:
        hostname = urlparse(origin).hostname
    except ValueError:
        return False
    return hostname in LOOPBACK_HOSTS


def is_allowed_origin(origin: Optional[str], allowed_origins: List[str]) -> bool:
    """Whether origin is explicitly allowed or a loopback origin."""
    if not origin or not origin.strip():
        return False
    if origin in allowed_origins:
        return True
    return is_loopback_origin(origin)


def build_cors_headers(origin: Optional[str], allowed_origins: List[str]) -> Dict[str, str]:
    """CORS headers for a response to a request from origin."""
    if is_allowed_origin(origin, allowed_origins):
        allow_origin = origin
    elif allowed_origins:
        allow_origin = allowed_origins[0]
    else:
        allow_origin = "*"

    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Max-Age": MAX_AGE,
    }


class CorsMiddleware(BaseHTTPMiddleware):
    """Adds CORS headers to every response and answers preflight requests."""

    def __init__(self, app, allowed_origins: List[str] = None):
        super().__init__(app)
        self.allowed_origins = list(allowed_origins or [])

    async def dispatch(self, request: Request, call_next):
        headers = build_cors_headers(request.headers.get("origin"), self.allowed_origins)

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)

        response = await call_next(request)
        for key, value in headers.items():
            response.headers[key] = value
        return response
