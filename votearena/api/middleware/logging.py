"""
API middleware for request logging.

One line per request with the caller's network identity. Preflights are
logged at debug, server errors at warning.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from votearena.core.network import request_context_from

logger = logging.getLogger(__name__)


def _level_for(method: str, status_code: int) -> int:
    if method == "OPTIONS":
        return logging.DEBUG
    if status_code >= 500:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, caller and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        context = request_context_from(
            request.headers,
            request.client.host if request.client else None,
        )
        logger.log(
            _level_for(request.method, response.status_code),
            f"{request.method} {request.url.path} "
            f"status={response.status_code} "
            f"client={context.network_id} "
            f"duration={duration_ms:.1f}ms",
        )
        return response
