"""
VoteArena API Middleware.

Provides CORS, gateway authentication and request logging middleware.
"""

from votearena.api.middleware.cors import (
    CorsMiddleware,
    build_cors_headers,
    is_allowed_origin,
)
from votearena.api.middleware.auth import (
    GatewayAuthMiddleware,
    CallerContext,
    verify_gateway_jwt,
    get_caller,
)
from votearena.api.middleware.logging import RequestLoggingMiddleware

__all__ = [
    # Middleware
    "CorsMiddleware",
    "GatewayAuthMiddleware",
    "RequestLoggingMiddleware",
    # Auth types
    "CallerContext",
    # Utilities
    "build_cors_headers",
    "is_allowed_origin",
    "verify_gateway_jwt",
    "get_caller",
]
