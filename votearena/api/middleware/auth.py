"""
API middleware for gateway authentication.

Requests must carry a Supabase-issued JWT (the project's anon key, a user
access token or the service role key), either as a Bearer token or in the
``apikey`` header. Verification is stateless: the signature is checked with
the project's JWT secret, with no database or API calls.

When no JWT secret is configured the check is skipped (development mode).
"""

import logging
from typing import Optional
from dataclasses import dataclass

import jwt
from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

ACCEPTED_ROLES = {"anon", "authenticated", "service_role"}


# =============================================================================
# Caller Context (extracted from JWT)
# =============================================================================

@dataclass
class CallerContext:
    """
    Caller identity extracted from a gateway JWT.

    Attributes:
        role: anon, authenticated or service_role
        user_id: sub claim (user tokens only)
        exp: Token expiration timestamp
    """
    role: str
    user_id: Optional[str] = None
    exp: Optional[int] = None

    @classmethod
    def from_jwt_payload(cls, payload: dict) -> "CallerContext":
        return cls(
            role=payload.get("role", "anon"),
            user_id=payload.get("sub"),
            exp=payload.get("exp"),
        )


def verify_gateway_jwt(token: str, secret: str) -> Optional[CallerContext]:
    """
    Verify a Supabase JWT and extract the caller context.

    Args:
        token: The JWT presented by the client
        secret: Project JWT secret

    Returns:
        CallerContext if valid, None otherwise
    """
    if not token or not secret:
        return None

    try:
        # Anon and service keys carry no audience claim
        payload = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            options={
                "verify_aud": False,
                "verify_exp": True,
            },
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Gateway JWT expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.debug(f"Gateway JWT verification failed: {e}")
        return None

    if payload.get("role", "anon") not in ACCEPTED_ROLES:
        logger.debug(f"Gateway JWT has unexpected role: {payload.get('role')}")
        return None

    return CallerContext.from_jwt_payload(payload)


def extract_gateway_token(request: Request) -> Optional[str]:
    """Bearer token if present, else the apikey header."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None

    api_key = request.headers.get("apikey")
    return api_key.strip() if api_key and api_key.strip() else None


class GatewayAuthMiddleware(BaseHTTPMiddleware):
    """
    Stateless gateway JWT check.

    OPTIONS requests and public paths are exempt.
    """

    EXEMPT_PATHS = {"/", "/health", "/docs", "/redoc", "/openapi.json"}

    def __init__(self, app, jwt_secret: Optional[str] = None):
        super().__init__(app)
        self.jwt_secret = jwt_secret or None

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" or request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        # Development mode: no secret configured
        if not self.jwt_secret:
            return await call_next(request)

        token = extract_gateway_token(request)
        if token is None:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Authentication required.", "errorCode": "unauthorized"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        caller = verify_gateway_jwt(token, self.jwt_secret)
        if caller is None:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Invalid or expired token.", "errorCode": "unauthorized"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        request.state.caller = caller
        return await call_next(request)


def get_caller(request: Request) -> Optional[CallerContext]:
    """Caller context set by the middleware, None in development mode."""
    return getattr(request.state, "caller", None)
