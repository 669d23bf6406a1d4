"""
VoteArena API - Main FastAPI Application.

Head-to-head voting service for ranked entities.

Provides endpoints for:
- Recording votes behind the abuse gate (CAPTCHA or session token)
- Fair matchup selection
- Aggregate vote totals
"""

import os
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from votearena import __version__
from votearena.api.dependencies import Services, build_services
from votearena.api.middleware import (
    CorsMiddleware,
    GatewayAuthMiddleware,
    RequestLoggingMiddleware,
    build_cors_headers,
)
from votearena.api.routes import matchup_router, vote_router
from votearena.api.schemas import HealthResponse
from votearena.config.settings import Settings, get_settings
from votearena.utils.logger_config import setup_logging

logger = logging.getLogger(__name__)


API_VERSION = __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    services: Services = app.state.services
    settings = services.settings

    # Startup
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Starting VoteArena API...")

    for warning in settings.missing_configuration():
        logger.warning(warning)

    yield

    # Shutdown
    logger.info("Shutting down VoteArena API...")
    await services.aclose()


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to build services from (global settings if omitted)
        services: Prebuilt service graph, mainly for tests

    Returns:
        Configured FastAPI instance
    """
    if services is None:
        services = build_services(settings or get_settings())
    settings = services.settings

    app = FastAPI(
        title="VoteArena API",
        description="""
# VoteArena - Head-to-head voting

Visitors are shown two startups with similar ratings and pick a winner
(or a draw). Each vote updates both ratings through the rating engine.

## Abuse protection

The first vote requires an hCaptcha token (`hcaptchaToken`). A successful
vote returns a `sessionToken`; present it on the next vote to skip the
CAPTCHA until it expires.
        """,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.services = services

    # Order matters - last added is outermost
    app.add_middleware(GatewayAuthMiddleware, jwt_secret=settings.supabase_jwt_secret)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorsMiddleware, allowed_origins=settings.allowed_origins)

    app.include_router(vote_router)
    app.include_router(matchup_router)

    # Root endpoint
    @app.get("/", tags=["root"])
    async def root():
        """API root - returns basic info."""
        return {
            "name": "VoteArena API",
            "version": API_VERSION,
            "description": "Head-to-head voting for ranked startups",
            "docs": "/docs",
            "health": "/health"
        }

    # Health check endpoint
    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["health"]
    )
    async def health_check():
        """
        Health check endpoint.

        Reports which collaborators are configured.
        """
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            store_configured=settings.store_configured,
            captcha_configured=bool(settings.hcaptcha_secret),
            session_tokens_enabled=bool(settings.session_secret),
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        # Runs outside CorsMiddleware, so CORS headers are added here
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers=build_cors_headers(request.headers.get("origin"), settings.allowed_origins),
        )

    return app


# Create the app instance
app = create_app()


# Entry point for running with uvicorn
if __name__ == "__main__":
    import uvicorn

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    reload = os.getenv("DEBUG", "false").lower() == "true"

    uvicorn.run(
        "votearena.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )
