"""FastAPI application factory"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from core.config import Settings, get_settings
from core.dependencies import ServiceContainer, build_services
from core.errors import register_exception_handlers
from core.logging import setup_logging
from core.middleware import install_http_middleware
from core.rate_limit import install_rate_limiting
from routers import (
    auth_router,
    bot_router,
    commands_router,
    logs_router,
    servers_router,
    settings_router,
)

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle startup and shutdown"""
    services: ServiceContainer = app.state.services
    settings = services.settings

    # Startup
    logger.info("Starting dashboard API server")
    logger.info(f"Environment: {settings.environment}")
    if not settings.oauth_configured:
        logger.warning("Discord OAuth is not configured, login is disabled")
    if services.bot.bot_token is None:
        logger.warning("No bot token configured, serving stored data only")

    yield

    # Shutdown
    logger.info("Shutting down dashboard API server")
    try:
        await services.close()
    except Exception as e:
        logger.exception(f"Error during shutdown: {e}")


def create_app(
    settings: Settings | None = None,
    services: ServiceContainer | None = None,
) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = settings or get_settings()

    # Setup logging first
    setup_logging(settings)

    # Refuses to build a production app with the default session secret
    settings.ensure_production_safe()

    app = FastAPI(
        title="Orbital Dashboard API",
        description="API server for the Discord bot administration dashboard",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.state.services = services or build_services(settings)
    app.state.started_at = time.time()

    register_exception_handlers(app)
    install_rate_limiting(app, settings)
    install_http_middleware(app)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(auth_router.router)
    app.include_router(bot_router.router)
    app.include_router(servers_router.router)
    app.include_router(commands_router.router)
    app.include_router(logs_router.router)
    app.include_router(settings_router.router)

    # Liveness probe, no external dependency
    @app.get("/health")
    async def health():
        """Liveness check"""
        return {
            "status": "healthy",
            "uptime_seconds": int(time.time() - app.state.started_at),
        }

    @app.get("/status")
    async def status():
        """Service info including whether a bot owner is established"""
        container: ServiceContainer = app.state.services
        return {
            "service": "orbital-dashboard-api",
            "version": APP_VERSION,
            "uptime_seconds": int(time.time() - app.state.started_at),
            "bot_configured": container.bot.owner_id is not None,
            "oauth_configured": container.discord_api.is_configured,
            "environment": settings.environment,
        }

    @app.api_route("/ping", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def ping():
        """Ping endpoint"""
        return "pong"

    logger.info("FastAPI application configured")

    return app
