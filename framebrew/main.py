"""FastAPI application entry point.

This module creates and configures the FastAPI application instance.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from framebrew import __version__
from framebrew.api.errors import register_exception_handlers
from framebrew.api.v1 import api_router
from framebrew.core.container import ApplicationContainer
from framebrew.core.container import container as default_container
from framebrew.core.logging import get_logger, setup_logging

logger = get_logger(__name__)

APP_VERSION = __version__


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Handles startup and shutdown events for the FastAPI application.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    container: ApplicationContainer = app.state.container
    config = container.config()
    database = container.database()
    # Startup
    logger.info("Starting FrameBrew application", env=config.app_env)

    # Initialize database (only in development with available DB)
    if config.is_development:
        try:
            if await database.check_connection():
                await database.create_all()
                await container.services.organization_service().ensure(
                    config.default_org_id, config.default_org_name
                )
                logger.info("Database initialized")
            else:
                logger.warning("Database connection not available, skipping initialization")
        except Exception as e:
            logger.warning(
                "Database initialization skipped", error=str(e), hint="Use migrations in production"
            )

    yield

    # Shutdown
    logger.info("Shutting down FrameBrew application")
    await container.progression_driver().shutdown()
    container.event_bus().clear()
    await database.dispose()
    logger.info("Cleanup complete")


def create_app(container: ApplicationContainer | None = None) -> FastAPI:
    """Build the FastAPI application around a container.

    Args:
        container: Dependency container (default: the global container)

    Returns:
        Configured FastAPI application
    """
    container = container or default_container
    config = container.config()
    setup_logging()

    app = FastAPI(
        title=config.app_name,
        description="Short-form video creation, review and generation backend",
        version=APP_VERSION,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
        lifespan=lifespan,
    )
    app.state.container = container

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    # Health check endpoint
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint.

        Returns:
            Health status
        """
        database_ok = await container.database().check_connection()
        return {
            "status": "healthy" if database_ok else "degraded",
            "app": config.app_name,
            "env": config.app_env,
            "database": "ok" if database_ok else "unavailable",
        }

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint.

        Returns:
            Welcome message
        """
        return {
            "message": "Frame Brew API",
            "version": APP_VERSION,
            "docs": "/docs" if config.is_development else "disabled",
        }

    return app


app = create_app()
