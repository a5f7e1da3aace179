"""
FastAPI application factory module.

``create_app`` builds a fully wired blog API: logging, error handlers,
CORS, the resource routers and a lifespan that owns the database engine.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from blogapi.config import BaseAppSettings, get_settings
from blogapi.db.manager import init_db, shutdown_db
from blogapi.errors import setup_errors
from blogapi.logging import configure_logging
from blogapi.middleware import setup_middlewares
from blogapi.routes import api_router


def create_app(settings: Optional[BaseAppSettings] = None) -> FastAPI:
    """
    Create and configure the blog API application.

    Args:
        settings: Optional application settings, if not provided will be loaded
                 from environment

    Returns:
        The configured FastAPI application
    """
    app_settings = settings or get_settings()
    logger = configure_logging(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await init_db(app, app_settings, logger)
        logger.info(f"{app_settings.APP_NAME} {app_settings.VERSION} started")
        try:
            yield
        finally:
            await shutdown_db(app, logger)
            logger.info(f"{app_settings.APP_NAME} stopped")

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.VERSION,
        debug=app_settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # Configure error handling (required)
    setup_errors(app, app_settings, logger)
    # Configure middleware (CORS)
    setup_middlewares(app, app_settings, logger)

    app.include_router(api_router, prefix=app_settings.API_PREFIX)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app
