"""
Database lifecycle and request dependency for the blog API.
"""

from logging import Logger
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.config.base import BaseAppSettings
from blogapi.db.engine import Database
from blogapi.db.seed import seed_default_roles
from blogapi.errors.exceptions import DBError
from blogapi.logging import ensure_logger


async def init_db(
    app: FastAPI,
    settings: BaseAppSettings,
    logger: Optional[Logger] = None,
) -> Database:
    """
    Create the application's Database and prepare the schema.

    - Stores the Database on ``app.state.db``
    - Creates missing tables when DB_CREATE_TABLES is on
    - Seeds the default roles
    """
    log = ensure_logger(logger, __name__, settings)

    db = Database(settings, log)
    app.state.db = db

    if settings.DB_CREATE_TABLES:
        await db.create_all()

    async with db.session() as session:
        await seed_default_roles(session, settings.DEFAULT_ROLES, log)

    log.info("Database engine initialized")
    return db


async def shutdown_db(app: FastAPI, logger: Optional[Logger] = None) -> None:
    """
    Dispose of the application's Database, if one was created.
    """
    log = ensure_logger(logger, __name__)

    db: Optional[Database] = getattr(app.state, "db", None)
    if db is not None:
        await db.dispose()
        app.state.db = None
        log.info("Database engine disposed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session is rolled back when the request fails; committing is
    left to the services.
    """
    db: Optional[Database] = getattr(request.app.state, "db", None)
    if db is None:
        raise DBError(message="Database not initialized")

    async with db.session() as session:
        yield session
