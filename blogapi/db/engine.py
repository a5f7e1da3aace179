"""
Database engine and session management for the blog API.

A ``Database`` owns one async engine and its session factory. The
application factory creates it during startup and keeps it on
``app.state.db``; there is no module-level engine.
"""

from contextlib import asynccontextmanager
from logging import Logger
from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from blogapi.config.base import BaseAppSettings
from blogapi.db.base import metadata
from blogapi.logging import ensure_logger


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Async engine plus session factory for one database URL.

    Args:
        settings: Application settings (DATABASE_URL, DB_ECHO, DB_POOL_SIZE)
        logger: Optional logger for database operations
    """

    def __init__(
        self, settings: BaseAppSettings, logger: Optional[Logger] = None
    ) -> None:
        self.log = ensure_logger(logger, __name__)
        self.url = make_url(settings.DATABASE_URL)

        engine_kwargs = {"echo": settings.DB_ECHO}
        # SQLite uses a static/null pool that does not accept pool_size
        if self.url.get_backend_name() != "sqlite":
            engine_kwargs["pool_size"] = settings.DB_POOL_SIZE

        self.log.debug(
            "Creating database engine for %s", self.url.render_as_string(hide_password=True)
        )
        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
        )
        if self.url.get_backend_name() == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async def create_all(self) -> None:
        """Create every table registered on the shared metadata."""
        # Import models so their tables are registered on the metadata
        import blogapi.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        self.log.debug("Database tables created")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Open a session, rolling back if the block raises.

        Yields:
            An AsyncSession bound to this database
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Dispose of the engine and its connection pool."""
        self.log.debug("Disposing database engine")
        await self.engine.dispose()
