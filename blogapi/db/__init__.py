"""
Database integration module for the blog API.

Features:
- Async SQLAlchemy integration (PostgreSQL+asyncpg or SQLite+aiosqlite)
- Repository pattern for CRUD and paginated queries
- FastAPI dependency for session access
- Lifecycle management for FastAPI apps

Limitations:
- Only async SQLAlchemy is supported (no sync engine/session)
- No migration helpers (tables are created from metadata)
"""

from blogapi.db.base import Base, BaseModel, metadata
from blogapi.db.engine import Database
from blogapi.db.manager import get_db, init_db, shutdown_db
from blogapi.db.repository import BaseRepository

__all__ = [
    "Database",
    "init_db",
    "shutdown_db",
    "get_db",
    "BaseRepository",
    "Base",
    "BaseModel",
    "metadata",
]
