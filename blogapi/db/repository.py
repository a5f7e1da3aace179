"""
Generic repository for SQLAlchemy models.

Repositories flush but never commit; the service owning the unit of work
calls ``commit``. SQLAlchemy errors are translated into application
errors: unique/foreign key violations and stale versions become
``ConflictError``, anything else ``DBError``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.sql import Select

from blogapi.api.pagination import Page, paginate
from blogapi.errors.exceptions import ConflictError, DBError, NotFoundError

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """
    Generic repository providing basic CRUD operations for SQLAlchemy models.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session
        self.logger = logging.getLogger(f"blogapi.repositories.{self.__class__.__name__}")

    @asynccontextmanager
    async def _errors(
        self, operation: str, rollback: bool = False
    ) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            if rollback:
                await self.session.rollback()
            raise self._translate(operation, e)

    def _translate(self, operation: str, e: SQLAlchemyError) -> Exception:
        if isinstance(e, IntegrityError):
            self.logger.info(f"Integrity conflict in {operation}: {e.orig}")
            return ConflictError(
                message=f"{self.model.__name__} conflicts with an existing record",
                details={"operation": operation},
            )
        if isinstance(e, StaleDataError):
            self.logger.info(f"Stale data in {operation}: {e}")
            return ConflictError(
                message=f"{self.model.__name__} was modified by another request",
                code="VERSION_CONFLICT",
                details={"operation": operation},
            )
        self.logger.error(f"Error in {operation}: {e}")
        return DBError(message=str(e), details={"error": str(e)})

    async def get_by_id(self, id: Any) -> ModelType:
        """Retrieve a single record by primary key."""
        async with self._errors("get_by_id"):
            instance: Optional[ModelType] = await self.session.get(self.model, id)
        if instance is None:
            raise NotFoundError(resource_type=self.model.__name__, resource_id=id)
        self.logger.debug(f"Fetched {self.model.__name__} id={id}")
        return instance

    async def find_one(self, *criteria: Any) -> Optional[ModelType]:
        """Return the first record matching all criteria, or None."""
        async with self._errors("find_one"):
            result = await self.session.execute(
                select(self.model).where(*criteria).limit(1)
            )
            return result.scalars().first()

    async def exists(self, *criteria: Any) -> bool:
        """Whether any record matches all criteria."""
        async with self._errors("exists"):
            result = await self.session.execute(
                select(exists().where(*criteria))
            )
            return bool(result.scalar())

    async def count(self, stmt: Optional[Select] = None) -> int:
        """Count the rows a statement would return, ignoring its ordering."""
        stmt = stmt if stmt is not None else select(self.model)
        async with self._errors("count"):
            result = await self.session.execute(
                select(func.count()).select_from(stmt.order_by(None).subquery())
            )
            return int(result.scalar_one())

    async def page(self, stmt: Select, page: int, limit: int) -> Page[ModelType]:
        """
        Count the matching rows, then fetch one page of them.

        Args:
            stmt: Filtered and ordered SELECT of this model
            page: Page number (1-indexed)
            limit: Rows per page
        """
        total = await self.count(stmt)
        window = paginate(total, page, limit)
        async with self._errors("page"):
            result = await self.session.execute(
                stmt.offset(window.offset).limit(window.limit)
            )
            items = list(result.scalars().all())
        self.logger.debug(
            f"Listed {len(items)} of {total} {self.model.__name__} rows (page {page})"
        )
        return Page(items=items, total=total, page=page, limit=limit, window=window)

    async def add(self, obj: ModelType) -> ModelType:
        """Add a new record and flush it to obtain its id."""
        async with self._errors("add", rollback=True):
            self.session.add(obj)
            await self.session.flush()
        self.logger.debug(f"Created {self.model.__name__} id={getattr(obj, 'id', None)}")
        return obj

    async def update(self, instance: ModelType, data: Dict[str, Any]) -> ModelType:
        """Apply ``data`` to an existing record and flush it."""
        async with self._errors("update", rollback=True):
            for key, value in data.items():
                setattr(instance, key, value)
            await self.session.flush()
        self.logger.debug(
            f"Updated {self.model.__name__} id={getattr(instance, 'id', None)}"
        )
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Delete a record."""
        async with self._errors("delete", rollback=True):
            await self.session.delete(instance)
            await self.session.flush()
        self.logger.debug(
            f"Deleted {self.model.__name__} id={getattr(instance, 'id', None)}"
        )

    async def commit(self) -> None:
        """Commit the session, rolling back if the commit fails."""
        async with self._errors("commit", rollback=True):
            await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
