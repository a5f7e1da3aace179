"""
Role management.
"""

from logging import Logger
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.api.filtering import FieldType, FilterOperator, SearchField
from blogapi.api.pagination import Page
from blogapi.api.query import ListParams, ResourceQuery
from blogapi.api.sorting import SortDirection, SortDirective, SortField
from blogapi.errors.exceptions import ConflictError, ValidationError
from blogapi.logging import ensure_logger
from blogapi.models.role import Role
from blogapi.models.user import User
from blogapi.repositories.roles import RoleRepository
from blogapi.repositories.users import UserRepository
from blogapi.schemas.role import RoleCreate, RoleUpdate

ROLE_QUERY = ResourceQuery(
    Role,
    search_fields=[
        SearchField(
            "name",
            FieldType.STRING,
            "Role name",
            [
                FilterOperator.EQ,
                FilterOperator.LIKE,
                FilterOperator.NLIKE,
                FilterOperator.IN,
                FilterOperator.NIN,
            ],
        ),
        SearchField(
            "description",
            FieldType.STRING,
            "Role description",
            [FilterOperator.LIKE, FilterOperator.NLIKE],
        ),
        SearchField(
            "created_at",
            FieldType.DATE,
            "Creation date",
            [FilterOperator.GT, FilterOperator.GTE, FilterOperator.LT, FilterOperator.LTE],
        ),
    ],
    sort_fields=[
        SortField("name", "Sort by name"),
        SortField("created_at", "Sort by creation date"),
    ],
    default_sort=[SortDirective("name", SortDirection.ASC)],
)


class RoleService:
    def __init__(self, session: AsyncSession, logger: Optional[Logger] = None):
        self.repo = RoleRepository(session)
        self.users = UserRepository(session)
        self.log = ensure_logger(logger, __name__)

    async def _ensure_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        existing = await self.repo.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                message=f"Role '{name}' already exists",
                code="ROLE_EXISTS",
                details={"name": name},
            )

    async def list(self, params: ListParams) -> Page[Role]:
        stmt = ROLE_QUERY.apply(select(Role), params.searches, params.sorts)
        return await self.repo.page(stmt, params.page, params.limit)

    async def get(self, role_id: int) -> Role:
        return await self.repo.get_by_id(role_id)

    async def create(self, data: RoleCreate) -> Role:
        """
        Raises:
            ValidationError: If the name is blank
            ConflictError: If a role with this name exists
        """
        name = data.name.strip()
        if not name:
            raise ValidationError(
                message="Invalid role data",
                fields=[{"field": "name", "code": "INVALID_FIELD", "message": "Name is required"}],
            )
        await self._ensure_name_free(name)
        role = Role(name=name, description=data.description)
        await self.repo.add(role)
        await self.repo.commit()
        self.log.info(f"Created role '{name}' (id={role.id})")
        return role

    async def update(self, role_id: int, data: RoleUpdate) -> Role:
        role = await self.repo.get_by_id(role_id)

        changes: Dict[str, Any] = {}
        name = (data.name or "").strip()
        if name and name != role.name:
            await self._ensure_name_free(name, exclude_id=role_id)
            changes["name"] = name
        if data.description is not None and data.description != role.description:
            changes["description"] = data.description

        if changes:
            await self.repo.update(role, changes)
            await self.repo.commit()
            self.log.info(f"Updated role {role_id}: {sorted(changes)}")
        return role

    async def delete(self, role_id: int) -> None:
        """
        Raises:
            ConflictError: If users still hold the role
        """
        role = await self.repo.get_by_id(role_id)
        if await self.users.exists(User.role_id == role_id):
            raise ConflictError(
                message=f"Role '{role.name}' is assigned to users",
                code="ROLE_IN_USE",
                details={"role_id": role_id},
            )
        await self.repo.delete(role)
        await self.repo.commit()
        self.log.info(f"Deleted role {role_id}")
