from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.db.repository import BaseRepository
from blogapi.models.role import Role


class RoleRepository(BaseRepository[Role]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Role, session)

    async def get_by_name(self, name: str) -> Optional[Role]:
        return await self.find_one(Role.name == name)
