from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.db.repository import BaseRepository
from blogapi.models.user import User


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.find_one(User.email == email)

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self.find_one(User.username == username)
