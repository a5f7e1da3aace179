from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.db.repository import BaseRepository
from blogapi.errors.exceptions import NotFoundError
from blogapi.models.post import Post


class PostRepository(BaseRepository[Post]):
    """Posts, looked up by their slug."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Post, session)

    async def get_by_slug(self, slug: str) -> Post:
        post = await self.find_one(Post.slug == slug)
        if post is None:
            raise NotFoundError(resource_type="Post", resource_id=slug)
        return post

    async def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        """Whether another post already uses ``slug``."""
        criteria = [Post.slug == slug]
        if exclude_id is not None:
            criteria.append(Post.id != exclude_id)
        return await self.exists(*criteria)
