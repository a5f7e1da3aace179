"""
Post use cases.

Slugs are assigned here, before the row is written. A generated slug is
probed for uniqueness first; if the insert still collides with a row
written concurrently, the transaction is rolled back and the slug is
probed again, up to ``SLUG_WRITE_ATTEMPTS`` times.
"""

from logging import Logger
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.api.filtering import FieldType, FilterOperator, SearchField
from blogapi.api.pagination import Page
from blogapi.api.query import ListParams, ResourceQuery
from blogapi.api.sorting import SortDirection, SortDirective, SortField
from blogapi.errors.exceptions import ConflictError
from blogapi.logging import ensure_logger
from blogapi.models.post import Post
from blogapi.repositories.posts import PostRepository
from blogapi.schemas.post import PostCreate, PostUpdate
from blogapi.slugs import (
    FALLBACK_SLUG,
    ensure_unique_async,
    generate_slug,
    require_valid_slug,
)

SLUG_WRITE_ATTEMPTS = 3

POST_QUERY = ResourceQuery(
    Post,
    search_fields=[
        SearchField(
            "title",
            FieldType.STRING,
            "Post title",
            [FilterOperator.EQ, FilterOperator.LIKE, FilterOperator.NLIKE],
        ),
        SearchField("slug", FieldType.STRING, "Post slug", [FilterOperator.EQ]),
        SearchField(
            "author_id",
            FieldType.INTEGER,
            "Id of the author",
            [FilterOperator.EQ, FilterOperator.NE, FilterOperator.IN, FilterOperator.NIN],
        ),
        SearchField(
            "created_at",
            FieldType.DATE,
            "Creation date",
            [FilterOperator.GT, FilterOperator.GTE, FilterOperator.LT, FilterOperator.LTE],
        ),
    ],
    sort_fields=[
        SortField("title", "Sort by title"),
        SortField("created_at", "Sort by creation date"),
    ],
    default_sort=[SortDirective("created_at", SortDirection.DESC)],
)


def _clean(value: Optional[str]) -> Optional[str]:
    """Treat missing and blank strings alike."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class PostService:
    """
    Create, read, update and delete posts.

    Args:
        session: Database session for the current request
        logger: Optional logger
    """

    def __init__(self, session: AsyncSession, logger: Optional[Logger] = None):
        self.repo = PostRepository(session)
        self.log = ensure_logger(logger, __name__)

    async def list(self, params: ListParams) -> Page[Post]:
        stmt = POST_QUERY.apply(select(Post), params.searches, params.sorts)
        return await self.repo.page(stmt, params.page, params.limit)

    async def get(self, slug: str) -> Post:
        return await self.repo.get_by_slug(slug)

    async def _free_slug(self, base: str, exclude_id: Optional[int] = None) -> str:
        async def taken(candidate: str) -> bool:
            return await self.repo.slug_exists(candidate, exclude_id=exclude_id)

        return await ensure_unique_async(base, taken)

    async def _claim_custom_slug(self, slug: str, exclude_id: Optional[int] = None) -> str:
        require_valid_slug(slug)
        if await self.repo.slug_exists(slug, exclude_id=exclude_id):
            raise ConflictError(
                message=f"Slug '{slug}' is already in use",
                code="SLUG_TAKEN",
                details={"slug": slug},
            )
        return slug

    async def create(self, data: PostCreate, author_id: int) -> Post:
        """
        Store a new post.

        Raises:
            SlugValidationFailed: If a supplied slug has the wrong shape
            ConflictError: If a supplied slug is taken, or no unique slug
                could be written
        """
        title = data.title.strip()
        custom_slug = _clean(data.slug)
        if custom_slug:
            await self._claim_custom_slug(custom_slug)
        base = generate_slug(title) or FALLBACK_SLUG

        for attempt in range(1, SLUG_WRITE_ATTEMPTS + 1):
            slug = custom_slug or await self._free_slug(base)
            post = Post(title=title, slug=slug, content=data.content, author_id=author_id)
            try:
                await self.repo.add(post)
                await self.repo.commit()
            except ConflictError:
                if custom_slug:
                    raise ConflictError(
                        message=f"Slug '{custom_slug}' is already in use",
                        code="SLUG_TAKEN",
                        details={"slug": custom_slug},
                    )
                self.log.warning(
                    f"Slug '{slug}' was taken concurrently "
                    f"(attempt {attempt}/{SLUG_WRITE_ATTEMPTS})"
                )
                continue
            self.log.info(f"Created post '{post.slug}' (id={post.id})")
            return post

        raise ConflictError(
            message=f"Could not store a unique slug for '{title}'",
            code="SLUG_CONFLICT",
            details={"base": base, "attempts": SLUG_WRITE_ATTEMPTS},
        )

    def _check_version(self, post: Post, expected: Optional[int]) -> None:
        if expected is not None and expected != post.version:
            raise ConflictError(
                message="Post was modified since it was read",
                code="VERSION_CONFLICT",
                details={"expected_version": expected, "current_version": post.version},
            )

    async def _changes(self, post: Post, data: PostUpdate) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}

        title = _clean(data.title)
        if title and title != post.title:
            changes["title"] = title

        if data.content and data.content.strip():
            if data.content != post.content:
                changes["content"] = data.content

        custom_slug = _clean(data.slug)
        if custom_slug:
            if custom_slug != post.slug:
                changes["slug"] = await self._claim_custom_slug(custom_slug, post.id)
        elif "title" in changes:
            base = generate_slug(title) or FALLBACK_SLUG
            changes["slug"] = await self._free_slug(base, exclude_id=post.id)

        return changes

    async def update(self, slug: str, data: PostUpdate) -> Post:
        """
        Apply the non-empty fields of ``data`` to the post at ``slug``.

        A changed title re-derives the slug unless one is supplied.

        Raises:
            NotFoundError: If no post has this slug
            ConflictError: On a version mismatch, a taken slug, or a
                concurrent modification
        """
        post = await self.repo.get_by_slug(slug)
        post_id = post.id
        generated = _clean(data.slug) is None

        for attempt in range(1, SLUG_WRITE_ATTEMPTS + 1):
            self._check_version(post, data.version)
            changes = await self._changes(post, data)
            if not changes:
                return post

            try:
                await self.repo.update(post, changes)
                await self.repo.commit()
            except ConflictError as exc:
                if exc.code != "CONFLICT" or not generated or "slug" not in changes:
                    raise
                self.log.warning(
                    f"Slug '{changes['slug']}' was taken concurrently "
                    f"(attempt {attempt}/{SLUG_WRITE_ATTEMPTS})"
                )
                post = await self.repo.get_by_id(post_id)
                continue
            self.log.info(f"Updated post '{post.slug}' (id={post_id})")
            return post

        raise ConflictError(
            message="Could not store a unique slug for the new title",
            code="SLUG_CONFLICT",
            details={"attempts": SLUG_WRITE_ATTEMPTS},
        )

    async def delete(self, slug: str) -> None:
        post = await self.repo.get_by_slug(slug)
        post_id = post.id
        await self.repo.delete(post)
        await self.repo.commit()
        self.log.info(f"Deleted post '{slug}' (id={post_id})")
