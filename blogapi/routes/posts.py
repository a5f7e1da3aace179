"""
Post endpoints.

Reading is public; writing requires a valid access token.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.api.envelope import list_envelope
from blogapi.api.query import ListParams
from blogapi.db.manager import get_db
from blogapi.models.user import User
from blogapi.schemas.post import PostCreate, PostRead, PostUpdate
from blogapi.schemas.response import DataResponse, ListResponse, MessageData
from blogapi.security.dependencies import get_current_user
from blogapi.services.posts import POST_QUERY, PostService

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_service(session: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(session)


@router.get(
    "",
    response_model=ListResponse[PostRead],
    response_model_exclude_unset=True,
)
async def list_posts(
    request: Request,
    params: ListParams = Depends(),
    service: PostService = Depends(get_post_service),
):
    """List posts with search, sort and pagination."""
    page = await service.list(params)
    return list_envelope(request, page.map(PostRead.model_validate), POST_QUERY, params)


@router.get("/{slug}", response_model=DataResponse[PostRead])
async def get_post(slug: str, service: PostService = Depends(get_post_service)):
    post = await service.get(slug)
    return {"data": PostRead.model_validate(post)}


@router.post(
    "",
    response_model=DataResponse[PostRead],
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    data: PostCreate,
    user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    """Create a post authored by the current user."""
    post = await service.create(data, author_id=user.id)
    return {"data": PostRead.model_validate(post)}


@router.put(
    "/{slug}",
    response_model=DataResponse[PostRead],
    dependencies=[Depends(get_current_user)],
)
async def update_post(
    slug: str,
    data: PostUpdate,
    service: PostService = Depends(get_post_service),
):
    post = await service.update(slug, data)
    return {"data": PostRead.model_validate(post)}


@router.delete(
    "/{slug}",
    response_model=DataResponse[MessageData],
    dependencies=[Depends(get_current_user)],
)
async def delete_post(
    slug: str,
    service: PostService = Depends(get_post_service),
):
    await service.delete(slug)
    return {"data": {"message": "Post deleted successfully"}}
