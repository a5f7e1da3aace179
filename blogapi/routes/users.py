"""
User endpoints.

Listing, reading and updating need a valid access token; deleting a user
is reserved to admins.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.api.envelope import list_envelope
from blogapi.api.query import ListParams
from blogapi.config.base import BaseAppSettings
from blogapi.config.settings import get_request_settings
from blogapi.db.manager import get_db
from blogapi.models.user import User
from blogapi.schemas.response import DataResponse, ListResponse, MessageData
from blogapi.schemas.user import UserRead, UserUpdate
from blogapi.security.dependencies import get_current_user, require_roles
from blogapi.services.users import ADMIN_ROLE, USER_QUERY, UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(
    session: AsyncSession = Depends(get_db),
    settings: BaseAppSettings = Depends(get_request_settings),
) -> UserService:
    return UserService(session, settings)


@router.get(
    "",
    response_model=ListResponse[UserRead],
    response_model_exclude_unset=True,
    dependencies=[Depends(get_current_user)],
)
async def list_users(
    request: Request,
    params: ListParams = Depends(),
    service: UserService = Depends(get_user_service),
):
    page = await service.list(params)
    return list_envelope(request, page.map(UserRead.model_validate), USER_QUERY, params)


@router.get(
    "/{user_id}",
    response_model=DataResponse[UserRead],
    dependencies=[Depends(get_current_user)],
)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    user = await service.get(user_id)
    return {"data": UserRead.model_validate(user)}


@router.put("/{user_id}", response_model=DataResponse[UserRead])
async def update_user(
    user_id: int,
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update a user; non-admins may only update themselves."""
    user = await service.update(user_id, data, actor=current_user)
    return {"data": UserRead.model_validate(user)}


@router.delete(
    "/{user_id}",
    response_model=DataResponse[MessageData],
    dependencies=[Depends(require_roles(ADMIN_ROLE))],
)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    await service.delete(user_id)
    return {"data": {"message": "User deleted successfully"}}
