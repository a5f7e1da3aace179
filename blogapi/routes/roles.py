"""
Role endpoints. All of them require a valid access token.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.api.envelope import list_envelope
from blogapi.api.query import ListParams
from blogapi.db.manager import get_db
from blogapi.schemas.response import DataResponse, ListResponse, MessageData
from blogapi.schemas.role import RoleCreate, RoleRead, RoleUpdate
from blogapi.security.dependencies import get_current_user
from blogapi.services.roles import ROLE_QUERY, RoleService

router = APIRouter(
    prefix="/roles",
    tags=["roles"],
    dependencies=[Depends(get_current_user)],
)


def get_role_service(session: AsyncSession = Depends(get_db)) -> RoleService:
    return RoleService(session)


@router.get(
    "",
    response_model=ListResponse[RoleRead],
    response_model_exclude_unset=True,
)
async def list_roles(
    request: Request,
    params: ListParams = Depends(),
    service: RoleService = Depends(get_role_service),
):
    page = await service.list(params)
    return list_envelope(request, page.map(RoleRead.model_validate), ROLE_QUERY, params)


@router.get("/{role_id}", response_model=DataResponse[RoleRead])
async def get_role(role_id: int, service: RoleService = Depends(get_role_service)):
    role = await service.get(role_id)
    return {"data": RoleRead.model_validate(role)}


@router.post(
    "",
    response_model=DataResponse[RoleRead],
    status_code=status.HTTP_201_CREATED,
)
async def create_role(data: RoleCreate, service: RoleService = Depends(get_role_service)):
    role = await service.create(data)
    return {"data": RoleRead.model_validate(role)}


@router.put("/{role_id}", response_model=DataResponse[RoleRead])
async def update_role(
    role_id: int,
    data: RoleUpdate,
    service: RoleService = Depends(get_role_service),
):
    role = await service.update(role_id, data)
    return {"data": RoleRead.model_validate(role)}


@router.delete("/{role_id}", response_model=DataResponse[MessageData])
async def delete_role(role_id: int, service: RoleService = Depends(get_role_service)):
    await service.delete(role_id)
    return {"data": {"message": "Role deleted successfully"}}
