"""
Registration and login. Both endpoints are public.
"""

from fastapi import APIRouter, Depends, status

from blogapi.routes.users import get_user_service
from blogapi.schemas.response import DataResponse
from blogapi.schemas.user import LoginRequest, LoginResponse, UserCreate, UserRead
from blogapi.services.users import UserService

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=DataResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
)
async def register(data: UserCreate, service: UserService = Depends(get_user_service)):
    """Create an account. Without ``role_id`` the default role is assigned."""
    user = await service.register(data)
    return {"data": UserRead.model_validate(user)}


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, service: UserService = Depends(get_user_service)):
    """Exchange email and password for an access token."""
    return await service.login(data)
