"""
Request and response schemas for users and authentication.

Format rules for usernames, emails and passwords are checked by the user
service so that every broken rule is reported in one response.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from blogapi.schemas.response.token import TokenResponse


class UserCreate(BaseModel):
    """Body of ``POST /register``."""

    username: str
    email: str
    password: str
    role_id: Optional[int] = None


class UserUpdate(BaseModel):
    """
    Body of ``PUT /users/{id}``.

    Omitted fields and empty strings leave the stored value unchanged.
    Changing ``role_id`` is reserved to admins.
    """

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role_id: Optional[int] = None


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role_id: int
    role: str = Field(validation_alias=AliasChoices("role_name", "role"))
    created_at: datetime
    updated_at: datetime


class LoginRequest(BaseModel):
    """Body of ``POST /login``."""

    email: str
    password: str


class LoginResponse(TokenResponse):
    """Access token plus the authenticated user."""

    user: UserRead
