"""
Pydantic schemas for requests and responses.

Limitations:
- Envelope structure is fixed; customization requires code changes
"""

from blogapi.schemas.post import PostCreate, PostRead, PostUpdate
from blogapi.schemas.response import (
    DataResponse,
    ErrorInfo,
    ErrorResponse,
    ListMetadata,
    ListResponse,
    MessageData,
    PaginationInfo,
    TokenResponse,
)
from blogapi.schemas.role import RoleCreate, RoleRead, RoleUpdate
from blogapi.schemas.user import (
    LoginRequest,
    LoginResponse,
    UserCreate,
    UserRead,
    UserUpdate,
)

__all__ = [
    # Response schemas
    "DataResponse",
    "MessageData",
    "ErrorResponse",
    "ErrorInfo",
    "ListResponse",
    "ListMetadata",
    "PaginationInfo",
    "TokenResponse",
    # Resources
    "PostCreate",
    "PostUpdate",
    "PostRead",
    "RoleCreate",
    "RoleUpdate",
    "RoleRead",
    "UserCreate",
    "UserUpdate",
    "UserRead",
    "LoginRequest",
    "LoginResponse",
]
