"""
Security dependencies for FastAPI.

This module provides dependency functions for FastAPI applications
to authenticate requests and restrict routes to certain roles.
"""

from typing import Any, Callable, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.config.base import BaseAppSettings
from blogapi.config.settings import get_request_settings
from blogapi.db.manager import get_db
from blogapi.errors.exceptions import (
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
)
from blogapi.models.user import User
from blogapi.repositories.users import UserRepository
from blogapi.security.tokens import decode_access_token

# Bearer scheme for token extraction; missing headers are reported by us
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_data(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: BaseAppSettings = Depends(get_request_settings),
) -> Dict[str, Any]:
    """
    Validate the access token and return its claims.

    Raises:
        UnauthorizedError: If no bearer token was sent
        ExpiredTokenError: If the token has expired
        InvalidTokenError: If the token is otherwise invalid
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(message="Missing bearer token")
    return decode_access_token(credentials.credentials, settings)


async def get_current_user(
    token_data: Dict[str, Any] = Depends(get_token_data),
    session: AsyncSession = Depends(get_db),
) -> User:
    """
    Load the user the access token was issued to.

    Raises:
        InvalidTokenError: If the user no longer exists
    """
    try:
        return await UserRepository(session).get_by_id(int(token_data["sub"]))
    except NotFoundError:
        raise InvalidTokenError(
            message="User not found", details={"user_id": token_data["sub"]}
        )


def require_roles(*roles: str) -> Callable[..., Any]:
    """
    Create a dependency that only lets the given roles through.

    The role is taken from the token's ``role`` claim.

    Example:
        ```python
        @router.delete("/users/{user_id}")
        async def delete_user(user: User = Depends(require_roles("admin"))):
            ...
        ```
    """
    allowed = set(roles)

    async def role_dependency(
        token_data: Dict[str, Any] = Depends(get_token_data),
        user: User = Depends(get_current_user),
    ) -> User:
        role = token_data.get("role")
        if role not in allowed:
            raise ForbiddenError(
                message="Insufficient role for this action",
                details={"required_roles": sorted(allowed), "role": role},
            )
        return user

    return role_dependency
