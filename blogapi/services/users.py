"""
User registration, authentication and management.

Passwords are hashed here, right before a user row is written.
"""

from logging import Logger
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.api.filtering import FieldType, FilterOperator, SearchField
from blogapi.api.pagination import Page
from blogapi.api.query import ListParams, ResourceQuery
from blogapi.api.sorting import SortDirection, SortDirective, SortField
from blogapi.config.base import BaseAppSettings
from blogapi.errors.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from blogapi.logging import ensure_logger
from blogapi.models.role import Role
from blogapi.models.user import User
from blogapi.repositories.roles import RoleRepository
from blogapi.repositories.users import UserRepository
from blogapi.schemas.user import LoginRequest, UserCreate, UserRead, UserUpdate
from blogapi.security.password import (
    get_password_hash,
    is_valid_email,
    is_valid_username,
    normalize_email,
    password_problems,
    verify_password,
)
from blogapi.security.tokens import create_access_token

ADMIN_ROLE = "admin"

_STRING_OPERATORS = [FilterOperator.EQ, FilterOperator.LIKE, FilterOperator.NLIKE]
_DATE_OPERATORS = [
    FilterOperator.GT,
    FilterOperator.GTE,
    FilterOperator.LT,
    FilterOperator.LTE,
]

USER_QUERY = ResourceQuery(
    User,
    search_fields=[
        SearchField("username", FieldType.STRING, "Username", _STRING_OPERATORS),
        SearchField("email", FieldType.STRING, "Email address", _STRING_OPERATORS),
        SearchField(
            "role_id",
            FieldType.INTEGER,
            "Id of the user's role",
            [FilterOperator.EQ, FilterOperator.NE, FilterOperator.IN, FilterOperator.NIN],
        ),
        SearchField("created_at", FieldType.DATE, "Registration date", _DATE_OPERATORS),
    ],
    sort_fields=[
        SortField("username", "Sort by username"),
        SortField("email", "Sort by email address"),
        SortField("created_at", "Sort by registration date"),
    ],
    default_sort=[SortDirective("created_at", SortDirection.DESC)],
)


def _field_error(field: str, message: str) -> Dict[str, str]:
    return {"field": field, "code": "INVALID_FIELD", "message": message}


def _validate_user_fields(
    username: Optional[str], email: Optional[str], password: Optional[str]
) -> None:
    """
    Check the format rules of the given fields; None means not supplied.

    Raises:
        ValidationError: Listing every broken rule
    """
    errors: List[Dict[str, str]] = []
    if username is not None and not is_valid_username(username):
        errors.append(
            _field_error(
                "username",
                "Username must be 3-30 letters, digits, underscores or hyphens",
            )
        )
    if email is not None and not is_valid_email(email):
        errors.append(_field_error("email", "Email address is not valid"))
    if password is not None:
        for problem in password_problems(password):
            errors.append(_field_error("password", f"Password {problem}"))
    if errors:
        raise ValidationError(message="Invalid user data", fields=errors)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class UserService:
    """
    Register, authenticate and manage users.

    Args:
        session: Database session for the current request
        settings: Application settings (default role, token configuration)
        logger: Optional logger
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: BaseAppSettings,
        logger: Optional[Logger] = None,
    ):
        self.repo = UserRepository(session)
        self.roles = RoleRepository(session)
        self.settings = settings
        self.log = ensure_logger(logger, __name__)

    async def _resolve_role(self, role_id: Optional[int]) -> Role:
        """Role with ``role_id``, or the default role when none (or 0) is given."""
        if not role_id:
            role = await self.roles.get_by_name(self.settings.DEFAULT_ROLE)
            if role is None:
                raise NotFoundError(
                    message=f"Default role '{self.settings.DEFAULT_ROLE}' does not exist"
                )
            return role
        try:
            return await self.roles.get_by_id(role_id)
        except NotFoundError:
            raise BadRequestError(
                message="The specified role does not exist",
                code="INVALID_ROLE",
                details={"role_id": role_id},
            )

    async def _ensure_available(
        self,
        username: Optional[str],
        email: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> None:
        if username is not None:
            existing = await self.repo.get_by_username(username)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(
                    message="Username is already registered",
                    code="USERNAME_TAKEN",
                    details={"username": username},
                )
        if email is not None:
            existing = await self.repo.get_by_email(email)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(
                    message="Email is already registered",
                    code="EMAIL_TAKEN",
                    details={"email": email},
                )

    async def register(self, data: UserCreate) -> User:
        """
        Create a user with a hashed password.

        Raises:
            ValidationError: If username, email or password break the rules
            BadRequestError: If ``role_id`` names no role
            ConflictError: If the username or email is taken
        """
        username = data.username.strip()
        email = normalize_email(data.email)
        _validate_user_fields(username, email, data.password)

        role = await self._resolve_role(data.role_id)
        await self._ensure_available(username, email)

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(data.password),
            role_id=role.id,
        )
        user.role = role
        await self.repo.add(user)
        await self.repo.commit()
        self.log.info(f"Registered user '{username}' (id={user.id}, role={role.name})")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Raises:
            InvalidCredentialsError: If the email is unknown or the password wrong
        """
        user = await self.repo.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            self.log.info("Failed login attempt")
            raise InvalidCredentialsError()
        return user

    async def login(self, data: LoginRequest) -> Dict[str, Any]:
        """Authenticate and issue an access token."""
        user = await self.authenticate(data.email, data.password)
        token, expires_in = create_access_token(user.id, user.role_name, self.settings)
        self.log.info(f"User {user.id} logged in")
        return {
            "access_token": token,
            "token_type": "bearer",
            "expires_in": expires_in,
            "user": UserRead.model_validate(user),
        }

    async def list(self, params: ListParams) -> Page[User]:
        stmt = USER_QUERY.apply(select(User), params.searches, params.sorts)
        return await self.repo.page(stmt, params.page, params.limit)

    async def get(self, user_id: int) -> User:
        return await self.repo.get_by_id(user_id)

    async def update(self, user_id: int, data: UserUpdate, actor: User) -> User:
        """
        Update a user.

        Users may only update themselves unless they are admins, and only
        admins may change a role.

        Raises:
            ForbiddenError: If the actor may not make this change
            NotFoundError: If the user does not exist
            ValidationError: If a new value breaks the format rules
            ConflictError: If the new username or email is taken
        """
        is_admin = actor.role_name == ADMIN_ROLE
        if actor.id != user_id and not is_admin:
            raise ForbiddenError(message="You can only update your own account")

        user = await self.repo.get_by_id(user_id)

        username = _clean(data.username)
        email = normalize_email(data.email) if _clean(data.email) else None
        password = data.password or None
        _validate_user_fields(username, email, password)

        changes: Dict[str, Any] = {}
        if username and username != user.username:
            changes["username"] = username
        if email and email != user.email:
            changes["email"] = email
        if password:
            changes["password_hash"] = get_password_hash(password)

        role: Optional[Role] = None
        if data.role_id and data.role_id != user.role_id:
            if not is_admin:
                raise ForbiddenError(message="Only admins can change roles")
            role = await self._resolve_role(data.role_id)
            changes["role_id"] = role.id

        if not changes:
            return user

        await self._ensure_available(
            changes.get("username"), changes.get("email"), exclude_id=user.id
        )
        await self.repo.update(user, changes)
        if role is not None:
            user.role = role
        await self.repo.commit()
        self.log.info(f"Updated user {user_id}: {sorted(changes)}")
        return user

    async def delete(self, user_id: int) -> None:
        user = await self.repo.get_by_id(user_id)
        await self.repo.delete(user)
        await self.repo.commit()
        self.log.info(f"Deleted user {user_id}")
