"""
Security module root.

Password hashing, stateless JWT access tokens and the FastAPI
dependencies that authenticate requests and check roles.

Limitations:
- Only password-based JWT authentication is included
- No refresh tokens or token revocation
- Roles are flat names; there is no permission system
"""

from blogapi.security.dependencies import (
    get_current_user,
    get_token_data,
    require_roles,
)
from blogapi.security.password import (
    get_password_hash,
    is_valid_email,
    is_valid_username,
    normalize_email,
    password_problems,
    verify_password,
)
from blogapi.security.tokens import create_access_token, decode_access_token

__all__ = [
    # Token functions
    "create_access_token",
    "decode_access_token",
    # Password utilities
    "get_password_hash",
    "verify_password",
    "password_problems",
    "normalize_email",
    "is_valid_username",
    "is_valid_email",
    # FastAPI dependencies
    "get_token_data",
    "get_current_user",
    "require_roles",
]
