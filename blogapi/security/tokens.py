"""
Stateless JWT access tokens.

Tokens carry the user id (``sub``), the role name (``role``), a token
type, a unique ``jti`` and the standard ``iat``/``exp``/``aud``/``iss``
claims. Nothing is stored server side; a token stays valid until it
expires.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import jwt  # type: ignore

from blogapi.config.base import BaseAppSettings
from blogapi.errors.exceptions import ExpiredTokenError, InvalidTokenError
from blogapi.logging import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"


def encode_jwt(payload: Dict[str, Any], settings: BaseAppSettings) -> str:
    return jwt.encode(
        payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )


def create_access_token(
    user_id: int,
    role: str,
    settings: BaseAppSettings,
    expires_delta: Optional[timedelta] = None,
) -> Tuple[str, int]:
    """
    Issue an access token for a user.

    Args:
        user_id: Subject of the token
        role: Role name embedded for authorization checks
        settings: Application settings holding the signing configuration
        expires_delta: Lifetime override, JWT_EXPIRATION_HOURS by default

    Returns:
        The encoded token and its lifetime in seconds
    """
    lifetime = expires_delta or timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + lifetime,
        "aud": settings.JWT_AUDIENCE,
        "iss": settings.JWT_ISSUER,
    }
    token = encode_jwt(payload, settings)
    logger.debug(f"Issued access token {payload['jti']} for user {user_id}")
    return token, int(lifetime.total_seconds())


def decode_access_token(token: str, settings: BaseAppSettings) -> Dict[str, Any]:
    """
    Validate an access token and return its claims.

    Raises:
        ExpiredTokenError: If the token has expired
        InvalidTokenError: For any other signature, claim or format problem
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={
                "verify_aud": bool(settings.JWT_AUDIENCE),
                "verify_iss": bool(settings.JWT_ISSUER),
                "require": ["exp", "iat", "sub", "jti"],
            },
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token used")
        raise ExpiredTokenError()
    except jwt.PyJWTError as e:
        logger.warning(f"Token validation error: {e}")
        raise InvalidTokenError(
            message="Invalid token signature or format", details={"error": str(e)}
        )

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise InvalidTokenError(
            message=f"Invalid token type. Expected: {ACCESS_TOKEN_TYPE}",
            details={
                "expected_type": ACCESS_TOKEN_TYPE,
                "actual_type": payload.get("type", "unknown"),
            },
        )
    try:
        int(payload["sub"])
    except (TypeError, ValueError):
        raise InvalidTokenError(
            message="Token subject is not a user id",
            details={"error": "Invalid sub claim"},
        )
    return payload
