"""
Password handling utilities.

This module provides functions for hashing and verifying passwords
using bcrypt through the passlib library, plus the strength rules
applied at registration.
"""

import re
from typing import List

from passlib.context import CryptContext  # type: ignore
from passlib.exc import UnknownHashError  # type: ignore

# Create a password context for bcrypt hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only looks at the first 72 bytes
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 72

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{3,30}$")
EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,}$")
_SPECIAL = re.compile(r"[^a-zA-Z0-9]")


def get_password_hash(password: str) -> str:
    """
    Generate a bcrypt hash for a plaintext password.

    Args:
        password: The plaintext password to hash

    Returns:
        The hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify that a plaintext password matches a hashed password.

    Args:
        plain_password: The plaintext password to verify
        hashed_password: The hashed password to check against

    Returns:
        True if the password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (UnknownHashError, ValueError):
        return False


def password_problems(password: str) -> List[str]:
    """
    List the strength rules a password breaks.

    Returns:
        Human readable problems, empty when the password is acceptable
    """
    problems = []
    if not MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH:
        problems.append(
            f"must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters"
        )
    if not re.search(r"[A-Z]", password):
        problems.append("must contain an uppercase letter")
    if not re.search(r"[a-z]", password):
        problems.append("must contain a lowercase letter")
    if not re.search(r"[0-9]", password):
        problems.append("must contain a digit")
    if not _SPECIAL.search(password):
        problems.append("must contain a special character")
    return problems


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_username(username: str) -> bool:
    return USERNAME_PATTERN.match(username) is not None


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(normalize_email(email)) is not None
