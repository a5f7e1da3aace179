"""
Error handling module for the blog API.

This module provides standardized error handling including custom exceptions,
error responses, and exception handlers.

Limitations:
- Error response structure is fixed; customization requires code changes.
- Only HTTP-style errors are supported (exceptions must inherit from AppError or be handled by FastAPI).
"""

from blogapi.errors.exceptions import (
    AppError,
    BadRequestError,
    ConflictError,
    DBError,
    ExpiredTokenError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidFilterField,
    InvalidFilterValue,
    InvalidOperatorForField,
    InvalidSortField,
    InvalidTokenError,
    NotFoundError,
    SlugGenerationExhausted,
    SlugValidationFailed,
    UnauthorizedError,
    ValidationError,
)
from blogapi.errors.handlers import register_exception_handlers
from blogapi.errors.manager import setup_errors

__all__ = [
    # Main setup function
    "setup_errors",
    # Handler registration
    "register_exception_handlers",
    # Exception classes
    "AppError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "BadRequestError",
    "DBError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "InvalidCredentialsError",
    # Query errors
    "InvalidFilterField",
    "InvalidSortField",
    "InvalidOperatorForField",
    "InvalidFilterValue",
    # Slug errors
    "SlugValidationFailed",
    "SlugGenerationExhausted",
]
