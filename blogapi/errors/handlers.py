"""
Exception handlers for the blog API.

This module provides exception handlers that convert application exceptions
into standardized error responses using the schemas module.
"""

from functools import partial
from logging import Logger
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from blogapi.errors.exceptions import AppError
from blogapi.logging import ensure_logger
from blogapi.schemas.response import ErrorInfo, ErrorResponse


def create_error_response(
    message: str,
    code: str = "ERROR",
    errors: Optional[List[ErrorInfo]] = None,
) -> ErrorResponse:
    """
    Create a standardized error response.

    Args:
        message: Error message
        code: Error code identifier
        errors: Detailed error information list

    Returns:
        Standardized error response
    """
    return ErrorResponse(
        success=False,
        message=message,
        errors=errors or [ErrorInfo(code=code, message=message)],
    )


def _render(status_code: int, response: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(response, exclude_none=True),
    )


def _create_validation_errors(
    errors_data: List[Dict[str, Any]], exclude_body: bool = False
) -> List[ErrorInfo]:
    """
    Create a list of ErrorInfo objects from validation errors data.

    Args:
        errors_data: List of error dictionaries
        exclude_body: Whether to exclude 'body' from location paths

    Returns:
        List of ErrorInfo objects
    """
    errors = []

    for error in errors_data:
        loc = error.get("loc", [])

        if exclude_body:
            field_path = ".".join([str(item) for item in loc if item != "body"])
        else:
            field_path = ".".join([str(item) for item in loc])

        errors.append(
            ErrorInfo(
                code="VALIDATION_ERROR",
                message=error.get("msg", "Validation error"),
                field=field_path or None,
            )
        )

    return errors


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Handler for AppError and its subclasses.

    Args:
        request: FastAPI request
        exc: AppError instance

    Returns:
        JSON response with error details
    """
    errors = [
        ErrorInfo(
            code=exc.code,
            message=exc.message,
            field=getattr(exc, "field", None),
            details=exc.details or None,
        )
    ]

    # Field validation errors replace the generic entry
    if getattr(exc, "fields", None):
        errors = [
            ErrorInfo(
                code=field_error.get("code", exc.code),
                message=field_error.get("message", exc.message),
                field=field_error.get("field") or None,
            )
            for field_error in exc.fields
        ]

    response = create_error_response(
        message=exc.message,
        code=exc.code,
        errors=errors,
    )
    return _render(exc.status_code, response)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handler for FastAPI's RequestValidationError.

    Args:
        request: FastAPI request
        exc: ValidationError instance

    Returns:
        JSON response with validation error details
    """
    response = create_error_response(
        message="Request validation error",
        code="VALIDATION_ERROR",
        errors=_create_validation_errors(exc.errors(), exclude_body=True),
    )
    return _render(status.HTTP_422_UNPROCESSABLE_ENTITY, response)


async def pydantic_validation_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """
    Handler for Pydantic's ValidationError.

    Args:
        request: FastAPI request
        exc: Pydantic ValidationError instance

    Returns:
        JSON response with validation error details
    """
    response = create_error_response(
        message="Data validation error",
        code="VALIDATION_ERROR",
        errors=_create_validation_errors(exc.errors(), exclude_body=False),
    )
    return _render(status.HTTP_422_UNPROCESSABLE_ENTITY, response)


async def unhandled_exception_handler(
    request: Request, exc: Exception, logger: Optional[Logger] = None
) -> JSONResponse:
    """
    Generic exception handler for unhandled exceptions.

    Args:
        request: FastAPI request
        exc: Unhandled exception
        logger: Optional logger to use instead of default logging

    Returns:
        JSON response with generic error message
    """
    log = ensure_logger(logger, __name__)
    log.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )

    response = create_error_response(
        message="Internal server error",
        code="INTERNAL_ERROR",
    )
    return _render(status.HTTP_500_INTERNAL_SERVER_ERROR, response)


def register_exception_handlers(app: FastAPI, logger: Optional[Logger] = None) -> None:
    """
    Register all exception handlers with a FastAPI application.

    Args:
        app: FastAPI application instance
        logger: Optional logger for logging exceptions
    """
    # Subclasses of AppError are routed here as well
    app.exception_handler(AppError)(app_error_handler)

    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(PydanticValidationError)(pydantic_validation_handler)

    app.exception_handler(Exception)(
        partial(unhandled_exception_handler, logger=logger)
    )
