"""
Error management functionality for the blog API.

This module provides the main entry point for configuring error handling
in a FastAPI application, including exception handler registration.
"""

from logging import Logger
from typing import Optional

from fastapi import FastAPI

from blogapi.config.base import BaseAppSettings
from blogapi.errors.handlers import register_exception_handlers
from blogapi.logging import ensure_logger


def setup_errors(
    app: FastAPI,
    settings: Optional[BaseAppSettings] = None,
    logger: Optional[Logger] = None,
) -> None:
    """
    Configure error handling for a FastAPI application.

    Registers exception handlers that convert exceptions into
    consistent error responses.

    Args:
        app: FastAPI application instance
        settings: Optional application settings
        logger: Optional logger for logging exceptions
    """
    log = ensure_logger(logger, __name__, settings)
    register_exception_handlers(app, logger=log)
