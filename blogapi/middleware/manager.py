from logging import Logger
from typing import Optional

from fastapi import FastAPI

from blogapi.config.base import BaseAppSettings
from blogapi.logging import ensure_logger

from .cors import add_cors_middleware


def setup_middlewares(
    app: FastAPI,
    settings: BaseAppSettings,
    logger: Optional[Logger] = None,
) -> None:
    """
    Sets up all middlewares for the application.

    Only CORS is installed; it is configured once at startup.
    """
    log = ensure_logger(logger, __name__, settings)

    add_cors_middleware(app, settings, log)
