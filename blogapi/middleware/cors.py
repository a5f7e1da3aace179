"""
CORS middleware integration for the blog API.

Options come from ``settings.MIDDLEWARE_CORS_OPTIONS`` and are passed to
Starlette's ``CORSMiddleware`` unchanged. Only global CORS configuration
is supported.
"""

from logging import Logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogapi.config.base import BaseAppSettings

DEFAULT_CORS_OPTIONS = {
    "allow_origins": ["*"],
    "allow_credentials": True,
    "allow_methods": ["*"],
    "allow_headers": ["*"],
}


def add_cors_middleware(app: FastAPI, settings: BaseAppSettings, logger: Logger) -> None:
    """
    Adds CORS middleware to the application.

    Falls back to ``DEFAULT_CORS_OPTIONS`` when the settings hold no options.
    """
    cors_options = getattr(settings, "MIDDLEWARE_CORS_OPTIONS", None) or DEFAULT_CORS_OPTIONS
    logger.info(f"Configuring CORS middleware with options: {cors_options}")
    app.add_middleware(CORSMiddleware, **cors_options)
    logger.debug("CORS middleware added to FastAPI application.")
