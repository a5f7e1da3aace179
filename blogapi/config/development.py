"""
Development environment specific settings.

Debug mode is on, SQL echo stays off and the database is a local
SQLite file so the service runs without any external server.
"""

from .base import BaseAppSettings


class DevelopmentSettings(BaseAppSettings):
    """
    Settings class for development environment.

    Attributes:
        DEBUG: Enabled so a JWT secret is generated when none is configured
        LOG_LEVEL: Verbose logging while developing
    """

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
