"""
Testing environment specific settings.

This module contains settings that are specific to the testing environment,
such as test database configurations and testing-specific flags.
"""

from .base import BaseAppSettings


class TestingSettings(BaseAppSettings):
    """
    Settings class for testing environment.

    Uses a local SQLite file and enables debug mode for testing.
    Inherits basic settings from BaseAppSettings.

    Attributes:
        DEBUG: Set to True for detailed test output
        DATABASE_URL: SQLite connection string for testing
        JWT_SECRET_KEY: Fixed key so issued tokens are reproducible
    """

    DEBUG: bool = True
    DATABASE_URL: str = "sqlite+aiosqlite:///./test.db"
    JWT_SECRET_KEY: str = "testing-secret-key-with-at-least-32-bytes"
