"""
Configuration module for the blog API.

This module provides:
- BaseAppSettings: The base class for application settings, supporting environment variable loading.
- Environment-specific settings (development, testing, production).
- get_settings: Factory for loading the correct settings class based on APP_ENV.

Example environment variables:

# Application
APP_NAME="blogapi"
APP_ENV="development"  # Options: development, testing, production
VERSION="0.1.0"
DEBUG=true
API_PREFIX="/api"

# Database configuration
DATABASE_URL="postgresql+asyncpg://<username>:<password>@<host>:<port>/<database_name>"
DB_ECHO=false
DB_POOL_SIZE=5

# Security configuration
JWT_SECRET_KEY="your-secret-key-at-least-32-characters-long"
JWT_ALGORITHM="HS256"
JWT_EXPIRATION_HOURS=24

# Response envelope
SHOW_METADATA=true
SHOW_PAGINATION=true
"""

from .base import BaseAppSettings
from .development import DevelopmentSettings
from .production import ProductionSettings
from .settings import get_request_settings, get_settings
from .testing import TestingSettings

__all__ = [
    "BaseAppSettings",
    "get_settings",
    "get_request_settings",
    "DevelopmentSettings",
    "ProductionSettings",
    "TestingSettings",
]
