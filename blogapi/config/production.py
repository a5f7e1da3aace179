"""
Production environment specific settings.

This module contains settings that are specific to the production environment,
such as database configurations and security settings.
"""

from .base import BaseAppSettings


class ProductionSettings(BaseAppSettings):
    """
    Settings class for production environment.

    Disables debug mode and expects DATABASE_URL and JWT_SECRET_KEY to
    come from the environment. Tables are managed outside the process.

    Attributes:
        DEBUG: Always False in production for security
        DB_CREATE_TABLES: Schema creation is left to deployment tooling
        LOG_JSON: Structured log lines for log shippers
    """

    DEBUG: bool = False
    DB_CREATE_TABLES: bool = False
    LOG_JSON: bool = True
