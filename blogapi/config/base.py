"""
Base configuration module for the blog API.

This module provides the base settings class that the environment-specific
settings classes inherit from. It covers the application identity, the
database connection, JWT signing, response envelope flags and logging.
"""

import secrets
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


class BaseAppSettings(BaseSettings):
    """
    Base settings class for application configuration.

    Attributes:
        APP_NAME: The name of the application
        DEBUG: Flag to enable/disable debug mode
        VERSION: Application version string
        API_PREFIX: URL prefix for all resource routers
        DATABASE_URL: Async SQLAlchemy database URL
        DB_ECHO: Enable SQL query logging (echo)
        DB_POOL_SIZE: Connection pool size for the database
        DB_CREATE_TABLES: Create missing tables on startup
        JWT_SECRET_KEY: Secret key for JWT token signing
        JWT_ALGORITHM: Algorithm used for JWT token signing
        JWT_EXPIRATION_HOURS: Lifetime of access tokens in hours
        JWT_AUDIENCE: Audience claim for JWT tokens
        JWT_ISSUER: Issuer claim for JWT tokens
        SHOW_METADATA: Include filter/sort metadata in list responses
        SHOW_PAGINATION: Include pagination info in list responses
        LOG_LEVEL: Logging level name
        LOG_JSON: Emit log lines as JSON
        MIDDLEWARE_CORS_OPTIONS: CORS middleware options (passed to CORSMiddleware)
        DEFAULT_ROLES: Roles seeded at startup (name -> description)
        DEFAULT_ROLE: Role assigned to users registering without one
    """

    APP_NAME: str = Field(default="blogapi")
    DEBUG: bool = Field(default=False)
    VERSION: str = Field(default="0.1.0")
    API_PREFIX: str = Field(default="/api")

    # Database configuration
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./blogapi.db",
        description="Async SQLAlchemy database URL",
    )
    DB_ECHO: bool = Field(default=False, description="Enable SQL query logging (echo)")
    DB_POOL_SIZE: int = Field(
        default=5, description="Connection pool size for the database"
    )
    DB_CREATE_TABLES: bool = Field(
        default=True, description="Create missing tables on startup"
    )

    # Security configuration
    JWT_SECRET_KEY: str = Field(
        default="",  # Empty default to encourage explicit setting
        validate_default=True,
        description="Secret key for signing JWT tokens",
    )
    JWT_ALGORITHM: str = Field(
        default="HS256", description="Algorithm used for JWT token signing"
    )
    JWT_EXPIRATION_HOURS: int = Field(
        default=24, description="Expiration time for access tokens in hours"
    )
    JWT_AUDIENCE: Optional[str] = Field(
        default=None, validate_default=True, description="Audience claim for JWT tokens"
    )
    JWT_ISSUER: Optional[str] = Field(
        default=None, validate_default=True, description="Issuer claim for JWT tokens"
    )

    # Response envelope flags
    SHOW_METADATA: bool = Field(
        default=False, description="Include filter/sort metadata in list responses"
    )
    SHOW_PAGINATION: bool = Field(
        default=False, description="Include pagination info in list responses"
    )

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level name")
    LOG_JSON: bool = Field(default=False, description="Emit log lines as JSON")

    # Middleware configuration
    MIDDLEWARE_CORS_OPTIONS: dict = Field(
        default_factory=lambda: {
            "allow_origins": ["*"],
            "allow_credentials": True,
            "allow_methods": ["*"],
            "allow_headers": ["*"],
        },
        description="CORS middleware options (passed to CORSMiddleware)",
    )

    # Seed data
    DEFAULT_ROLES: Dict[str, str] = Field(
        default_factory=lambda: {
            "admin": "System administrator",
            "user": "Regular user",
            "editor": "Content editor",
        },
        description="Roles created at startup when missing",
    )
    DEFAULT_ROLE: str = Field(
        default="user", description="Role assigned when registering without one"
    )

    @field_validator("JWT_AUDIENCE", "JWT_ISSUER", mode="before")
    def set_default_aud_iss(cls, value, info):
        """Set default audience and issuer based on app name if not provided."""
        if value is None:
            app_name = info.data.get("APP_NAME", "blogapi")
            return app_name.lower()
        return value

    @field_validator("SHOW_METADATA", "SHOW_PAGINATION", mode="before")
    def parse_envelope_flag(cls, value):
        """Only the string "true" (any case) switches an envelope flag on."""
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value

    @field_validator("JWT_SECRET_KEY", mode="before")
    def generate_jwt_secret_if_empty(cls, value, info):
        """
        Generate a secure random JWT secret key if not provided.

        In development, this will generate a random key for convenience.
        In production, it's strongly recommended to set this explicitly.
        """
        if not value:
            if info.data.get("DEBUG", False):
                return secrets.token_hex(32)
            raise ValueError(
                "JWT_SECRET_KEY must be explicitly set in production. "
                "Generate a secure key with: python -c 'import secrets; print(secrets.token_hex(32))'"
            )
        return value

    @field_validator("DATABASE_URL", mode="before")
    def validate_database_url(cls, value):
        """
        Ensure DATABASE_URL uses asyncpg for PostgreSQL connections.
        """
        if (
            value
            and value.startswith("postgresql://")
            and not value.startswith("postgresql+asyncpg://")
        ):
            raise ValueError(
                "DATABASE_URL must start with 'postgresql+asyncpg://' for asyncpg driver. "
                "You provided a URL starting with 'postgresql://'. "
                "Please update your DATABASE_URL to use the correct format."
            )
        return value

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


__all__: List[str] = ["BaseAppSettings"]
