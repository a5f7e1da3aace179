"""
Token-related response schemas for authentication endpoints.
"""

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """
    Standard response model for authentication tokens.

    Attributes:
        access_token: The JWT access token
        token_type: The type of token, typically "bearer"
        expires_in: Expiration time in seconds for the access token
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(
        default="bearer", description="Type of authentication token"
    )
    expires_in: int = Field(..., description="Access token lifetime in seconds")
