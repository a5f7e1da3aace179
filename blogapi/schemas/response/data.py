"""
Data response schema for single-object responses.

This module contains the schema used when returning a single item
from an API endpoint.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """
    Schema for single-object API responses.

    Attributes:
        data: The response payload (required)
    """

    data: T = Field(..., description="Response payload (required)")


class MessageData(BaseModel):
    """Payload of responses that only confirm an action, such as deletes."""

    message: str
