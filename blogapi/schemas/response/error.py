"""
Error response schemas.

This module contains schemas used for error responses in the API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorInfo(BaseModel):
    """
    Detailed error information.

    Attributes:
        code: Error code identifier
        message: Human-readable error message
        field: Optional field name that caused the error
        details: Optional additional error details
    """

    code: str = Field(..., description="Error code identifier")
    message: str = Field(..., description="Human-readable error message")
    field: Optional[str] = Field(
        default=None, description="Field that caused the error"
    )
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error details"
    )


class ErrorResponse(BaseModel):
    """
    Schema for error responses.

    Attributes:
        success: Always false for error responses
        message: Error message
        errors: List of error details (ErrorInfo)
    """

    success: bool = Field(default=False, description="Always false for error responses")
    message: str = Field(..., description="Error message")
    errors: List[ErrorInfo] = Field(
        default_factory=list, description="List of error details"
    )
