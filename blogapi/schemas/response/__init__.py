"""
Response schemas for API endpoints.

This module exports all response schemas for easy access.
"""

from blogapi.schemas.response.data import DataResponse, MessageData
from blogapi.schemas.response.error import ErrorInfo, ErrorResponse
from blogapi.schemas.response.list import (
    AppliedSearch,
    ListMetadata,
    ListResponse,
    PaginationInfo,
    PaginationLinks,
    SearchFieldInfo,
    SortFieldInfo,
)
from blogapi.schemas.response.token import TokenResponse

__all__ = [
    "DataResponse",
    "MessageData",
    "ErrorResponse",
    "ErrorInfo",
    "ListResponse",
    "ListMetadata",
    "SearchFieldInfo",
    "SortFieldInfo",
    "AppliedSearch",
    "PaginationInfo",
    "PaginationLinks",
    "TokenResponse",
]
