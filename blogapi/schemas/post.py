"""
Request and response schemas for posts.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """
    Body of ``POST /posts``.

    ``slug`` is optional; without it one is derived from the title.
    """

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    slug: Optional[str] = Field(default=None, max_length=255)


class PostUpdate(BaseModel):
    """
    Body of ``PUT /posts/{slug}``.

    Omitted fields and empty strings leave the stored value unchanged.
    ``version`` enables the optimistic concurrency check.
    """

    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    slug: Optional[str] = Field(default=None, max_length=255)
    version: Optional[int] = Field(default=None, ge=1)


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    author_id: int
    version: int
    created_at: datetime
    updated_at: datetime
