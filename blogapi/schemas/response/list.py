"""
List response schema for collections of objects.

A list response always carries ``data``. The ``metadata`` block (what can
be searched and sorted, and what was applied) and the ``pagination`` block
are only present when the matching settings flag is on, so routes using
``ListResponse`` serialize with ``response_model_exclude_unset=True``.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class SearchFieldInfo(BaseModel):
    """A searchable field and the operators it accepts."""

    name: str
    type: str
    description: str
    operators: List[str]


class SortFieldInfo(BaseModel):
    """A sortable field."""

    name: str
    description: str


class AppliedSearch(BaseModel):
    """A search directive that was applied to the query."""

    field: str
    operator: str
    value: str


class ListMetadata(BaseModel):
    """
    Metadata specific to list responses.

    Attributes:
        allowed_search: Fields that may appear in ``search`` parameters
        allowed_sort: Fields that may appear in the ``sort`` parameter
        applied_search: Search directives applied to this request
        applied_sort: Sort directives applied to this request (field -> direction)
    """

    allowed_search: List[SearchFieldInfo] = Field(default_factory=list)
    allowed_sort: List[SortFieldInfo] = Field(default_factory=list)
    applied_search: List[AppliedSearch] = Field(default_factory=list)
    applied_sort: Dict[str, str] = Field(default_factory=dict)


class PaginationLinks(BaseModel):
    """
    Navigation links for a paginated collection.

    ``prev`` and ``next`` are left unset on the first and last page.
    """

    first: str
    last: str
    prev: Optional[str] = None
    next: Optional[str] = None


class PaginationInfo(BaseModel):
    """
    Pagination block of a list response.

    Attributes:
        current_page: Requested page number
        per_page: Maximum items per page
        total_items: Number of rows matching the filters
        total_pages: ceil(total_items / per_page), 0 when nothing matched
        links: first/last/prev/next navigation links
    """

    current_page: int
    per_page: int
    total_items: int
    total_pages: int
    links: PaginationLinks


class ListResponse(BaseModel, Generic[T]):
    """
    Schema for list/collection API responses.

    Attributes:
        data: The list of response items
        metadata: Search and sort metadata, present when SHOW_METADATA is on
        pagination: Pagination info, present when SHOW_PAGINATION is on
    """

    data: List[T] = Field(default_factory=list, description="List of items")
    metadata: Optional[ListMetadata] = Field(
        default=None, description="Search and sort metadata"
    )
    pagination: Optional[PaginationInfo] = Field(
        default=None, description="Pagination info"
    )
