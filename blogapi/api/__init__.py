"""
API utilities for list endpoints.

This module provides the shared search, sort and pagination engine used by
every resource, plus the response envelope builder.
"""

from blogapi.api.envelope import build_envelope, list_envelope
from blogapi.api.filtering import (
    FieldType,
    FilterOperator,
    SearchDirective,
    SearchField,
    parse_search,
)
from blogapi.api.pagination import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    Page,
    PageWindow,
    build_links,
    paginate,
    parse_positive_int,
)
from blogapi.api.query import ListParams, ResourceQuery
from blogapi.api.sorting import SortDirection, SortDirective, SortField, parse_sort

__all__ = [
    "FieldType",
    "FilterOperator",
    "SearchDirective",
    "SearchField",
    "parse_search",
    "SortDirection",
    "SortDirective",
    "SortField",
    "parse_sort",
    "DEFAULT_PAGE",
    "DEFAULT_LIMIT",
    "Page",
    "PageWindow",
    "build_links",
    "paginate",
    "parse_positive_int",
    "ListParams",
    "ResourceQuery",
    "build_envelope",
    "list_envelope",
]
