"""
Pagination utilities for list endpoints.

``paginate`` is pure arithmetic and does not clamp its inputs. Resolving
raw ``page``/``limit`` query strings to usable numbers happens before it,
in ``parse_positive_int``.
"""

from dataclasses import dataclass, field
from math import ceil
from typing import Any, Callable, Dict, Generic, List, TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def parse_positive_int(raw: Any, default: int) -> int:
    """
    Read a page or limit value from the query string.

    Missing, unparsable, zero or negative values resolve to ``default``.

    Examples:
        >>> parse_positive_int("5", 10)
        5
        >>> parse_positive_int("abc", 10)
        10
        >>> parse_positive_int("0", 1)
        1
    """
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value >= 1 else default


@dataclass(frozen=True)
class PageWindow:
    """
    The slice of rows a page covers.

    Attributes:
        offset: Number of rows to skip
        limit: Maximum number of rows to return
        total_pages: ceil(total_rows / limit), 0 when there are no rows
    """

    offset: int
    limit: int
    total_pages: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "offset": self.offset,
            "limit": self.limit,
            "total_pages": self.total_pages,
        }


def paginate(total_rows: int, page: int, limit: int) -> PageWindow:
    """
    Compute the page window for a result set.

    Args:
        total_rows: Number of rows matching the query
        page: Page number (1-indexed)
        limit: Number of rows per page

    Returns:
        PageWindow with offset, limit and total pages

    Example:
        >>> paginate(25, 3, 10)
        PageWindow(offset=20, limit=10, total_pages=3)
    """
    total_pages = ceil(total_rows / limit) if total_rows > 0 else 0
    return PageWindow(offset=(page - 1) * limit, limit=limit, total_pages=total_pages)


def _page_url(path: str, page: int, limit: int) -> str:
    return f"{path}?page={page}&limit={limit}"


def build_links(path: str, page: int, total_pages: int, limit: int) -> Dict[str, str]:
    """
    Build first/last/prev/next links for a page.

    ``prev`` is present when ``page > 1`` and ``next`` when
    ``page < total_pages``. An empty collection still links to page 1.
    """
    links = {
        "first": _page_url(path, 1, limit),
        "last": _page_url(path, max(total_pages, 1), limit),
    }
    if page > 1:
        links["prev"] = _page_url(path, page - 1, limit)
    if page < total_pages:
        links["next"] = _page_url(path, page + 1, limit)
    return links


@dataclass
class Page(Generic[T]):
    """
    One page of query results.

    Attributes:
        items: Rows on this page
        total: Number of rows matching the query, across all pages
        page: Requested page number
        limit: Requested page size
        window: Offset/limit/total pages used to fetch ``items``
    """

    items: List[T]
    total: int
    page: int
    limit: int
    window: PageWindow = field(repr=False)

    @property
    def total_pages(self) -> int:
        return self.window.total_pages

    def pagination_info(self, path: str) -> Dict[str, Any]:
        """
        Pagination block for the response envelope.

        Args:
            path: Request path the links point to
        """
        return {
            "current_page": self.page,
            "per_page": self.limit,
            "total_items": self.total,
            "total_pages": self.total_pages,
            "links": build_links(path, self.page, self.total_pages, self.limit),
        }

    def map(self, func: Callable[[T], Any]) -> "Page":
        """Return a copy of this page with ``func`` applied to every item."""
        return Page(
            items=[func(item) for item in self.items],
            total=self.total,
            page=self.page,
            limit=self.limit,
            window=self.window,
        )

