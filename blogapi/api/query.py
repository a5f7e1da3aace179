"""
Query composition for list endpoints.

``ListParams`` collects the raw ``search``/``sort``/``page``/``limit``
parameters of a request and parses them. ``ResourceQuery`` holds one
resource's allow-lists and layers parsed directives onto a SELECT
statement without executing it.

Example:
    ```python
    POST_QUERY = ResourceQuery(
        Post,
        search_fields=[SearchField("title", FieldType.STRING, "Post title",
                                   [FilterOperator.EQ, FilterOperator.LIKE])],
        sort_fields=[SortField("created_at", "Creation date")],
        default_sort=[SortDirective("created_at", SortDirection.DESC)],
    )

    @router.get("/posts")
    async def list_posts(params: ListParams = Depends()):
        stmt = POST_QUERY.apply(select(Post), params.searches, params.sorts)
        ...
    ```
"""

from typing import Any, Dict, List, Optional, Sequence, Type

from fastapi import Query
from sqlalchemy import Select

from blogapi.api.filtering import (
    SearchDirective,
    SearchField,
    build_condition,
    coerce_value,
    parse_search,
)
from blogapi.api.pagination import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    parse_positive_int,
)
from blogapi.api.sorting import SortDirective, SortField, parse_sort
from blogapi.errors.exceptions import (
    InvalidFilterField,
    InvalidOperatorForField,
    InvalidSortField,
)


class ListParams:
    """
    Query parameters of a list request.

    Used as a FastAPI dependency (``Depends()``). Page and limit are read as
    strings so that bad values fall back to the defaults instead of
    failing validation.

    Attributes:
        searches: Parsed search directives
        sorts: Parsed sort directives
        page: Page number (1-indexed)
        limit: Number of items per page
    """

    def __init__(
        self,
        search: Optional[List[str]] = Query(
            None,
            description=(
                "Search conditions in format 'field:operator:value'. "
                "Example: 'title:like:hello' or 'created_at:gte:2024-01-01'"
            ),
            examples=["title:like:hello"],
        ),
        sort: Optional[str] = Query(
            None,
            description="Sort order in format 'field:direction', comma separated",
            examples=["created_at:desc"],
        ),
        page: Optional[str] = Query(None, description="Page number (1-indexed)"),
        limit: Optional[str] = Query(None, description="Number of items per page"),
    ):
        # Handle both raw values and Query objects
        search = getattr(search, "default", search)
        sort = getattr(sort, "default", sort)
        page = getattr(page, "default", page)
        limit = getattr(limit, "default", limit)

        self.searches: List[SearchDirective] = parse_search(search)
        self.sorts: List[SortDirective] = parse_sort(sort)
        self.page = parse_positive_int(page, DEFAULT_PAGE)
        self.limit = parse_positive_int(limit, DEFAULT_LIMIT)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search": [s.to_dict() for s in self.searches],
            "sort": [s.to_dict() for s in self.sorts],
            "page": self.page,
            "limit": self.limit,
        }


class ResourceQuery:
    """
    Allow-listed search and sort for one model.

    Args:
        model: SQLAlchemy model class
        search_fields: Fields that may be searched, with their operators
        sort_fields: Fields that may be sorted on
        default_sort: Order used when the request supplies none
    """

    def __init__(
        self,
        model: Type[Any],
        search_fields: Sequence[SearchField],
        sort_fields: Sequence[SortField],
        default_sort: Optional[Sequence[SortDirective]] = None,
    ) -> None:
        self.model = model
        self.search_fields: Dict[str, SearchField] = {f.name: f for f in search_fields}
        self.sort_fields: Dict[str, SortField] = {f.name: f for f in sort_fields}
        self.default_sort: List[SortDirective] = list(default_sort or [])

    def validate(
        self,
        searches: Sequence[SearchDirective],
        sorts: Sequence[SortDirective],
    ) -> None:
        """
        Check directives against the allow-lists.

        Raises:
            InvalidFilterField: A search names a field outside the allow-list
            InvalidOperatorForField: An operator is not allowed for its field
            InvalidSortField: A sort names a field outside the allow-list
        """
        for directive in searches:
            search_field = self.search_fields.get(directive.field)
            if search_field is None:
                raise InvalidFilterField(directive.field, list(self.search_fields))
            if not search_field.allows(directive.operator):
                raise InvalidOperatorForField(
                    directive.field,
                    directive.operator.value,
                    [op.value for op in search_field.operators],
                )
        for directive in sorts:
            if directive.field not in self.sort_fields:
                raise InvalidSortField(directive.field, list(self.sort_fields))

    def filter(self, stmt: Select, searches: Sequence[SearchDirective]) -> Select:
        """Add one WHERE clause per search directive."""
        for directive in searches:
            search_field = self.search_fields[directive.field]
            column = getattr(self.model, search_field.attribute)
            value = coerce_value(search_field, directive)
            stmt = stmt.where(build_condition(column, directive.operator, value))
        return stmt

    def order(self, stmt: Select, sorts: Sequence[SortDirective]) -> Select:
        """
        Add ORDER BY clauses in the order supplied.

        The default order applies when ``sorts`` is empty. The primary key
        always comes last so that pages are stable.
        """
        clauses = []
        for directive in sorts or self.default_sort:
            sort_field = self.sort_fields.get(directive.field)
            attribute = sort_field.attribute if sort_field else directive.field
            clauses.append(directive.order_by(getattr(self.model, attribute)))
        clauses.append(self.model.id.asc())
        return stmt.order_by(*clauses)

    def apply(
        self,
        stmt: Select,
        searches: Sequence[SearchDirective],
        sorts: Sequence[SortDirective],
    ) -> Select:
        """
        Validate directives and layer them onto ``stmt``.

        Returns:
            The augmented statement, not executed
        """
        self.validate(searches, sorts)
        return self.order(self.filter(stmt, searches), sorts)

    def describe(
        self,
        searches: Sequence[SearchDirective],
        sorts: Sequence[SortDirective],
    ) -> Dict[str, Any]:
        """
        Metadata block for the response envelope.

        Returns:
            allowed_search, allowed_sort, applied_search and applied_sort
        """
        return {
            "allowed_search": [f.to_dict() for f in self.search_fields.values()],
            "allowed_sort": [f.to_dict() for f in self.sort_fields.values()],
            "applied_search": [s.to_dict() for s in searches],
            "applied_sort": {s.field: s.direction.value for s in sorts},
        }
