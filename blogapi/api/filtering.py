"""
Filtering utilities for list endpoints.

Search parameters arrive as ``field:operator:value`` strings. Parsing is
lenient: tokens that do not have exactly three segments or use an unknown
operator are dropped. Empty segments are kept, so ``title:eq:`` matches an
empty title. Whether a field and operator are allowed for a resource is
checked later, when the directives are applied by
``blogapi.api.query.ResourceQuery``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from blogapi.errors.exceptions import InvalidFilterValue
from blogapi.logging import get_logger

logger = get_logger(__name__)


class FilterOperator(str, Enum):
    """
    Filter operators for field comparisons.

    Attributes:
        EQ: Equal to
        NE: Not equal to
        LIKE: Contains the value
        NLIKE: Does not contain the value
        IN: In a comma separated list of values
        NIN: Not in a comma separated list of values
        GT: Greater than
        GTE: Greater than or equal to
        LT: Less than
        LTE: Less than or equal to
    """

    EQ = "eq"
    NE = "ne"
    LIKE = "like"
    NLIKE = "nlike"
    IN = "in"
    NIN = "nin"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"


LIST_OPERATORS = (FilterOperator.IN, FilterOperator.NIN)


class FieldType(str, Enum):
    """Value type of a searchable field."""

    STRING = "string"
    INTEGER = "integer"
    DATE = "date"


class SearchDirective:
    """
    A single parsed search condition.

    Attributes:
        field: Field name to filter on
        operator: Filter operator
        value: Raw value as it appeared in the query string
    """

    def __init__(self, field: str, operator: FilterOperator, value: str):
        self.field = field
        self.operator = operator
        self.value = value

    def to_dict(self) -> Dict[str, str]:
        """
        Convert the directive to a dictionary.

        Returns:
            Dictionary with field, operator, and value
        """
        return {
            "field": self.field,
            "operator": self.operator.value,
            "value": self.value,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchDirective):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"{self.field}:{self.operator.value}:{self.value}"

    def __repr__(self) -> str:
        return (
            f"SearchDirective(field='{self.field}', "
            f"operator={self.operator}, value={repr(self.value)})"
        )


@dataclass(frozen=True)
class SearchField:
    """
    A searchable field of a resource.

    Attributes:
        name: Name used in ``search`` parameters
        type: Value type, used to coerce the raw value
        description: Human readable description, shown in list metadata
        operators: Operators accepted for this field
        column: Model attribute to filter on, when it differs from ``name``
    """

    name: str
    type: FieldType
    description: str
    operators: List[FilterOperator] = field(default_factory=list)
    column: Optional[str] = None

    @property
    def attribute(self) -> str:
        return self.column or self.name

    def allows(self, operator: FilterOperator) -> bool:
        return operator in self.operators

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.value,
            "description": self.description,
            "operators": [op.value for op in self.operators],
        }


def parse_search(tokens: Optional[Iterable[str]]) -> List[SearchDirective]:
    """
    Parse raw ``field:operator:value`` tokens into search directives.

    Malformed tokens are skipped; this function never raises.

    Args:
        tokens: Raw ``search`` query parameter values

    Returns:
        Parsed directives, in the order supplied

    Example:
        >>> parse_search(["title:like:hello", "title:hello"])
        [SearchDirective(field='title', operator=FilterOperator.LIKE, value='hello')]
    """
    directives: List[SearchDirective] = []

    for token in tokens or []:
        parts = token.split(":")
        if len(parts) != 3:
            logger.debug("Dropping search token %r: expected field:operator:value", token)
            continue

        field_name, operator_str, value = (part.strip() for part in parts)
        try:
            operator = FilterOperator(operator_str.lower())
        except ValueError:
            logger.debug("Dropping search token %r: unknown operator", token)
            continue

        directives.append(SearchDirective(field_name, operator, value))

    return directives


def _coerce_scalar(search_field: SearchField, raw: str) -> Any:
    if search_field.type == FieldType.INTEGER:
        try:
            return int(raw)
        except ValueError:
            raise InvalidFilterValue(search_field.name, raw, "integer")

    if search_field.type == FieldType.DATE:
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise InvalidFilterValue(search_field.name, raw, "date")
        if len(raw) == 10:
            # Date only: midnight UTC of that day
            return datetime.combine(date.fromisoformat(raw), time.min, timezone.utc)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    return raw


def coerce_value(search_field: SearchField, directive: SearchDirective) -> Any:
    """
    Convert a directive's raw value to the field's Python type.

    ``in`` and ``nin`` values are split on commas and each item is coerced.

    Raises:
        InvalidFilterValue: If the value cannot be read as the field's type
    """
    if directive.operator in LIST_OPERATORS:
        items = [item.strip() for item in directive.value.split(",") if item.strip()]
        return [_coerce_scalar(search_field, item) for item in items]
    return _coerce_scalar(search_field, directive.value)


def build_condition(column: Any, operator: FilterOperator, value: Any) -> Any:
    """
    Translate an operator and a coerced value into a SQLAlchemy expression.

    ``like`` and ``nlike`` match the value anywhere in the column, with
    ``%`` and ``_`` in the value matched literally.
    """
    if operator == FilterOperator.EQ:
        return column == value
    if operator == FilterOperator.NE:
        return column != value
    if operator == FilterOperator.LIKE:
        return column.contains(value, autoescape=True)
    if operator == FilterOperator.NLIKE:
        return ~column.contains(value, autoescape=True)
    if operator == FilterOperator.IN:
        return column.in_(value)
    if operator == FilterOperator.NIN:
        return column.not_in(value)
    if operator == FilterOperator.GT:
        return column > value
    if operator == FilterOperator.GTE:
        return column >= value
    if operator == FilterOperator.LT:
        return column < value
    if operator == FilterOperator.LTE:
        return column <= value
    raise ValueError(f"Unsupported operator: {operator}")
