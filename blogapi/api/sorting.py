"""
Sorting utilities for list endpoints.

The ``sort`` parameter holds ``field:direction`` pairs. Several pairs may be
given, separated by commas or by repeating the parameter; they are applied
in the order supplied, later ones breaking ties of earlier ones. Pairs with
the wrong number of segments or a direction other than ``asc``/``desc``
are dropped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy import asc, desc

from blogapi.logging import get_logger

logger = get_logger(__name__)


class SortDirection(str, Enum):
    """
    Sort direction enum.

    Attributes:
        ASC: Ascending order
        DESC: Descending order
    """

    ASC = "asc"
    DESC = "desc"


class SortDirective:
    """
    A parsed sort instruction.

    Attributes:
        field: Field name to sort by
        direction: Sort direction (asc or desc)
    """

    def __init__(self, field: str, direction: SortDirection = SortDirection.ASC):
        self.field = field
        self.direction = direction

    def to_dict(self) -> Dict[str, str]:
        """
        Convert the directive to a dictionary.

        Returns:
            Dictionary with field and direction
        """
        return {"field": self.field, "direction": self.direction.value}

    def order_by(self, column: Any) -> Any:
        """Return the ORDER BY expression for ``column``."""
        if self.direction == SortDirection.DESC:
            return desc(column)
        return asc(column)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortDirective):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"{self.field}:{self.direction.value}"

    def __repr__(self) -> str:
        return f"SortDirective(field='{self.field}', direction={self.direction})"


@dataclass(frozen=True)
class SortField:
    """
    A sortable field of a resource.

    Attributes:
        name: Name used in the ``sort`` parameter
        description: Human readable description, shown in list metadata
        column: Model attribute to order by, when it differs from ``name``
    """

    name: str
    description: str
    column: Optional[str] = None

    @property
    def attribute(self) -> str:
        return self.column or self.name

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description}


def parse_sort(raw: Optional[Union[str, Iterable[str]]]) -> List[SortDirective]:
    """
    Parse ``field:direction`` pairs into sort directives.

    Malformed pairs are skipped; this function never raises.

    Args:
        raw: A ``sort`` value, or several of them

    Returns:
        Parsed directives, in the order supplied

    Examples:
        >>> parse_sort("created_at:desc")
        [SortDirective(field='created_at', direction=SortDirection.DESC)]
        >>> parse_sort("created_at")
        []
    """
    if raw is None:
        return []
    values = [raw] if isinstance(raw, str) else list(raw)

    directives: List[SortDirective] = []
    for value in values:
        for pair in value.split(","):
            if not pair.strip():
                continue

            parts = pair.split(":")
            if len(parts) != 2:
                logger.debug("Dropping sort pair %r: expected field:direction", pair)
                continue

            field_name = parts[0].strip()
            try:
                direction = SortDirection(parts[1].strip().lower())
            except ValueError:
                logger.debug("Dropping sort pair %r: direction must be asc or desc", pair)
                continue

            if not field_name:
                logger.debug("Dropping sort pair %r: empty field", pair)
                continue

            directives.append(SortDirective(field_name, direction))

    return directives
