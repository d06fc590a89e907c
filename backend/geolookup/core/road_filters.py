"""Road Filters — tagged filter values built from the optional /roads query options.

Invariants:
    - A filter exists only for an option that was supplied (None means absent)
    - Filter order is fixed: district, street, name
    - bound_value() is the exact value handed to the store as a bound parameter;
      filter values never become part of SQL text
    - Name filters match the value literally anywhere inside the road name

Design Decisions:
    - Sequence of (kind, value) variants instead of string concatenation:
      the SQL layer walks it once and emits predicate and parameters together
"""

from dataclasses import dataclass
from enum import Enum

LIKE_ESCAPE = "/"


class FilterKind(str, Enum):
    """Kinds of road predicate the lookup understands."""
    DISTRICT = "district"
    STREET = "street"
    NAME = "name"


def escape_like(value: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


@dataclass(frozen=True)
class RoadFilter:
    """One road predicate: exact district, exact street, or name substring."""
    kind: FilterKind
    value: str

    def bound_value(self) -> str:
        if self.kind is FilterKind.NAME:
            return f"%{escape_like(self.value)}%"
        return self.value


def build_road_filters(
    district: str | None = None,
    street: str | None = None,
    name: str | None = None,
) -> list[RoadFilter]:
    """Build the filter sequence for the supplied options. Pure, no IO."""
    options = (
        (FilterKind.DISTRICT, district),
        (FilterKind.STREET, street),
        (FilterKind.NAME, name),
    )
    return [
        RoadFilter(kind=kind, value=value)
        for kind, value in options
        if value is not None
    ]
