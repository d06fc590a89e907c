"""Road Repository — SQL for the two-phase /roads lookup.

Invariants:
    - Every value reaches the database as a bound parameter
    - count_roads and page_road_names share one CompiledFilter and one join
      shape (_candidate_roads), so both describe the same candidate set
    - Pagination counts and slices DISTINCT road names, never relation rows
    - fetch_relations issues a single query per page and none for an empty page

Design Decisions:
    - Page of names first, relations second: LIMIT/OFFSET never applies to
      joined rows, so join multiplication cannot shift page boundaries
    - Roads are the distinct road_name values of street_road_relations; the
      district side is outer-joined, so a road without districts is still a
      candidate and comes back with a NULL district column
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, and_, bindparam, distinct, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import BindParameter, ColumnElement

from geolookup.core.road_filters import FilterKind, LIKE_ESCAPE, RoadFilter
from geolookup.models.road_district_relation import RoadDistrictRelation
from geolookup.models.street_road_relation import StreetRoadRelation

_PREDICATES: dict[FilterKind, Callable[[BindParameter], ColumnElement[bool]]] = {
    FilterKind.DISTRICT: lambda p: RoadDistrictRelation.district_name == p,
    FilterKind.STREET: lambda p: StreetRoadRelation.street_name == p,
    FilterKind.NAME: lambda p: StreetRoadRelation.road_name.like(p, escape=LIKE_ESCAPE),
}


@dataclass(frozen=True)
class CompiledFilter:
    """Predicate clauses plus their bound values, in reference order."""
    clauses: tuple[ColumnElement[bool], ...] = ()
    params: tuple[str, ...] = ()

    @property
    def predicate(self) -> ColumnElement[bool]:
        if not self.clauses:
            return true()
        return and_(*self.clauses)

    def apply(self, stmt: Select) -> Select:
        if not self.clauses:
            return stmt
        return stmt.where(self.predicate)


def compile_road_filters(filters: Sequence[RoadFilter]) -> CompiledFilter:
    """Compile filters into clauses and a parallel parameter list in one walk."""
    clauses = []
    params = []
    for position, road_filter in enumerate(filters):
        param = bindparam(
            f"{road_filter.kind.value}_{position}", road_filter.bound_value(),
        )
        clauses.append(_PREDICATES[road_filter.kind](param))
        params.append(param.value)
    return CompiledFilter(clauses=tuple(clauses), params=tuple(params))


def _candidate_roads(stmt: Select, compiled: CompiledFilter) -> Select:
    """Apply the shared join shape and predicate to a road select."""
    stmt = stmt.select_from(StreetRoadRelation).outerjoin(
        RoadDistrictRelation,
        RoadDistrictRelation.road_name == StreetRoadRelation.road_name,
    )
    return compiled.apply(stmt)


def count_roads_query(compiled: CompiledFilter) -> Select:
    return _candidate_roads(
        select(func.count(distinct(StreetRoadRelation.road_name))), compiled,
    )


def page_road_names_query(
    compiled: CompiledFilter, limit: int, offset: int,
) -> Select:
    return (
        _candidate_roads(select(StreetRoadRelation.road_name).distinct(), compiled)
        .order_by(StreetRoadRelation.road_name.asc())
        .limit(limit)
        .offset(offset)
    )


def relations_query(road_names: Sequence[str]) -> Select:
    return _candidate_roads(
        select(
            StreetRoadRelation.road_name,
            StreetRoadRelation.street_name,
            RoadDistrictRelation.district_name,
        ),
        CompiledFilter(),
    ).where(StreetRoadRelation.road_name.in_(list(road_names)))


class RoadRepository:
    """Read-only road queries over one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_roads(self, compiled: CompiledFilter) -> int:
        result = await self.db.execute(count_roads_query(compiled))
        return int(result.scalar_one() or 0)

    async def page_road_names(
        self, compiled: CompiledFilter, limit: int, offset: int,
    ) -> list[str]:
        result = await self.db.execute(
            page_road_names_query(compiled, limit, offset),
        )
        return [row["road_name"] for row in result.mappings().all()]

    async def fetch_relations(
        self, road_names: Sequence[str],
    ) -> list[Mapping[str, Any]]:
        if not road_names:
            return []
        result = await self.db.execute(relations_query(road_names))
        return list(result.mappings().all())
