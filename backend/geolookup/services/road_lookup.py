"""Road Lookup — runs the filtered, paginated, aggregated /roads pipeline.

Invariants:
    - Filters are compiled once; count and page queries receive the same CompiledFilter
    - Queries run sequentially on one session: count → page of names → relations
    - Any store failure aborts the pipeline and propagates whole (no retry,
      no partial result)
    - An empty page is not an error: data is [] and meta reports the true count
    - An offset at or past the count skips the page and relation queries, so
      arbitrarily large page numbers never reach the store
"""

import logging
from dataclasses import dataclass, field

from geolookup.core.pagination import PageRequest, total_pages
from geolookup.core.road_aggregation import aggregate_roads
from geolookup.core.road_filters import RoadFilter
from geolookup.infrastructure.road_repository import (
    RoadRepository, compile_road_filters,
)
from geolookup.schemas.roads import RoadPage, RoadPageMeta, RoadRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoadQuery:
    """Filters plus resolved pagination for one /roads request."""
    filters: list[RoadFilter] = field(default_factory=list)
    page: PageRequest = field(default_factory=PageRequest)


async def lookup_roads(repo: RoadRepository, query: RoadQuery) -> RoadPage:
    """Count matching roads, fetch one page of names, then aggregate their relations."""
    compiled = compile_road_filters(query.filters)

    total_records = await repo.count_roads(compiled)
    if query.page.offset >= total_records:
        road_names, rows = [], []
    else:
        road_names = await repo.page_road_names(
            compiled, limit=query.page.limit, offset=query.page.offset,
        )
        rows = await repo.fetch_relations(road_names)
    records = aggregate_roads(road_names, rows)

    logger.info(
        f"Road lookup returned {len(records)} of {total_records} roads",
        extra={
            "page": query.page.page,
            "page_size": query.page.page_size,
            "total_records": total_records,
            "filter_count": len(query.filters),
        },
    )
    return RoadPage(
        meta=RoadPageMeta(
            total_records=total_records,
            page=query.page.page,
            page_size=query.page.page_size,
            total_pages=total_pages(total_records, query.page.page_size),
        ),
        data=[RoadRecord(**record) for record in records],
    )
