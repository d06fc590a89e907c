"""Roads Route — GET /roads, the filtered and paginated road lookup.

Invariants:
    - district/street/name are optional; a supplied option always filters,
      even when empty
    - page/pageSize arrive as raw strings and are resolved leniently
      (malformed or non-positive values fall back to defaults; a pageSize
      above roads_max_page_size is a 400)
    - The request's DB session is released on every exit path (get_db)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from geolookup.config import get_settings
from geolookup.core.pagination import resolve_page_request
from geolookup.core.road_filters import build_road_filters
from geolookup.infrastructure.database import get_db
from geolookup.infrastructure.road_repository import RoadRepository
from geolookup.schemas.roads import RoadPage
from geolookup.services.road_lookup import RoadQuery, lookup_roads

router = APIRouter(tags=["roads"])


def get_road_repository(db: AsyncSession = Depends(get_db)) -> RoadRepository:
    return RoadRepository(db)


@router.get("/roads", response_model=RoadPage)
async def list_roads(
    district: str | None = Query(None, max_length=200),
    street: str | None = Query(None, max_length=200),
    name: str | None = Query(None, max_length=200),
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
    repo: RoadRepository = Depends(get_road_repository),
):
    """Roads matching the filters, one page at a time, with sorted streets and districts."""
    settings = get_settings()
    query = RoadQuery(
        filters=build_road_filters(district=district, street=street, name=name),
        page=resolve_page_request(
            page, page_size,
            default_page_size=settings.roads_default_page_size,
            max_page_size=settings.roads_max_page_size,
        ),
    )
    return await lookup_roads(repo, query)
