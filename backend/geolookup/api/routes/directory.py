"""Directory Routes — GET /districts and GET /streets listings.

Invariants:
    - Plain listings: no pagination, no aggregation
    - /districts returns names sorted ascending
    - /streets is ordered by district, then street
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from geolookup.infrastructure.database import get_db
from geolookup.infrastructure.directory_repository import DirectoryRepository
from geolookup.schemas.directory import DistrictStreet

router = APIRouter(tags=["directory"])


def get_directory_repository(
    db: AsyncSession = Depends(get_db),
) -> DirectoryRepository:
    return DirectoryRepository(db)


@router.get("/districts", response_model=list[str])
async def list_districts(
    repo: DirectoryRepository = Depends(get_directory_repository),
):
    """All district names."""
    return await repo.list_districts()


@router.get("/streets", response_model=list[DistrictStreet])
async def list_streets(
    district: str | None = Query(None, max_length=200),
    name: str | None = Query(None, max_length=200),
    repo: DirectoryRepository = Depends(get_directory_repository),
):
    """District/street pairs, optionally narrowed by district and street-name substring."""
    rows = await repo.list_streets(district=district, name=name)
    return [DistrictStreet(**row) for row in rows]
