"""Directory Repository — plain listings of districts and district/street pairs.

Invariants:
    - Direct pass-through queries: no pagination, no aggregation
    - Filter values are bound parameters; street names match as literal substrings
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geolookup.core.road_filters import LIKE_ESCAPE, escape_like
from geolookup.models.district import District
from geolookup.models.district_street_relation import DistrictStreetRelation


class DirectoryRepository:
    """Read-only district and street listings over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_districts(self) -> list[str]:
        result = await self.db.execute(
            select(District.district_name).order_by(District.district_name),
        )
        return list(result.scalars().all())

    async def list_streets(
        self, district: str | None = None, name: str | None = None,
    ) -> list[Mapping[str, Any]]:
        query = select(
            DistrictStreetRelation.street_name,
            DistrictStreetRelation.district_name,
        )
        if district is not None:
            query = query.where(DistrictStreetRelation.district_name == district)
        if name is not None:
            query = query.where(DistrictStreetRelation.street_name.like(
                f"%{escape_like(name)}%", escape=LIKE_ESCAPE,
            ))
        query = query.order_by(
            DistrictStreetRelation.district_name,
            DistrictStreetRelation.street_name,
        )
        result = await self.db.execute(query)
        return list(result.mappings().all())
