"""Health & Readiness — liveness and lookup-store readiness endpoints.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 200 only when the database answers and
      every table the lookups read is queryable; otherwise 503 naming the cause
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import geolookup.infrastructure.database as database
from geolookup.models import (
    District, DistrictStreetRelation, RoadDistrictRelation, StreetRoadRelation,
)

router = APIRouter(prefix="/api/v1/health", tags=["health"])

LOOKUP_TABLES = [
    District.__table__,
    DistrictStreetRelation.__table__,
    StreetRoadRelation.__table__,
    RoadDistrictRelation.__table__,
]


def _not_ready(reason: str, **fields) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason, **fields},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "geolookup-api"}


@router.get("/ready")
async def readiness_check():
    """Readiness: database reachable and all lookup tables present."""
    manager = database.db_manager
    if not manager or not await manager.health_check():
        return _not_ready("database_unavailable")

    tables = await manager.check_tables(LOOKUP_TABLES)
    missing = sorted(name for name, ok in tables.items() if not ok)
    if missing:
        return _not_ready("tables_unavailable", tables=missing)
    return {
        "status": "ready",
        "checks": {
            "database": "healthy",
            "tables": {name: "healthy" for name in sorted(tables)},
        },
    }
