"""Road Schemas — Pydantic models for the /roads response envelope.

Invariants:
    - meta fields serialize in camelCase (totalRecords, pageSize, totalPages)
    - data records serialize road_name/streets/districts as stored
"""

from pydantic import BaseModel, ConfigDict, Field


class RoadRecord(BaseModel):
    """One aggregated road with its sorted, duplicate-free street and district names."""
    road_name: str
    streets: list[str] = []
    districts: list[str] = []


class RoadPageMeta(BaseModel):
    """Pagination metadata for one page of roads."""
    model_config = ConfigDict(populate_by_name=True)

    total_records: int = Field(alias="totalRecords", ge=0)
    page: int = Field(ge=1)
    page_size: int = Field(alias="pageSize", ge=1)
    total_pages: int = Field(alias="totalPages", ge=0)


class RoadPage(BaseModel):
    """Response envelope for GET /roads."""
    meta: RoadPageMeta
    data: list[RoadRecord] = []
