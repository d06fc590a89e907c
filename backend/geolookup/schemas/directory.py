"""Directory Schemas — Pydantic models for the /streets listing."""

from pydantic import BaseModel


class DistrictStreet(BaseModel):
    """A (street, district) pair from district_street_relations."""
    street_name: str
    district_name: str
