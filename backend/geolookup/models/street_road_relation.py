"""StreetRoadRelation ORM — many-to-many pairing of streets and roads.

Invariants:
    - The set of distinct road_name values here is the universe of roads the
      /roads lookup pages over; there is no separate roads table
    - Duplicate (street, road) pairs are allowed
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from geolookup.db.base import Base


class StreetRoadRelation(Base):
    """One (street, road) pair."""
    __tablename__ = "street_road_relations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    street_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    road_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
