"""RoadDistrictRelation ORM — many-to-many pairing of roads and districts.

Invariants:
    - Maintained independently of district_street_relations; the two paths
      are not required to agree
    - A road may have street rows and no district rows (outer-joined as NULL)
"""

from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from geolookup.db.base import Base


class RoadDistrictRelation(Base):
    """One (road, district) pair. Duplicate pairs are allowed."""
    __tablename__ = "road_district_relations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    road_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    district_name: Mapped[str] = mapped_column(
        String(200), ForeignKey("districts.district_name"), nullable=False, index=True,
    )
