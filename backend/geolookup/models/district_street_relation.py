"""DistrictStreetRelation ORM — many-to-many pairing of districts and streets."""

from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from geolookup.db.base import Base


class DistrictStreetRelation(Base):
    """One (district, street) pair. Duplicate pairs are allowed."""
    __tablename__ = "district_street_relations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    district_name: Mapped[str] = mapped_column(
        String(200), ForeignKey("districts.district_name"), nullable=False, index=True,
    )
    street_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
