"""District ORM — a named administrative district."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from geolookup.db.base import Base


class District(Base):
    """District entity, identified by its unique name."""
    __tablename__ = "districts"

    district_name: Mapped[str] = mapped_column(String(200), primary_key=True)
