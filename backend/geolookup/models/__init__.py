"""ORM Models — SQLAlchemy declarative models for the lookup store's four tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Districts are keyed by name; streets and roads exist only as names
      inside the relation tables
    - Relation rows carry a surrogate id; name pairs are not assumed unique

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from geolookup.models.district import District  # noqa: F401
from geolookup.models.district_street_relation import DistrictStreetRelation  # noqa: F401
from geolookup.models.street_road_relation import StreetRoadRelation  # noqa: F401
from geolookup.models.road_district_relation import RoadDistrictRelation  # noqa: F401
