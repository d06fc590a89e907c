"""Road Aggregation — folds flat (road, street, district) rows into one record per road.

Invariants:
    - Exactly one record per page road name, in page order, even when a road
      has no relation rows
    - streets/districts hold each name once, sorted ascending
    - A None street or district means "no entry" (never an empty-string name)
    - Rows for names outside the page are appended after the seeded records

Design Decisions:
    - Sets during the fold, sorted lists at the end: deterministic output
      regardless of row arrival order
"""

from collections.abc import Iterable, Mapping
from typing import Any


def aggregate_roads(
    page_road_names: Iterable[str],
    rows: Iterable[Mapping[str, Any]],
) -> list[dict]:
    """Aggregate relation rows into road records. Pure, no IO."""
    records: dict[str, dict] = {}
    for road_name in page_road_names:
        records.setdefault(road_name, _empty_record(road_name))

    for row in rows:
        road_name = row["road_name"]
        record = records.get(road_name)
        if record is None:
            record = records[road_name] = _empty_record(road_name)
        street_name = row.get("street_name")
        if street_name is not None:
            record["streets"].add(street_name)
        district_name = row.get("district_name")
        if district_name is not None:
            record["districts"].add(district_name)

    return [
        {
            "road_name": record["road_name"],
            "streets": sorted(record["streets"]),
            "districts": sorted(record["districts"]),
        }
        for record in records.values()
    ]


def _empty_record(road_name: str) -> dict:
    return {"road_name": road_name, "streets": set(), "districts": set()}
