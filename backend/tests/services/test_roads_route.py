"""GET /roads — HTTP envelope, lenient paging and error mapping.

Invariants:
    - Response is {meta: {totalRecords, page, pageSize, totalPages}, data: [...]}
    - Malformed page/pageSize are defaulted; a pageSize above the maximum is a 400
    - Page numbers past the last page return an empty page, whatever their size
    - Store failures surface as a single 503 DATABASE_ERROR response
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import geolookup.infrastructure.database as db_module
from geolookup.api.routes.roads import get_road_repository
from geolookup.core.errors import DatabaseError
from geolookup.infrastructure.database import DatabaseSessionManager, get_db
from geolookup.main import app


async def test_main_street_example(client, seed_roads):
    res = await client.get("/roads", params={"name": "Main", "page": "1", "pageSize": "20"})
    assert res.status_code == 200
    assert res.json() == {
        "meta": {"totalRecords": 1, "page": 1, "pageSize": 20, "totalPages": 1},
        "data": [
            {"road_name": "Main St", "streets": ["1st Ave", "2nd Ave"], "districts": ["North"]},
        ],
    }


async def test_defaults_without_query_params(client, seed_roads):
    res = await client.get("/roads")
    body = res.json()
    assert body["meta"] == {
        "totalRecords": 6, "page": 1, "pageSize": 20, "totalPages": 1,
    }
    assert [r["road_name"] for r in body["data"]] == [
        "Harbor Rd", "Lake Rd", "Main St", "Oak Ave", "Quiet Ln", "Ring Rd",
    ]


async def test_malformed_paging_is_defaulted(client, seed_roads):
    res = await client.get("/roads", params={"page": "abc", "pageSize": "0"})
    assert res.status_code == 200
    meta = res.json()["meta"]
    assert meta["page"] == 1
    assert meta["pageSize"] == 20


async def test_page_beyond_last(client, seed_roads):
    res = await client.get("/roads", params={"page": "9", "pageSize": "2"})
    body = res.json()
    assert body["data"] == []
    assert body["meta"] == {
        "totalRecords": 6, "page": 9, "pageSize": 2, "totalPages": 3,
    }


async def test_unknown_district_returns_empty_page(client, seed_roads):
    res = await client.get("/roads", params={"district": "Nowhere"})
    body = res.json()
    assert body["data"] == []
    assert body["meta"]["totalRecords"] == 0
    assert body["meta"]["totalPages"] == 0


async def test_combined_filters(client, seed_roads):
    res = await client.get("/roads", params={"district": "East", "street": "Elm St"})
    body = res.json()
    assert body["meta"]["totalRecords"] == 2
    lake = body["data"][0]
    assert lake == {
        "road_name": "Lake Rd",
        "streets": ["Elm St", "Pine St"],
        "districts": ["East", "North"],
    }


async def test_lists_are_sorted_and_unique(client, seed_roads):
    res = await client.get("/roads", params={"pageSize": "100"})
    for record in res.json()["data"]:
        assert record["streets"] == sorted(set(record["streets"]))
        assert record["districts"] == sorted(set(record["districts"]))


async def test_too_long_filter_is_validation_error(client):
    res = await client.get("/roads", params={"name": "x" * 201})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["details"][0]["field"] == "name"


class _FailingRepo:
    async def count_roads(self, compiled):
        raise DatabaseError("Connection or operational error", "execute")


async def test_store_failure_returns_503(client):
    app.dependency_overrides[get_road_repository] = lambda: _FailingRepo()
    res = await client.get("/roads")
    assert res.status_code == 503
    error = res.json()["error"]
    assert error["code"] == "DATABASE_ERROR"
    assert error["path"] == "/roads"


async def test_cors_header_present(client, seed_roads):
    res = await client.get("/roads", headers={"Origin": "http://example.com"})
    assert res.headers["access-control-allow-origin"] == "*"


async def test_huge_page_number_returns_empty_page(client, seed_roads):
    res = await client.get("/roads", params={"page": str(10**19)})
    assert res.status_code == 200
    body = res.json()
    assert body["data"] == []
    assert body["meta"] == {
        "totalRecords": 6, "page": 10**19, "pageSize": 20, "totalPages": 1,
    }


async def test_page_size_at_maximum_is_honoured(client, seed_roads):
    res = await client.get("/roads", params={"pageSize": "100"})
    assert res.status_code == 200
    assert res.json()["meta"]["pageSize"] == 100


@pytest.mark.parametrize("page_size", ["101", "500", str(10**19)])
async def test_page_size_above_maximum_is_rejected(client, seed_roads, page_size):
    res = await client.get("/roads", params={"pageSize": page_size})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "PAGE_SIZE_TOO_LARGE"
    assert error["details"][0]["field"] == "pageSize"
    assert error["path"] == "/roads"


@pytest.fixture
async def empty_store(client):
    """Route the real get_db through a manager whose database has no tables."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    app.dependency_overrides.pop(get_db, None)
    db_module.db_manager = manager
    yield manager
    await engine.dispose()


async def test_sqlalchemy_failure_through_get_db_returns_503(client, empty_store):
    res = await client.get("/roads")
    assert res.status_code == 503
    error = res.json()["error"]
    assert error["code"] == "DATABASE_ERROR"
    assert error["category"] == "database"
    assert error["message"] == "Database execute failed: Connection or operational error"
    assert "no such table" not in res.text
