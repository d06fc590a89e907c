"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - seed_roads loads a small road network with deliberate duplicate relation
      rows and one road that has streets but no districts

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for the
      lookup queries (LIKE, DISTINCT, COUNT(DISTINCT), outer joins, IN)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from geolookup.db.base import Base
from geolookup.infrastructure.database import get_db, DatabaseSessionManager
from geolookup.models import (
    District, DistrictStreetRelation, StreetRoadRelation, RoadDistrictRelation,
)
import geolookup.infrastructure.database as db_module
from geolookup.main import app

DISTRICTS = ["North", "South", "East"]

STREET_ROADS = [
    ("1st Ave", "Main St"),
    ("2nd Ave", "Main St"),
    ("1st Ave", "Main St"),  # duplicate pair
    ("Bay St", "Harbor Rd"),
    ("Elm St", "Lake Rd"),
    ("Pine St", "Lake Rd"),
    ("Elm St", "Oak Ave"),
    ("Bay St", "Ring Rd"),
    ("Pine St", "Quiet Ln"),  # road with no district rows
]

ROAD_DISTRICTS = [
    ("Main St", "North"),
    ("Main St", "North"),  # duplicate pair
    ("Harbor Rd", "South"),
    ("Lake Rd", "East"),
    ("Lake Rd", "North"),
    ("Oak Ave", "East"),
    ("Ring Rd", "South"),
    ("Ring Rd", "East"),
]

DISTRICT_STREETS = [
    ("North", "1st Ave"),
    ("North", "2nd Ave"),
    ("South", "Bay St"),
    ("East", "Elm St"),
    ("East", "Pine St"),
    ("North", "Pine St"),
]


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_roads(test_db):
    """Insert the sample road network into the test DB."""
    test_db.add_all([District(district_name=n) for n in DISTRICTS])
    await test_db.flush()
    test_db.add_all([
        StreetRoadRelation(street_name=s, road_name=r) for s, r in STREET_ROADS
    ])
    test_db.add_all([
        RoadDistrictRelation(road_name=r, district_name=d) for r, d in ROAD_DISTRICTS
    ])
    test_db.add_all([
        DistrictStreetRelation(district_name=d, street_name=s)
        for d, s in DISTRICT_STREETS
    ])
    await test_db.commit()
    return test_db


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for the readiness check, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
