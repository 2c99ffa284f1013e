"""Test configuration and fixtures"""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from hotelbook.main import app
from hotelbook.database import Base, SchemaState, get_db
from hotelbook.api.deps import get_store
from hotelbook.services.lifecycle import ReservationLifecycle
from hotelbook.services.store import ReservationStore
from hotelbook.schemas.reservation import ReservationCreate


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def future(days: int) -> str:
    """ISO date a number of days from today"""
    return (date.today() + timedelta(days=days)).isoformat()


def booking_payload(**overrides) -> dict:
    payload = {
        "guest_first_name": "Ana",
        "guest_last_name": "Restrepo",
        "email": "ana@example.com",
        "phone": "+573001112233",
        "check_in_date": future(5),
        "check_out_date": future(8),
        "room_type": "double",
        "occupant_count": 2,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def test_engine():
    """In-memory engine with the reservations table created"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    """Create test database session"""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session


@pytest.fixture
def schema_state():
    return SchemaState()


@pytest.fixture
def store(test_db, schema_state):
    return ReservationStore(test_db, schema_state)


@pytest.fixture
def lifecycle(store):
    return ReservationLifecycle(store)


@pytest.fixture
def legacy_lifecycle(store):
    return ReservationLifecycle(store, status_policy="legacy")


@pytest.fixture
async def test_reservations(lifecycle):
    """Three stored reservations, created in order"""
    created = []
    for first, email, room_type, check_in in [
        ("Ana", "ana@example.com", "double", 2),
        ("Carlos", "carlos@example.com", "single", 10),
        ("Lucia", "ana@example.com", "suite", 20),
    ]:
        reservation = await lifecycle.create(ReservationCreate(**booking_payload(
            guest_first_name=first,
            email=email,
            room_type=room_type,
            check_in_date=future(check_in),
            check_out_date=future(check_in + 2),
        )))
        created.append(reservation)
    return created


@pytest.fixture
async def client(test_db, schema_state):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    def override_get_store():
        return ReservationStore(test_db, schema_state)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_store] = override_get_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
