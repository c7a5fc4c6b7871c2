"""
SpotBnB Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests (no DB)
    ├── db:              Fresh SQLite schema per test; engine disposed afterwards
    ├── owner / other_user: Two users, each with a signed bearer token
    ├── spot:            A spot owned by `owner`
    └── test_client:     HTTPX AsyncClient bound to a fresh app instance
"""

import os
import tempfile

# Override settings BEFORE any spotbnb import: the engine is built at import
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="spotbnb_test_"), "test.db")
)
os.environ["JWT_SECRET"] = "test-secret-not-real-0123456789abcdef0123456789"
os.environ["LOG_LEVEL"] = "WARNING"

from dataclasses import dataclass
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from spotbnb.auth import AuthUser, create_access_token
from spotbnb.database import Base, async_session_factory, engine
from spotbnb.models import Spot, User


@dataclass
class UserFixture:
    id: int
    token: str

    @property
    def headers(self):
        return {"Authorization": f"Bearer {self.token}"}


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_spot(mock_db_session):
            mock_db_session.get.return_value = None
            with pytest.raises(NotFoundError):
                await service.get_spot(mock_db_session, 1)
    """
    session = AsyncMock()
    session.get = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def auth_user():
    return AuthUser(
        id=1,
        email="owner@example.com",
        username="owner",
        first_name="Olive",
        last_name="Owner",
    )


@pytest.fixture
def sample_spot_payload():
    return {
        "address": "1 Main St",
        "city": "X",
        "state": "Y",
        "country": "Z",
        "lat": 10,
        "lng": 10,
        "name": "A",
        "description": "d",
        "price": 5,
    }


# ══════════════════════════════════════════════════════════════════════════
# Database-backed fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db():
    """Creates every table, yields, then drops the connections with the loop."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # aiosqlite connections are bound to this test's event loop
    await engine.dispose()


async def _create_user(email: str, username: str, first: str, last: str) -> UserFixture:
    async with async_session_factory() as session:
        user = User(email=email, username=username, first_name=first, last_name=last)
        session.add(user)
        await session.commit()
        return UserFixture(id=user.id, token=create_access_token(user.id))


@pytest_asyncio.fixture
async def owner(db) -> UserFixture:
    return await _create_user("owner@example.com", "owner", "Olive", "Owner")


@pytest_asyncio.fixture
async def other_user(db) -> UserFixture:
    return await _create_user("guest@example.com", "guest", "Gus", "Guest")


@pytest_asyncio.fixture
async def spot(owner) -> int:
    """Id of a spot owned by `owner`."""
    async with async_session_factory() as session:
        row = Spot(
            owner_id=owner.id,
            address="12 Harbor Rd",
            city="Portland",
            state="ME",
            country="USA",
            lat=43.66,
            lng=-70.25,
            name="Harbor Loft",
            description="Two rooms over the water.",
            price=180.0,
        )
        session.add(row)
        await session.commit()
        return row.id


@pytest_asyncio.fixture
async def test_client(db):
    """
    HTTPX AsyncClient routed straight into a fresh app instance.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from spotbnb.main import create_app
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
