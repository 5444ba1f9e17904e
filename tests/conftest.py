# File: tests/conftest.py
"""Pytest configuration and fixtures."""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from parkmeter.core.db import Base, get_db
from parkmeter.core.store import SessionStore
from parkmeter.main import create_app

# Import all models so their tables are registered on Base.metadata
from parkmeter.models.parking_session import ParkingSession  # noqa: F401
from parkmeter.models.zone import ParkingZone  # noqa: F401

# Point at a Postgres database (postgresql+asyncpg://...) to run against the real dialect
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _create_test_engine():
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        return create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(TEST_DATABASE_URL, echo=False)


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Create fresh DB session (and fresh tables) for each test."""
    engine = _create_test_engine()
    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def store(db_session: AsyncSession) -> SessionStore:
    """Record store bound to the test session."""
    return SessionStore(db_session)


@pytest_asyncio.fixture
async def client(db_session: AsyncSession):
    """Create async test client with overridden DB dependency."""
    app = create_app()

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        ac.db_session = db_session
        yield ac
