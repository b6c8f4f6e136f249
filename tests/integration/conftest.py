"""Integration test fixtures for store-backed operations.

Every test gets its own SQLite file under tmp_path, migrated to head.
Uses polyfactory for type-safe test data generation.
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.timekeeper.core.db import create_store_engine, get_session, run_migrations_sync
from src.timekeeper.main import Timekeeper
from tests.helpers import FakeClock


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'timekeeper.db'}"


@pytest.fixture
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create a store engine over a freshly migrated database."""
    await asyncio.to_thread(run_migrations_sync, database_url)

    test_engine = create_store_engine(database_url)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does not auto-commit. Helpers in tests.helpers commit
    their own inserts; services commit through unit_of_work.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
def tk(db_session: AsyncSession, clock: FakeClock) -> Timekeeper:
    """Services bound to the test session and the fake clock."""
    return Timekeeper.from_session(db_session, clock=clock)
