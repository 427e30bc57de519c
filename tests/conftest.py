"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests use a fresh in-memory SQLite database per test. Services commit
    their own transactions, so rolling back a shared session would not
    isolate tests; a new engine per test does.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from todoboard.backend.core.database import install_sqlite_pragmas
from todoboard.backend.events.hub import BroadcastHub
from todoboard.backend.events.publishers import ChangeEventPublisher
from todoboard.backend.repositories.schema import bootstrap_schema

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create an in-memory database with the full schema and no seed data.

    StaticPool keeps the single in-memory connection alive for the
    lifetime of the engine.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    install_sqlite_pragmas(engine)

    async with engine.begin() as conn:
        await bootstrap_schema(conn, seed_defaults=False)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Usage:
        async def test_insert(db_session: AsyncSession):
            repo = TodoRepository(db_session)
            ...
    """
    async with db_session_factory() as session:
        yield session


# =============================================================================
# Change Notification Fixtures
# =============================================================================


@pytest.fixture
def hub() -> BroadcastHub:
    """A private broadcast hub, isolated from the process-wide one."""
    return BroadcastHub(capacity=256)


@pytest.fixture
def publisher(hub: BroadcastHub) -> ChangeEventPublisher:
    """Publisher wired to the test hub."""
    return ChangeEventPublisher(hub)
