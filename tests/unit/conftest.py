"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = TodoService(mock_db_session, mock_publisher)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_publisher() -> MagicMock:
    """Mock change event publisher that records calls."""
    return MagicMock()


@pytest.fixture
def mock_request() -> MagicMock:
    """Mock Starlette request with a request ID in state."""
    request = MagicMock()
    request.url.path = "/api/todos"
    request.method = "GET"
    request.state.request_id = "req-123"
    request.headers = {}
    return request
