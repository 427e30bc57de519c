"""
Integration Test Fixtures.

Fixtures for integration tests - real database, real services, real app.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todoboard.backend.core.database import get_db_session
from todoboard.backend.core.dependencies import get_hub
from todoboard.backend.events.hub import BroadcastHub


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def app(
    db_session_factory: async_sessionmaker[AsyncSession],
    hub: BroadcastHub,
) -> FastAPI:
    """
    Application wired to the per-test database and hub.

    ASGITransport does not run the lifespan, so nothing touches the
    configured database file.
    """
    from todoboard.backend.main import create_app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application = create_app()
    application.dependency_overrides[get_db_session] = override_get_db_session
    application.dependency_overrides[get_hub] = lambda: hub
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client against the wired application.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/api/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def create_category(client: AsyncClient):
    """Factory fixture: create a category over the API and return its JSON."""

    async def _create(**fields: Any) -> dict[str, Any]:
        body = {"name": "Errands", **fields}
        response = await client.post("/api/categories", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_todo(client: AsyncClient):
    """Factory fixture: create a todo over the API and return its JSON."""

    async def _create(**fields: Any) -> dict[str, Any]:
        body = {"title": "Write tests", **fields}
        response = await client.post("/api/todos", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_ok(response: Any, expected_status: int = 200) -> Any:
        """
        Assert a successful response and return its JSON body.

        Success bodies are the bare entity, list, or {"ok": true}.
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error envelope.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code
            expected_code: Expected error code (optional)

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("data") is None
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is a request validation error (422).

        Args:
            response: httpx Response object
            field: Field expected among the validation errors (optional)
        """
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")
        if field:
            fields = [e["field"] for e in data["error"]["details"]["validation_errors"]]
            assert any(field in f for f in fields), (
                f"Expected validation error for {field}, got {fields}"
            )
        return data


@pytest.fixture
def api() -> type[ApiAssertions]:
    """Provide API assertion helpers."""
    return ApiAssertions
