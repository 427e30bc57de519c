"""
Integration Tests for the Health Endpoint.
"""

from unittest.mock import patch

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession


class TestHealth:
    """Tests for GET /api/health."""

    async def test_reports_database_ok(self, client: AsyncClient):
        """Should report ok when SELECT 1 succeeds."""
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "db": "ok"}

    async def test_reports_database_failure(self, client: AsyncClient):
        """Should answer 200 with ok=false when the database is unreachable."""
        with patch.object(
            AsyncSession,
            "execute",
            side_effect=OperationalError("SELECT 1", {}, Exception("unable to open database")),
        ):
            response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"ok": False, "db": "error"}
