"""
Health Check Endpoint.

Liveness plus a storage round trip. Always answers 200; a storage
failure is reported in the body rather than as an error status.
"""

from fastapi import APIRouter
from sqlalchemy import text

from todoboard.backend.core.dependencies import DbSession
from todoboard.backend.core.logging import get_logger
from todoboard.backend.schemas.base import HealthResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Process is up and the database answers SELECT 1.",
)
async def health_check(db: DbSession) -> HealthResponse:
    """Report liveness and database reachability."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        await db.rollback()
        return HealthResponse(ok=False, db="error")
    return HealthResponse(ok=True, db="ok")
