"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todoboard.backend.core.database import get_db_session
from todoboard.backend.events.hub import BroadcastHub, get_broadcast_hub
from todoboard.backend.events.publishers import ChangeEventPublisher

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_hub() -> BroadcastHub:
    """Provide the process-wide broadcast hub."""
    return get_broadcast_hub()


Hub = Annotated[BroadcastHub, Depends(get_hub)]


def get_publisher(hub: Hub) -> ChangeEventPublisher:
    """Provide a change event publisher bound to the hub."""
    return ChangeEventPublisher(hub)


Publisher = Annotated[ChangeEventPublisher, Depends(get_publisher)]
