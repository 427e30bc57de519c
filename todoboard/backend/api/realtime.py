"""
Realtime WebSocket Endpoint.

GET /ws/updates streams change events as JSON text frames.
"""

from fastapi import APIRouter, WebSocket

from todoboard.backend.events.hub import get_broadcast_hub
from todoboard.backend.realtime.gateway import RealtimeGateway

router = APIRouter()


@router.websocket("/ws/updates")
async def updates(websocket: WebSocket) -> None:
    """Push every change event to the connected client."""
    await RealtimeGateway(get_broadcast_hub()).serve(websocket)
