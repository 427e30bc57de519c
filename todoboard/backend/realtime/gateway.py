"""
Realtime Gateway.

Bridges one WebSocket connection to the broadcast hub. Each connection
runs two tasks:

- relay: forwards every hub message to the peer as a text frame
- drain: reads and discards inbound frames until the peer goes away

Whichever finishes first ends the connection; the other is cancelled
and the subscription is removed. There is no inbound protocol.
"""

import asyncio

from starlette.websockets import WebSocket

from todoboard.backend.core.logging import get_logger, log_with_source
from todoboard.backend.events.hub import BroadcastHub, Subscription

logger = get_logger(__name__)


class RealtimeGateway:
    """Serves WebSocket subscribers from a BroadcastHub."""

    def __init__(self, hub: BroadcastHub) -> None:
        self.hub = hub

    async def serve(self, websocket: WebSocket) -> None:
        """
        Run a connection until either direction ends.

        The subscription is registered before the handshake completes,
        so anything published after the client sees the accept is
        delivered.
        """
        subscription = self.hub.subscribe()
        try:
            await websocket.accept()
        except Exception:
            self.hub.unsubscribe(subscription)
            raise
        log_with_source(
            logger, "ws", "info", "Realtime client connected",
            subscription_id=subscription.id,
            subscribers=self.hub.subscriber_count,
        )

        relay = asyncio.create_task(self._relay(websocket, subscription))
        drain = asyncio.create_task(self._drain(websocket))
        try:
            done, pending = await asyncio.wait(
                {relay, drain},
                return_when=asyncio.FIRST_COMPLETED,
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            for task in done:
                if not task.cancelled() and task.exception() is not None:
                    log_with_source(
                        logger, "ws", "debug", "Connection task failed",
                        subscription_id=subscription.id,
                        error_type=type(task.exception()).__name__,
                    )
        finally:
            relay.cancel()
            drain.cancel()
            await asyncio.gather(relay, drain, return_exceptions=True)
            self.hub.unsubscribe(subscription)
            log_with_source(
                logger, "ws", "info", "Realtime client disconnected",
                subscription_id=subscription.id,
                dropped=subscription.dropped,
                subscribers=self.hub.subscriber_count,
            )

    async def _relay(self, websocket: WebSocket, subscription: Subscription) -> None:
        async for message in subscription:
            try:
                await websocket.send_text(message)
            except Exception as exc:
                log_with_source(
                    logger, "ws", "debug", "Send failed, closing relay",
                    subscription_id=subscription.id,
                    error_type=type(exc).__name__,
                )
                return

    async def _drain(self, websocket: WebSocket) -> None:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
