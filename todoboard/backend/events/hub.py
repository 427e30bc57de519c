"""
Broadcast Hub.

In-process fan-out of change notifications to every live subscriber.

Each subscriber owns a bounded FIFO. Publishing never blocks: when a
subscriber's queue is full its oldest pending message is discarded to
make room, so a slow consumer loses history but never stalls writers
or other consumers. Messages are opaque strings delivered in publish
order. There is no replay; a new subscriber only sees what is
published after it subscribed.

Usage:
    from todoboard.backend.events.hub import get_broadcast_hub

    hub = get_broadcast_hub()
    with hub.subscription() as sub:
        async for message in sub:
            ...
"""

import asyncio
from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager
from itertools import count

from todoboard.backend.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CAPACITY = 256

_subscription_ids = count(1)


class Subscription:
    """A subscriber's handle: its queue plus a count of dropped messages."""

    def __init__(self, capacity: int) -> None:
        self.id = next(_subscription_ids)
        self.dropped = 0
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=capacity)

    @property
    def pending(self) -> int:
        """Messages waiting to be received."""
        return self._queue.qsize()

    def offer(self, message: str) -> None:
        """Enqueue without blocking, evicting the oldest message if full."""
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            self._queue.get_nowait()
            self.dropped += 1
            self._queue.put_nowait(message)

    async def receive(self) -> str:
        """Wait for the next message."""
        return await self._queue.get()

    def receive_nowait(self) -> str | None:
        """Return the next message, or None if nothing is pending."""
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def __aiter__(self) -> AsyncIterator[str]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        while True:
            yield await self.receive()

    def __repr__(self) -> str:
        return f"<Subscription(id={self.id}, pending={self.pending}, dropped={self.dropped})>"


class BroadcastHub:
    """Registry of subscriptions with non-blocking, drop-oldest fan-out."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._subscriptions: dict[int, Subscription] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self) -> Subscription:
        """Register a new subscriber. It receives only later messages."""
        subscription = Subscription(self.capacity)
        self._subscriptions[subscription.id] = subscription
        logger.debug(
            "Subscriber added",
            extra={"subscription_id": subscription.id, "subscribers": self.subscriber_count},
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscriber. Unknown or already removed ones are ignored."""
        if self._subscriptions.pop(subscription.id, None) is None:
            return
        logger.debug(
            "Subscriber removed",
            extra={
                "subscription_id": subscription.id,
                "dropped": subscription.dropped,
                "subscribers": self.subscriber_count,
            },
        )

    @contextmanager
    def subscription(self) -> Iterator[Subscription]:
        """Subscribe for the duration of a with block."""
        subscription = self.subscribe()
        try:
            yield subscription
        finally:
            self.unsubscribe(subscription)

    def publish(self, message: str) -> int:
        """
        Deliver a message to every current subscriber.

        Returns:
            Number of subscribers the message was queued for
        """
        subscriptions = list(self._subscriptions.values())
        for subscription in subscriptions:
            subscription.offer(message)
        return len(subscriptions)


_hub: BroadcastHub | None = None


def get_broadcast_hub() -> BroadcastHub:
    """
    Get the shared broadcast hub (lazy initialization).

    Capacity comes from events.yaml.
    """
    global _hub
    if _hub is None:
        from todoboard.backend.core.config import get_app_config

        capacity = get_app_config().events.hub.capacity
        _hub = BroadcastHub(capacity=capacity)
        logger.info("Broadcast hub created", extra={"capacity": capacity})
    return _hub


def reset_broadcast_hub() -> None:
    """Forget the shared hub so the next call builds a fresh one."""
    global _hub
    _hub = None
