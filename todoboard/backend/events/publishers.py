"""
Event Publishers.

Builds typed change events from committed entities and hands them to
the broadcast hub as JSON text.

Publishers check the events_publish_enabled feature flag before publishing.
When disabled, events are silently skipped (no error, no log noise).
Publishing can never fail a mutation: the hub does not block or raise.

Usage:
    from todoboard.backend.events.publishers import ChangeEventPublisher

    publisher = ChangeEventPublisher(get_broadcast_hub())
    publisher.todo_created(todo)
"""

from collections.abc import Iterable

from todoboard.backend.core.logging import get_logger
from todoboard.backend.events.hub import BroadcastHub
from todoboard.backend.events.schemas import (
    CategoryCreated,
    CategoryDeleted,
    CategoryUpdated,
    ChangeEvent,
    TodoCreated,
    TodoDeleted,
    TodosReordered,
    TodoUpdated,
)
from todoboard.backend.models.category import Category
from todoboard.backend.models.todo import Todo
from todoboard.backend.schemas.category import CategoryResponse
from todoboard.backend.schemas.todo import TodoResponse

logger = get_logger(__name__)


def _todo_data(todo: Todo) -> dict:
    return TodoResponse.model_validate(todo).model_dump(mode="json")


def _category_data(category: Category) -> dict:
    return CategoryResponse.model_validate(category).model_dump(mode="json")


class ChangeEventPublisher:
    """Publishes todo and category change events to a BroadcastHub."""

    def __init__(self, hub: BroadcastHub) -> None:
        self.hub = hub

    def todo_created(self, todo: Todo) -> int:
        return self.publish(TodoCreated(data=_todo_data(todo)))

    def todo_updated(self, todo: Todo) -> int:
        return self.publish(TodoUpdated(data=_todo_data(todo)))

    def todo_deleted(self, todo_id: str) -> int:
        return self.publish(TodoDeleted(data={"id": todo_id}))

    def todos_reordered(self, pairs: Iterable[tuple[str, int]]) -> int:
        return self.publish(
            TodosReordered(data=[{"id": id, "sort_order": order} for id, order in pairs])
        )

    def category_created(self, category: Category) -> int:
        return self.publish(CategoryCreated(data=_category_data(category)))

    def category_updated(self, category: Category) -> int:
        return self.publish(CategoryUpdated(data=_category_data(category)))

    def category_deleted(self, category_id: str) -> int:
        return self.publish(CategoryDeleted(data={"id": category_id}))

    def publish(self, event: ChangeEvent) -> int:
        """
        Publish an event if the feature flag is enabled.

        Returns:
            Number of subscribers reached (0 when disabled)
        """
        from todoboard.backend.core.config import get_app_config

        if not get_app_config().features.events_publish_enabled:
            return 0

        delivered = self.hub.publish(event.model_dump_json())
        logger.debug(
            "Event published",
            extra={"event_type": event.type, "subscribers": delivered},
        )
        return delivered
