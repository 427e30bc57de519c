"""
Event Schemas.

Change notifications pushed to realtime clients. Every event is the
envelope {"type": ..., "data": ...}; each subclass fixes the type.

Naming convention for type: entity.action, with todos.reordered
for the bulk operation.

Usage:
    from todoboard.backend.events.schemas import TodoCreated

    event = TodoCreated(data=TodoResponse.model_validate(todo).model_dump(mode="json"))
    message = event.model_dump_json()
"""

from typing import Any

from pydantic import BaseModel


class ChangeEvent(BaseModel):
    """Base envelope: all change events inherit from this."""

    type: str
    data: Any


class TodoCreated(ChangeEvent):
    """Published when a todo is created. data is the full todo."""

    type: str = "todo.created"
    data: dict[str, Any]


class TodoUpdated(ChangeEvent):
    """Published after any todo update, including status-only changes."""

    type: str = "todo.updated"
    data: dict[str, Any]


class TodoDeleted(ChangeEvent):
    """Published when a todo is soft-deleted. data is {"id": ...}."""

    type: str = "todo.deleted"
    data: dict[str, str]


class TodosReordered(ChangeEvent):
    """Published once per bulk reorder with the applied pairs."""

    type: str = "todos.reordered"
    data: list[dict[str, Any]]


class CategoryCreated(ChangeEvent):
    """Published when a category is created."""

    type: str = "category.created"
    data: dict[str, Any]


class CategoryUpdated(ChangeEvent):
    """Published after a category update."""

    type: str = "category.updated"
    data: dict[str, Any]


class CategoryDeleted(ChangeEvent):
    """Published when a category is soft-deleted."""

    type: str = "category.deleted"
    data: dict[str, str]
