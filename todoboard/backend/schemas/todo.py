"""
Todo Schemas.

Pydantic schemas for todo API request/response validation.
"""

from datetime import datetime
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from todoboard.backend.core.utils import to_naive_utc
from todoboard.backend.schemas.base import PartialUpdate, SortOrder

TodoStatus = Literal["todo", "doing", "done", "archived"]

TODO_STATUSES: tuple[str, ...] = ("todo", "doing", "done", "archived")

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

Priority = Annotated[int, Field(ge=0, le=3, description="0 (lowest) to 3 (most urgent)")]


def _normalize_due_at(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return to_naive_utc(value)


class TodoCreate(BaseModel):
    """Schema for creating a new todo."""

    title: Title = Field(description="Todo title", examples=["Buy milk"])
    note: str | None = Field(default=None, description="Free-form note")
    status: TodoStatus = Field(default="todo", description="Workflow status")
    priority: Priority = 1
    due_at: datetime | None = Field(default=None, description="Due timestamp")
    tags: str | None = Field(default=None, description="Opaque tag blob")
    category_id: str | None = Field(default=None, description="Owning category")
    sort_order: SortOrder = 0

    @field_validator("due_at")
    @classmethod
    def due_at_to_utc(cls, value: datetime | None) -> datetime | None:
        return _normalize_due_at(value)


class TodoUpdate(PartialUpdate):
    """
    Schema for a partial todo update.

    Only fields present in the body are applied.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"title", "status", "priority", "sort_order", "deleted"}
    )

    title: Title | None = None
    note: str | None = None
    status: TodoStatus | None = None
    priority: Priority | None = None
    due_at: datetime | None = None
    tags: str | None = None
    category_id: str | None = None
    sort_order: SortOrder | None = None
    deleted: bool | None = None

    @field_validator("due_at")
    @classmethod
    def due_at_to_utc(cls, value: datetime | None) -> datetime | None:
        return _normalize_due_at(value)


class TodoResponse(BaseModel):
    """Schema for todo in API responses and change events."""

    id: str
    title: str
    note: str | None
    status: str
    priority: int
    due_at: datetime | None
    tags: str | None
    category_id: str | None
    sort_order: int
    created_at: datetime
    updated_at: datetime
    deleted: bool

    model_config = ConfigDict(from_attributes=True)


class ReorderItem(BaseModel):
    """One (id, sort_order) pair of a bulk reorder."""

    id: str
    sort_order: SortOrder
