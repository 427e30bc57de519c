"""
Todo Model.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from todoboard.backend.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class Todo(UUIDMixin, TimestampMixin, SoftDeleteMixin, Base):
    """
    Todo database model.

    status is stored as plain text; allowed values are enforced
    by the request schemas. tags is an opaque client-owned blob.
    """

    __tablename__ = "todos"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    note: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(16),
        default="todo",
        nullable=False,
        index=True,
    )
    priority: Mapped[int] = mapped_column(
        Integer,
        default=1,
        nullable=False,
    )
    due_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
    )
    tags: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    category_id: Mapped[str | None] = mapped_column(
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )
    sort_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, title={self.title!r}, status={self.status})>"
