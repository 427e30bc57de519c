"""
Category Model.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from todoboard.backend.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class Category(UUIDMixin, TimestampMixin, SoftDeleteMixin, Base):
    """
    Category database model.

    Groups todos. A category cannot be soft-deleted while active
    todos still reference it; the service layer enforces that.
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    color: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    sort_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"
