"""
Category Repository.

Data access layer for Category entities.
"""

from sqlalchemy import func, select

from todoboard.backend.models.category import Category
from todoboard.backend.models.todo import Todo
from todoboard.backend.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category database operations."""

    model = Category

    async def list_categories(self, include_deleted: bool = False) -> list[Category]:
        """List categories ordered by sort_order, then name."""
        query = select(Category)
        if not include_deleted:
            query = query.where(Category.deleted.is_(False))
        query = query.order_by(Category.sort_order.asc(), Category.name.asc())

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_active_todos(self, category_id: str) -> int:
        """Count non-deleted todos assigned to the category."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Todo)
            .where(Todo.category_id == category_id, Todo.deleted.is_(False))
        )
        return result.scalar_one()

    async def count_active(self) -> int:
        """Count non-deleted categories."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Category)
            .where(Category.deleted.is_(False))
        )
        return result.scalar_one()

    async def is_active(self, category_id: str) -> bool:
        """Check that a category exists and is not deleted."""
        result = await self.session.execute(
            select(Category.id).where(
                Category.id == category_id,
                Category.deleted.is_(False),
            )
        )
        return result.scalar_one_or_none() is not None
