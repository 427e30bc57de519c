"""
Todo Repository.

Data access layer for Todo entities.
"""

from collections.abc import Iterable

from sqlalchemy import select, update

from todoboard.backend.core.exceptions import NotFoundError
from todoboard.backend.core.utils import utc_now
from todoboard.backend.models.todo import Todo
from todoboard.backend.repositories.base import BaseRepository


class TodoRepository(BaseRepository[Todo]):
    """Repository for Todo database operations."""

    model = Todo

    async def list_todos(
        self,
        status_filter: str | None = None,
        include_deleted: bool = False,
    ) -> list[Todo]:
        """
        List todos in display order.

        Order: priority descending, due_at ascending with undated
        todos last, then sort_order, then creation time.
        """
        query = select(Todo)

        if not include_deleted:
            query = query.where(Todo.deleted.is_(False))
        if status_filter:
            query = query.where(Todo.status == status_filter)

        query = query.order_by(
            Todo.priority.desc(),
            Todo.due_at.is_(None),
            Todo.due_at.asc(),
            Todo.sort_order.asc(),
            Todo.created_at.asc(),
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def set_sort_orders(self, pairs: Iterable[tuple[str, int]]) -> None:
        """
        Apply (id, sort_order) pairs in the current transaction.

        Stops at the first unknown id; the caller rolls back.

        Raises:
            NotFoundError: If any id does not exist
        """
        now = utc_now()
        for todo_id, sort_order in pairs:
            result = await self.session.execute(
                update(Todo)
                .where(Todo.id == todo_id)
                .values(sort_order=sort_order, updated_at=now)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Todo not found: {todo_id}", details={"id": todo_id})
        await self.session.flush()
