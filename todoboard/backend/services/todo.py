"""
Todo Service.

Business logic layer for todos. Every successful mutation commits
first and then publishes exactly one change event.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from todoboard.backend.core.exceptions import ValidationError
from todoboard.backend.core.utils import new_id, utc_now
from todoboard.backend.events.publishers import ChangeEventPublisher
from todoboard.backend.models.todo import Todo
from todoboard.backend.repositories.category import CategoryRepository
from todoboard.backend.repositories.todo import TodoRepository
from todoboard.backend.schemas.todo import TODO_STATUSES, ReorderItem, TodoCreate, TodoUpdate
from todoboard.backend.services.base import BaseService


class TodoService(BaseService):
    """
    Service for todo business logic.

    Handles creation, partial updates, status changes, soft deletes
    and bulk reordering.
    """

    def __init__(self, session: AsyncSession, publisher: ChangeEventPublisher) -> None:
        super().__init__(session)
        self.repo = TodoRepository(session)
        self.category_repo = CategoryRepository(session)
        self.publisher = publisher

    async def list_todos(
        self,
        status: str | None = None,
        include_deleted: bool = False,
    ) -> list[Todo]:
        """
        List todos in display order.

        Args:
            status: Only return todos with this status
            include_deleted: Whether to include soft-deleted todos

        Returns:
            Ordered list of todos
        """
        return await self._execute_db_operation(
            "list_todos",
            self.repo.list_todos(status_filter=status, include_deleted=include_deleted),
        )

    async def get_todo(self, todo_id: str) -> Todo:
        """
        Get a todo by ID, including soft-deleted ones.

        Raises:
            NotFoundError: If todo not found
        """
        return await self._execute_db_operation("get_todo", self.repo.get_by_id(todo_id))

    async def create_todo(self, data: TodoCreate) -> Todo:
        """
        Create a new todo.

        Args:
            data: Todo creation data

        Returns:
            Created todo

        Raises:
            ValidationError: If category_id names no active category
        """
        self._log_operation("Creating todo", title=data.title)

        if data.category_id is not None:
            await self._require_active_category(data.category_id)

        now = utc_now()
        todo = Todo(
            id=new_id(),
            title=data.title,
            note=data.note,
            status=data.status,
            priority=data.priority,
            due_at=data.due_at,
            tags=data.tags,
            category_id=data.category_id,
            sort_order=data.sort_order,
            created_at=now,
            updated_at=now,
            deleted=False,
        )
        todo = await self._run_in_transaction("create_todo", self.repo.insert(todo))

        self.publisher.todo_created(todo)
        self._log_debug("Todo created", todo_id=todo.id)
        return todo

    async def update_todo(self, todo_id: str, data: TodoUpdate) -> Todo:
        """
        Apply a partial update.

        Only fields present in the payload change; updated_at is
        always refreshed. Flipping deleted to true publishes
        todo.deleted instead of todo.updated.

        Raises:
            NotFoundError: If todo not found
            ValidationError: If category_id names no active category
        """
        todo = await self.get_todo(todo_id)
        changes = data.changes()
        was_deleted = todo.deleted

        if changes.get("category_id") is not None:
            await self._require_active_category(changes["category_id"])

        for field, value in changes.items():
            setattr(todo, field, value)
        todo.updated_at = utc_now()

        todo = await self._run_in_transaction("update_todo", self.repo.replace(todo))

        if todo.deleted and not was_deleted:
            self.publisher.todo_deleted(todo.id)
        else:
            self.publisher.todo_updated(todo)
        self._log_debug("Todo updated", todo_id=todo_id, fields=sorted(changes))
        return todo

    async def update_status(self, todo_id: str, status: str | None) -> Todo:
        """
        Change only the status of a todo.

        Raises:
            ValidationError: If status is missing or not a known value
            NotFoundError: If todo not found
        """
        if not status:
            raise ValidationError("missing status")
        if status not in TODO_STATUSES:
            raise ValidationError(
                f"invalid status: {status}",
                details={"allowed": list(TODO_STATUSES)},
            )

        todo = await self.get_todo(todo_id)
        todo.status = status
        todo.updated_at = utc_now()

        todo = await self._run_in_transaction("update_status", self.repo.replace(todo))

        self.publisher.todo_updated(todo)
        self._log_debug("Todo status changed", todo_id=todo_id, status=status)
        return todo

    async def delete_todo(self, todo_id: str) -> None:
        """
        Soft-delete a todo.

        Raises:
            NotFoundError: If todo not found
        """
        self._log_operation("Deleting todo", todo_id=todo_id)
        await self._run_in_transaction("delete_todo", self.repo.soft_delete(todo_id))
        self.publisher.todo_deleted(todo_id)

    async def reorder(self, items: list[ReorderItem]) -> None:
        """
        Apply a bulk reorder atomically.

        Raises:
            NotFoundError: If any id is unknown; nothing is changed
        """
        pairs = [(item.id, item.sort_order) for item in items]
        self._log_operation("Reordering todos", count=len(pairs))

        await self._run_in_transaction("reorder_todos", self.repo.set_sort_orders(pairs))

        self.publisher.todos_reordered(pairs)

    async def _require_active_category(self, category_id: str) -> None:
        is_active = await self._execute_db_operation(
            "check_category",
            self.category_repo.is_active(category_id),
        )
        if not is_active:
            raise ValidationError(
                "Unknown category",
                details={"category_id": category_id},
            )
