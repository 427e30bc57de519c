"""
Todos API Endpoints.

REST API endpoints for todo management. Successful responses are the
bare entity (or list); errors use the standard error envelope.
"""

from fastapi import APIRouter, Query

from todoboard.backend.core.dependencies import DbSession, Publisher
from todoboard.backend.schemas.base import OkResponse
from todoboard.backend.schemas.todo import ReorderItem, TodoCreate, TodoResponse, TodoUpdate
from todoboard.backend.services.todo import TodoService

router = APIRouter()


@router.get(
    "",
    response_model=list[TodoResponse],
    summary="List todos",
    description="Todos ordered by priority, due date (undated last), sort order and age.",
)
async def list_todos(
    db: DbSession,
    publisher: Publisher,
    status: str | None = Query(default=None, description="Only todos with this status"),
    include_deleted: bool = Query(default=False, description="Include soft-deleted todos"),
) -> list[TodoResponse]:
    """List todos."""
    service = TodoService(db, publisher)
    todos = await service.list_todos(status=status, include_deleted=include_deleted)
    return [TodoResponse.model_validate(todo) for todo in todos]


@router.post(
    "",
    response_model=TodoResponse,
    status_code=201,
    summary="Create a todo",
)
async def create_todo(
    data: TodoCreate,
    db: DbSession,
    publisher: Publisher,
) -> TodoResponse:
    """Create a new todo."""
    service = TodoService(db, publisher)
    todo = await service.create_todo(data)
    return TodoResponse.model_validate(todo)


@router.post(
    "/reorder",
    response_model=OkResponse,
    summary="Reorder todos",
    description="Apply sort orders to many todos at once. All or nothing.",
)
async def reorder_todos(
    items: list[ReorderItem],
    db: DbSession,
    publisher: Publisher,
) -> OkResponse:
    """Bulk reorder."""
    service = TodoService(db, publisher)
    await service.reorder(items)
    return OkResponse()


@router.get(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Get a todo",
)
async def get_todo(
    todo_id: str,
    db: DbSession,
    publisher: Publisher,
) -> TodoResponse:
    """Get a todo by ID."""
    service = TodoService(db, publisher)
    todo = await service.get_todo(todo_id)
    return TodoResponse.model_validate(todo)


@router.put(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Update a todo",
    description=(
        "Partial update. Only provided fields change; null clears optional fields. "
        "Setting deleted to true is announced as todo.deleted."
    ),
)
async def update_todo(
    todo_id: str,
    data: TodoUpdate,
    db: DbSession,
    publisher: Publisher,
) -> TodoResponse:
    """Update a todo."""
    service = TodoService(db, publisher)
    todo = await service.update_todo(todo_id, data)
    return TodoResponse.model_validate(todo)


@router.patch(
    "/{todo_id}/status",
    response_model=TodoResponse,
    summary="Change todo status",
)
async def update_todo_status(
    todo_id: str,
    db: DbSession,
    publisher: Publisher,
    status: str | None = Query(default=None, description="todo, doing, done or archived"),
) -> TodoResponse:
    """Change only the status of a todo."""
    service = TodoService(db, publisher)
    todo = await service.update_status(todo_id, status)
    return TodoResponse.model_validate(todo)


@router.delete(
    "/{todo_id}",
    response_model=OkResponse,
    summary="Delete a todo",
    description="Soft delete. The todo stays retrievable by ID.",
)
async def delete_todo(
    todo_id: str,
    db: DbSession,
    publisher: Publisher,
) -> OkResponse:
    """Soft-delete a todo."""
    service = TodoService(db, publisher)
    await service.delete_todo(todo_id)
    return OkResponse()
