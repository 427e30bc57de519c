"""
Unit Tests for Todo Service.

Tests the TodoService business logic with mocked dependencies.
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from todoboard.backend.core.exceptions import DatabaseError, NotFoundError, ValidationError
from todoboard.backend.models.todo import Todo
from todoboard.backend.schemas.todo import ReorderItem, TodoCreate, TodoUpdate
from todoboard.backend.services.todo import TodoService


def make_todo(**overrides) -> Todo:
    created = datetime(2024, 1, 1, 8, 0, 0)
    fields = {
        "id": "todo-1",
        "title": "Existing",
        "note": "keep me",
        "status": "todo",
        "priority": 1,
        "due_at": None,
        "tags": None,
        "category_id": None,
        "sort_order": 0,
        "created_at": created,
        "updated_at": created,
        "deleted": False,
    }
    fields.update(overrides)
    return Todo(**fields)


@pytest.fixture
def service(mock_db_session, mock_publisher):
    """Create TodoService with mocked session and publisher."""
    return TodoService(mock_db_session, mock_publisher)


async def _return_argument(instance):
    return instance


class TestCreateTodo:
    """Tests for todo creation."""

    async def test_create_sets_id_and_equal_timestamps(self, service, mock_publisher):
        """Should generate an id and set created_at == updated_at."""
        with patch.object(service.repo, "insert", side_effect=_return_argument) as mock_insert:
            todo = await service.create_todo(TodoCreate(title="Buy milk"))

        mock_insert.assert_awaited_once()
        assert todo.id
        assert todo.created_at == todo.updated_at
        assert todo.status == "todo"
        assert todo.priority == 1
        assert todo.sort_order == 0
        assert todo.deleted is False
        mock_publisher.todo_created.assert_called_once_with(todo)

    async def test_create_ids_are_unique(self, service):
        """Should generate a distinct id for each todo."""
        with patch.object(service.repo, "insert", side_effect=_return_argument):
            first = await service.create_todo(TodoCreate(title="a"))
            second = await service.create_todo(TodoCreate(title="b"))

        assert first.id != second.id

    async def test_create_publishes_after_commit(self, service, mock_db_session, mock_publisher):
        """Should commit before publishing the event."""
        calls = []
        mock_db_session.commit.side_effect = lambda: calls.append("commit")
        mock_publisher.todo_created.side_effect = lambda todo: calls.append("publish")

        with patch.object(service.repo, "insert", side_effect=_return_argument):
            await service.create_todo(TodoCreate(title="Ordered"))

        assert calls == ["commit", "publish"]

    async def test_no_event_when_commit_fails(self, service, mock_db_session, mock_publisher):
        """Should not publish when the write does not commit."""
        mock_db_session.commit.side_effect = SQLAlchemyError("locked")

        with patch.object(service.repo, "insert", side_effect=_return_argument):
            with pytest.raises(DatabaseError):
                await service.create_todo(TodoCreate(title="Lost"))

        mock_publisher.todo_created.assert_not_called()

    async def test_unknown_category_rejected(self, service, mock_publisher):
        """Should refuse a category_id that names no active category."""
        with patch.object(service.category_repo, "is_active", return_value=False), \
             patch.object(service.repo, "insert") as mock_insert:
            with pytest.raises(ValidationError):
                await service.create_todo(TodoCreate(title="t", category_id="missing"))

        mock_insert.assert_not_called()
        mock_publisher.todo_created.assert_not_called()


class TestUpdateTodo:
    """Tests for partial updates."""

    async def test_only_sent_fields_change(self, service, mock_publisher):
        """Should leave fields absent from the payload untouched."""
        existing = make_todo()

        with patch.object(service.repo, "get_by_id", return_value=existing), \
             patch.object(service.repo, "replace", side_effect=_return_argument):
            todo = await service.update_todo("todo-1", TodoUpdate.model_validate({"title": "Renamed"}))

        assert todo.title == "Renamed"
        assert todo.note == "keep me"
        assert todo.updated_at > todo.created_at
        mock_publisher.todo_updated.assert_called_once_with(todo)

    async def test_explicit_null_clears_note(self, service):
        """Should clear a nullable field sent as null."""
        existing = make_todo()

        with patch.object(service.repo, "get_by_id", return_value=existing), \
             patch.object(service.repo, "replace", side_effect=_return_argument):
            todo = await service.update_todo("todo-1", TodoUpdate.model_validate({"note": None}))

        assert todo.note is None

    async def test_missing_todo_raises_not_found(self, service, mock_publisher):
        """Should raise NotFoundError and publish nothing."""
        with patch.object(service.repo, "get_by_id", side_effect=NotFoundError("Todo not found")):
            with pytest.raises(NotFoundError):
                await service.update_todo("nope", TodoUpdate.model_validate({"title": "x"}))

        mock_publisher.todo_updated.assert_not_called()

    async def test_update_to_deleted_publishes_deleted(self, service, mock_publisher):
        """Should announce a soft delete made through update as todo.deleted."""
        with patch.object(service.repo, "get_by_id", return_value=make_todo()), \
             patch.object(service.repo, "replace", side_effect=_return_argument):
            todo = await service.update_todo("todo-1", TodoUpdate.model_validate({"deleted": True}))

        assert todo.deleted is True
        mock_publisher.todo_deleted.assert_called_once_with("todo-1")
        mock_publisher.todo_updated.assert_not_called()

    async def test_update_of_deleted_todo_publishes_updated(self, service, mock_publisher):
        with patch.object(service.repo, "get_by_id", return_value=make_todo(deleted=True)), \
             patch.object(service.repo, "replace", side_effect=_return_argument):
            todo = await service.update_todo("todo-1", TodoUpdate.model_validate({"title": "x"}))

        mock_publisher.todo_updated.assert_called_once_with(todo)
        mock_publisher.todo_deleted.assert_not_called()


class TestUpdateStatus:
    """Tests for status-only updates."""

    async def test_missing_status(self, service):
        """Should reject a missing status before touching storage."""
        with patch.object(service.repo, "get_by_id") as mock_get:
            with pytest.raises(ValidationError) as exc_info:
                await service.update_status("todo-1", None)

        assert exc_info.value.message == "missing status"
        mock_get.assert_not_called()

    async def test_unknown_status(self, service):
        """Should reject a status outside the known set."""
        with pytest.raises(ValidationError):
            await service.update_status("todo-1", "blocked")

    async def test_status_change_touches_only_status(self, service, mock_publisher):
        """Should change status and updated_at only."""
        existing = make_todo(priority=2, sort_order=5)

        with patch.object(service.repo, "get_by_id", return_value=existing), \
             patch.object(service.repo, "replace", side_effect=_return_argument):
            todo = await service.update_status("todo-1", "done")

        assert todo.status == "done"
        assert todo.priority == 2
        assert todo.sort_order == 5
        assert todo.title == "Existing"
        assert todo.updated_at > todo.created_at
        mock_publisher.todo_updated.assert_called_once_with(todo)


class TestDeleteAndReorder:
    """Tests for soft delete and bulk reorder."""

    async def test_delete_publishes_id(self, service, mock_publisher):
        """Should publish todo.deleted with the id."""
        with patch.object(service.repo, "soft_delete", return_value=make_todo(deleted=True)):
            await service.delete_todo("todo-1")

        mock_publisher.todo_deleted.assert_called_once_with("todo-1")

    async def test_reorder_publishes_pairs_once(self, service, mock_publisher):
        """Should publish a single todos.reordered event with the pairs."""
        items = [ReorderItem(id="a", sort_order=2), ReorderItem(id="b", sort_order=1)]

        with patch.object(service.repo, "set_sort_orders", return_value=None) as mock_set:
            await service.reorder(items)

        mock_set.assert_awaited_once_with([("a", 2), ("b", 1)])
        mock_publisher.todos_reordered.assert_called_once_with([("a", 2), ("b", 1)])

    async def test_failed_reorder_rolls_back_without_event(
        self, service, mock_db_session, mock_publisher,
    ):
        """Should roll back and stay silent when any id is unknown."""
        items = [ReorderItem(id="a", sort_order=2), ReorderItem(id="ghost", sort_order=1)]

        with patch.object(
            service.repo, "set_sort_orders", side_effect=NotFoundError("Todo not found: ghost"),
        ):
            with pytest.raises(NotFoundError):
                await service.reorder(items)

        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()
        mock_publisher.todos_reordered.assert_not_called()
