"""
Unit Tests for Category Service.
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from todoboard.backend.core.exceptions import NotFoundError, ValidationError
from todoboard.backend.models.category import Category
from todoboard.backend.schemas.category import CategoryCreate, CategoryUpdate
from todoboard.backend.services.category import CATEGORY_IN_USE_MESSAGE, CategoryService


def make_category(**overrides) -> Category:
    created = datetime(2024, 1, 1, 8, 0, 0)
    fields = {
        "id": "cat-1",
        "name": "Work",
        "color": "#3B82F6",
        "description": "Work-related tasks",
        "sort_order": 0,
        "created_at": created,
        "updated_at": created,
        "deleted": False,
    }
    fields.update(overrides)
    return Category(**fields)


@pytest.fixture
def service(mock_db_session, mock_publisher):
    """Create CategoryService with mocked session and publisher."""
    return CategoryService(mock_db_session, mock_publisher)


async def _return_argument(instance):
    return instance


class TestCreateCategory:
    """Tests for category creation."""

    async def test_create_publishes_event(self, service, mock_publisher):
        """Should create with server-side id and timestamps, then publish."""
        with patch.object(service.repo, "insert", side_effect=_return_argument):
            category = await service.create_category(CategoryCreate(name="Errands"))

        assert category.id
        assert category.created_at == category.updated_at
        mock_publisher.category_created.assert_called_once_with(category)


class TestDeleteGuard:
    """Tests for the in-use delete guard."""

    async def test_delete_refused_while_todos_assigned(self, service, mock_publisher):
        """Should refuse deletion and change nothing."""
        with patch.object(service.repo, "get_by_id", return_value=make_category()), \
             patch.object(service.repo, "count_active_todos", return_value=2), \
             patch.object(service.repo, "soft_delete") as mock_soft_delete:
            with pytest.raises(ValidationError) as exc_info:
                await service.delete_category("cat-1")

        assert exc_info.value.message == CATEGORY_IN_USE_MESSAGE
        mock_soft_delete.assert_not_called()
        mock_publisher.category_deleted.assert_not_called()

    async def test_delete_unused_category(self, service, mock_publisher):
        """Should soft-delete and publish when nothing references it."""
        with patch.object(service.repo, "get_by_id", return_value=make_category()), \
             patch.object(service.repo, "count_active_todos", return_value=0), \
             patch.object(service.repo, "soft_delete", return_value=make_category(deleted=True)):
            await service.delete_category("cat-1")

        mock_publisher.category_deleted.assert_called_once_with("cat-1")

    async def test_delete_missing_category(self, service):
        """Should raise NotFoundError before checking usage."""
        with patch.object(service.repo, "get_by_id", side_effect=NotFoundError("Category not found")), \
             patch.object(service.repo, "count_active_todos") as mock_count:
            with pytest.raises(NotFoundError):
                await service.delete_category("nope")

        mock_count.assert_not_called()

    async def test_update_setting_deleted_goes_through_guard(self, service, mock_publisher):
        """Should apply the same guard when an update sets deleted=true."""
        with patch.object(service.repo, "get_by_id", return_value=make_category()), \
             patch.object(service.repo, "count_active_todos", return_value=1):
            with pytest.raises(ValidationError):
                await service.update_category(
                    "cat-1", CategoryUpdate.model_validate({"deleted": True}),
                )

        mock_publisher.category_updated.assert_not_called()

    async def test_rename_skips_guard(self, service, mock_publisher):
        """Should not count todos for ordinary updates."""
        with patch.object(service.repo, "get_by_id", return_value=make_category()), \
             patch.object(service.repo, "count_active_todos") as mock_count, \
             patch.object(service.repo, "replace", side_effect=_return_argument):
            category = await service.update_category(
                "cat-1", CategoryUpdate.model_validate({"name": "Office"}),
            )

        assert category.name == "Office"
        mock_count.assert_not_called()
        mock_publisher.category_updated.assert_called_once_with(category)

    async def test_update_to_deleted_publishes_deleted(self, service, mock_publisher):
        """Should announce a soft delete made through update as category.deleted."""
        with patch.object(service.repo, "get_by_id", return_value=make_category()), \
             patch.object(service.repo, "count_active_todos", return_value=0), \
             patch.object(service.repo, "replace", side_effect=_return_argument):
            category = await service.update_category(
                "cat-1", CategoryUpdate.model_validate({"deleted": True}),
            )

        assert category.deleted is True
        mock_publisher.category_deleted.assert_called_once_with("cat-1")
        mock_publisher.category_updated.assert_not_called()

    async def test_restore_publishes_updated(self, service, mock_publisher):
        with patch.object(service.repo, "get_by_id", return_value=make_category(deleted=True)), \
             patch.object(service.repo, "replace", side_effect=_return_argument):
            category = await service.update_category(
                "cat-1", CategoryUpdate.model_validate({"deleted": False}),
            )

        mock_publisher.category_updated.assert_called_once_with(category)
        mock_publisher.category_deleted.assert_not_called()
