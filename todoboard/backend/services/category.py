"""
Category Service.

Business logic layer for categories, including the rule that a
category still in use by active todos cannot be deleted.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from todoboard.backend.core.exceptions import ValidationError
from todoboard.backend.core.utils import new_id, utc_now
from todoboard.backend.events.publishers import ChangeEventPublisher
from todoboard.backend.models.category import Category
from todoboard.backend.repositories.category import CategoryRepository
from todoboard.backend.schemas.category import CategoryCreate, CategoryUpdate
from todoboard.backend.services.base import BaseService

CATEGORY_IN_USE_MESSAGE = "Cannot delete category that has todos assigned to it"


class CategoryService(BaseService):
    """Service for category business logic."""

    def __init__(self, session: AsyncSession, publisher: ChangeEventPublisher) -> None:
        super().__init__(session)
        self.repo = CategoryRepository(session)
        self.publisher = publisher

    async def list_categories(self, include_deleted: bool = False) -> list[Category]:
        """List categories ordered by sort_order, then name."""
        return await self._execute_db_operation(
            "list_categories",
            self.repo.list_categories(include_deleted=include_deleted),
        )

    async def get_category(self, category_id: str) -> Category:
        """
        Get a category by ID, including soft-deleted ones.

        Raises:
            NotFoundError: If category not found
        """
        return await self._execute_db_operation(
            "get_category",
            self.repo.get_by_id(category_id),
        )

    async def create_category(self, data: CategoryCreate) -> Category:
        """Create a new category."""
        self._log_operation("Creating category", name=data.name)

        now = utc_now()
        category = Category(
            id=new_id(),
            name=data.name,
            color=data.color,
            description=data.description,
            sort_order=data.sort_order,
            created_at=now,
            updated_at=now,
            deleted=False,
        )
        category = await self._run_in_transaction("create_category", self.repo.insert(category))

        self.publisher.category_created(category)
        return category

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        """
        Apply a partial update.

        Setting deleted=true goes through the same guard as delete
        and publishes category.deleted instead of category.updated.

        Raises:
            NotFoundError: If category not found
            ValidationError: If deleting a category that is still in use
        """
        category = await self.get_category(category_id)
        changes = data.changes()
        was_deleted = category.deleted

        if changes.get("deleted") is True:
            await self._ensure_unused(category_id)

        for field, value in changes.items():
            setattr(category, field, value)
        category.updated_at = utc_now()

        category = await self._run_in_transaction("update_category", self.repo.replace(category))

        if category.deleted and not was_deleted:
            self.publisher.category_deleted(category.id)
        else:
            self.publisher.category_updated(category)
        self._log_debug("Category updated", category_id=category_id, fields=sorted(changes))
        return category

    async def delete_category(self, category_id: str) -> None:
        """
        Soft-delete a category that no active todo references.

        Raises:
            NotFoundError: If category not found
            ValidationError: If active todos still reference it
        """
        self._log_operation("Deleting category", category_id=category_id)

        await self.get_category(category_id)
        await self._ensure_unused(category_id)

        await self._run_in_transaction("delete_category", self.repo.soft_delete(category_id))
        self.publisher.category_deleted(category_id)

    async def _ensure_unused(self, category_id: str) -> None:
        in_use = await self._execute_db_operation(
            "count_category_todos",
            self.repo.count_active_todos(category_id),
        )
        if in_use > 0:
            raise ValidationError(
                CATEGORY_IN_USE_MESSAGE,
                details={"active_todos": in_use},
            )
