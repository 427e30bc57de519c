"""
Base Repository.

Base class for all repositories with common persistence operations.
Repositories flush but never commit; the owning service decides
where the transaction ends.
"""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from todoboard.backend.core.exceptions import NotFoundError
from todoboard.backend.core.logging import get_logger
from todoboard.backend.core.utils import utc_now
from todoboard.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common operations for soft-deletable entities.

    Subclasses should set the model class:

        class TodoRepository(BaseRepository[Todo]):
            model = Todo
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: str) -> ModelType:
        """
        Get a single record by ID, deleted or not.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found", details={"id": id})
        return instance

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def insert(self, instance: ModelType) -> ModelType:
        """
        Insert a new record.

        A duplicate primary key surfaces as IntegrityError on flush.
        """
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def replace(self, instance: ModelType) -> ModelType:
        """
        Write every column of an existing record.

        Raises:
            NotFoundError: If no record has the instance's id
        """
        if not await self.exists(instance.id):
            raise NotFoundError(f"{self.model.__name__} not found", details={"id": instance.id})
        merged = await self.session.merge(instance)
        await self.session.flush()
        await self.session.refresh(merged)
        return merged

    async def soft_delete(self, id: str) -> ModelType:
        """
        Flag a record as deleted and refresh its updated_at.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)
        instance.deleted = True
        instance.updated_at = utc_now()
        await self.session.flush()
        return instance

    async def exists(self, id: str) -> bool:
        """Check if a record exists by ID."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == id)
        )
        return result.scalar_one_or_none() is not None
