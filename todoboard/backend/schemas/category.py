"""
Category Schemas.
"""

from datetime import datetime
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from todoboard.backend.schemas.base import PartialUpdate, SortOrder

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class CategoryCreate(BaseModel):
    """Schema for creating a new category."""

    name: Name = Field(description="Display name", examples=["Errands"])
    color: str | None = Field(default=None, max_length=32, examples=["#3B82F6"])
    description: str | None = None
    sort_order: SortOrder = 0


class CategoryUpdate(PartialUpdate):
    """Schema for a partial category update."""

    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "sort_order", "deleted"})

    name: Name | None = None
    color: str | None = Field(default=None, max_length=32)
    description: str | None = None
    sort_order: SortOrder | None = None
    deleted: bool | None = None


class CategoryResponse(BaseModel):
    """Schema for category in API responses and change events."""

    id: str
    name: str
    color: str | None
    description: str | None
    sort_order: int
    created_at: datetime
    updated_at: datetime
    deleted: bool

    model_config = ConfigDict(from_attributes=True)
