"""
Categories API Endpoints.
"""

from fastapi import APIRouter, Query

from todoboard.backend.core.dependencies import DbSession, Publisher
from todoboard.backend.schemas.base import OkResponse
from todoboard.backend.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from todoboard.backend.services.category import CategoryService

router = APIRouter()


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List categories",
)
async def list_categories(
    db: DbSession,
    publisher: Publisher,
    include_deleted: bool = Query(default=False, description="Include soft-deleted categories"),
) -> list[CategoryResponse]:
    """List categories ordered by sort order, then name."""
    service = CategoryService(db, publisher)
    categories = await service.list_categories(include_deleted=include_deleted)
    return [CategoryResponse.model_validate(category) for category in categories]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=201,
    summary="Create a category",
)
async def create_category(
    data: CategoryCreate,
    db: DbSession,
    publisher: Publisher,
) -> CategoryResponse:
    """Create a new category."""
    service = CategoryService(db, publisher)
    category = await service.create_category(data)
    return CategoryResponse.model_validate(category)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Get a category",
)
async def get_category(
    category_id: str,
    db: DbSession,
    publisher: Publisher,
) -> CategoryResponse:
    """Get a category by ID."""
    service = CategoryService(db, publisher)
    category = await service.get_category(category_id)
    return CategoryResponse.model_validate(category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update a category",
    description=(
        "Partial update. Setting deleted to true is guarded like DELETE "
        "and announced as category.deleted."
    ),
)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    db: DbSession,
    publisher: Publisher,
) -> CategoryResponse:
    """Partially update a category."""
    service = CategoryService(db, publisher)
    category = await service.update_category(category_id, data)
    return CategoryResponse.model_validate(category)


@router.delete(
    "/{category_id}",
    response_model=OkResponse,
    summary="Delete a category",
    description="Soft delete. Refused while active todos reference the category.",
)
async def delete_category(
    category_id: str,
    db: DbSession,
    publisher: Publisher,
) -> OkResponse:
    """Soft-delete a category."""
    service = CategoryService(db, publisher)
    await service.delete_category(category_id)
    return OkResponse()
