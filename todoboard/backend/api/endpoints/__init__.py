"""
API Router.

Aggregates all /api endpoint routers.
"""

from fastapi import APIRouter

from todoboard.backend.api.endpoints import categories, todos

router = APIRouter()

router.include_router(todos.router, prefix="/todos", tags=["todos"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
