"""
Schema Bootstrap.

Creates tables, applies the one additive column check, and seeds
default categories. Runs on every start; every step is idempotent.

Usage:
    async with engine.begin() as conn:
        await bootstrap_schema(conn)
"""

from typing import Any

from sqlalchemy import func, inspect, insert, select, text
from sqlalchemy.ext.asyncio import AsyncConnection

from todoboard.backend.core.logging import get_logger
from todoboard.backend.core.utils import new_id, utc_now
from todoboard.backend.models import Base, Category

logger = get_logger(__name__)

DEFAULT_CATEGORIES: tuple[dict[str, str], ...] = (
    {"name": "General", "color": "#6B7280", "description": "General tasks and items"},
    {"name": "Work", "color": "#3B82F6", "description": "Work-related tasks"},
    {"name": "Personal", "color": "#EF4444", "description": "Personal tasks and reminders"},
    {"name": "Shopping", "color": "#10B981", "description": "Shopping lists and items"},
    {"name": "Health", "color": "#F59E0B", "description": "Health and fitness related"},
)


def _todo_columns(sync_conn: Any) -> set[str]:
    return {column["name"] for column in inspect(sync_conn).get_columns("todos")}


async def ensure_category_column(conn: AsyncConnection) -> bool:
    """
    Add todos.category_id to databases created before categories existed.

    Returns:
        True if the column was added
    """
    columns = await conn.run_sync(_todo_columns)
    if "category_id" in columns:
        return False

    await conn.execute(
        text("ALTER TABLE todos ADD COLUMN category_id VARCHAR REFERENCES categories(id)")
    )
    logger.info("Added todos.category_id column")
    return True


async def seed_default_categories(conn: AsyncConnection) -> int:
    """
    Insert the default categories when no active category exists.

    Returns:
        Number of categories inserted
    """
    result = await conn.execute(
        select(func.count()).select_from(Category).where(Category.deleted.is_(False))
    )
    if result.scalar_one() > 0:
        return 0

    now = utc_now()
    rows = [
        {
            "id": new_id(),
            "sort_order": 0,
            "created_at": now,
            "updated_at": now,
            "deleted": False,
            **category,
        }
        for category in DEFAULT_CATEGORIES
    ]
    await conn.execute(insert(Category), rows)
    logger.info("Seeded default categories", extra={"count": len(rows)})
    return len(rows)


async def bootstrap_schema(conn: AsyncConnection, seed_defaults: bool = True) -> None:
    """Create missing tables and columns, then seed defaults if enabled."""
    await conn.run_sync(Base.metadata.create_all)
    await ensure_category_column(conn)
    if seed_defaults:
        await seed_default_categories(conn)
