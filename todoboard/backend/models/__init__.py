"""
Database models.

Importing this package registers every table on Base.metadata.
"""

from todoboard.backend.models.base import Base
from todoboard.backend.models.category import Category
from todoboard.backend.models.todo import Todo

__all__ = ["Base", "Category", "Todo"]
