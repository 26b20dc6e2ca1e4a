"""SQLite storage for recipes and the grocery selection."""

from .recipes import RecipeConflictError, RecipeDB, RecipeNotFoundError, SelectionDB
from .schema import ensure_schema

__all__ = [
    "RecipeDB",
    "SelectionDB",
    "RecipeNotFoundError",
    "RecipeConflictError",
    "ensure_schema",
]
