"""Grocery list module for the recipe box."""

from .builder import build_grocery_list
from .catalog import TAG_CATEGORIES, filter_recipes, tag_counts
from .cleanup import CleanupBackend, CleanupError, cleanup_list, create_backend
from .config import (
    CleanupConfig,
    DatabaseConfig,
    GroceryConfig,
    load_config,
)
from .export import format_clipboard, format_ingredient
from .merge import merge_items
from .models import GroceryItem, OrganizedGroceryList, item_key
from .sections import SECTION_ORDER, StoreSection, classify
from .session import GroceryListSession

__all__ = [
    "StoreSection",
    "SECTION_ORDER",
    "classify",
    "GroceryItem",
    "OrganizedGroceryList",
    "item_key",
    "merge_items",
    "build_grocery_list",
    "CleanupBackend",
    "CleanupError",
    "cleanup_list",
    "create_backend",
    "GroceryListSession",
    "format_ingredient",
    "format_clipboard",
    "TAG_CATEGORIES",
    "filter_recipes",
    "tag_counts",
    "GroceryConfig",
    "CleanupConfig",
    "DatabaseConfig",
    "load_config",
]
