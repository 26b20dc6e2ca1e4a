"""Build an aisle-organised grocery list from a set of selected recipes."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from ..types import Recipe
from .merge import merge_items
from .models import GroceryItem, OrganizedGroceryList
from .sections import SECTION_ORDER, StoreSection, classify


def flatten_ingredients(recipes: Iterable[Recipe]) -> list[GroceryItem]:
    """One GroceryItem per recipe ingredient, tagged with the recipe title."""
    return [
        GroceryItem(
            name=ing.name.strip(),
            amount=(ing.amount or "").strip(),
            unit=(ing.unit or "").strip(),
            notes=(ing.notes or "").strip(),
            from_recipes=[recipe.title],
            checked=False,
        )
        for recipe in recipes
        for ing in recipe.ingredients
    ]


def collation_key(name: str) -> tuple[str, str]:
    """Sort key approximating locale-aware, case-insensitive string order.

    Primary comparison ignores case and accents ("éclair" sorts with
    "eclair"); ties put lowercase before uppercase.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), name.swapcase()


def order_sections(
    grouped: dict[StoreSection, list[GroceryItem]],
) -> OrganizedGroceryList:
    """Emit non-empty sections in display order, items sorted by name."""
    ordered: OrganizedGroceryList = {}
    for section in SECTION_ORDER:
        items = grouped.get(section)
        if items:
            ordered[section] = sorted(items, key=lambda i: collation_key(i.name))
    return ordered


def build_grocery_list(recipes: Iterable[Recipe]) -> OrganizedGroceryList:
    """Classify, merge and sort every ingredient of the given recipes.

    The selection is passed in rather than read from shared state, so the
    result depends only on ``recipes``: calling this twice with the same
    recipes returns equal lists.
    """
    grouped: dict[StoreSection, list[GroceryItem]] = {}
    for item in flatten_ingredients(recipes):
        grouped.setdefault(classify(item.name), []).append(item)

    merged = {section: merge_items(items) for section, items in grouped.items()}
    return order_sections(merged)
