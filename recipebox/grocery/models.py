"""Data models for grocery list items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .sections import StoreSection


@dataclass
class GroceryItem:
    """One line of the shopping list, with the recipes it came from."""

    name: str
    amount: str = ""
    unit: str = ""
    notes: str = ""
    from_recipes: list[str] = field(default_factory=list)  # recipe titles, no duplicates
    checked: bool = False

    def copy(self) -> GroceryItem:
        return GroceryItem(
            name=self.name,
            amount=self.amount,
            unit=self.unit,
            notes=self.notes,
            from_recipes=list(self.from_recipes),
            checked=self.checked,
        )


# Section → items, in display order; empty sections are never present.
OrganizedGroceryList = Dict[StoreSection, List[GroceryItem]]


def union_titles(*groups: list[str]) -> list[str]:
    """Concatenate title lists, dropping repeats and keeping first appearance."""
    seen: dict[str, None] = {}
    for group in groups:
        for title in group:
            seen.setdefault(title, None)
    return list(seen)


def item_key(item: GroceryItem) -> str:
    """Identity used to remember checked items across list rebuilds."""
    return f"{item.name}-{item.unit}-{item.amount}"
