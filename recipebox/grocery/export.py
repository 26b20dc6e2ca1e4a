"""Text and JSON renderings of a grocery list."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from ..types import Recipe
from .models import GroceryItem, OrganizedGroceryList, item_key
from .sections import SECTION_ORDER, StoreSection


def format_ingredient(item: GroceryItem) -> str:
    """``"2 cup flour (sifted)"``; empty amount, unit and notes are left out."""
    parts: list[str] = []
    if item.amount:
        parts.append(item.amount)
    if item.unit:
        parts.append(item.unit)
    parts.append(item.name)
    if item.notes:
        parts.append(f"({item.notes})")
    return " ".join(parts)


def format_clipboard(
    recipes: Sequence[Recipe],
    organized: OrganizedGroceryList,
    checked: Collection[str] = (),
) -> str:
    """Plain-text shopping list for pasting into a notes app.

    Checked items are left out, as are sections whose items are all checked.
    """
    sections: list[str] = []
    for section, items in organized.items():
        unchecked = [item for item in items if item_key(item) not in checked]
        if not unchecked:
            continue
        lines = "\n".join(f"□ {format_ingredient(item)}" for item in unchecked)
        sections.append(f"{section}:\n{lines}")

    noun = "recipe" if len(recipes) == 1 else "recipes"
    titles = " • ".join(r.title for r in recipes)
    return (
        f"Shopping list for {len(recipes)} {noun}:\n"
        f"{titles}\n\n"
        + "\n\n".join(sections)
    )


def list_to_dict(
    organized: OrganizedGroceryList, checked: Collection[str] = ()
) -> dict[str, list[dict]]:
    """JSON-ready form keyed by section display name."""
    return {
        str(section): [
            {
                "name": item.name,
                "amount": item.amount,
                "unit": item.unit,
                "notes": item.notes,
                "fromRecipes": list(item.from_recipes),
                "checked": item.checked or item_key(item) in checked,
            }
            for item in items
        ]
        for section, items in organized.items()
    }


def list_from_dict(data: dict[str, list[dict]]) -> OrganizedGroceryList:
    """Inverse of :func:`list_to_dict`; unknown sections go to ``Other``."""
    grouped: dict[StoreSection, list[GroceryItem]] = {}
    for name, entries in data.items():
        section = StoreSection.from_name(name) or StoreSection.OTHER
        for entry in entries:
            grouped.setdefault(section, []).append(
                GroceryItem(
                    name=entry["name"],
                    amount=entry.get("amount", ""),
                    unit=entry.get("unit", ""),
                    notes=entry.get("notes", ""),
                    from_recipes=list(entry.get("fromRecipes", [])),
                    checked=bool(entry.get("checked", False)),
                )
            )
    return {s: grouped[s] for s in SECTION_ORDER if s in grouped}
