"""Combining duplicate grocery items within one store section."""

from __future__ import annotations

import math
import re
from itertools import count

from .models import GroceryItem, union_titles

# Plain decimal numbers only: "2", "1.5", ".5", "1e3". Fractions ("1/2"),
# ranges ("2-3") and words ("a pinch") are not numeric.
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def parse_amount(amount: str) -> float | None:
    """Parse an amount string as a number, or return None if it isn't one."""
    text = amount.strip()
    if not _NUMBER_RE.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def format_amount(value: float) -> str:
    """Render a summed amount: ``3.0`` → ``"3"``, ``2.5`` → ``"2.5"``."""
    if value == int(value):
        return str(int(value))
    return repr(value)


def merge_items(items: list[GroceryItem]) -> list[GroceryItem]:
    """Merge items that share a normalised name and unit.

    Numeric amounts are summed and recipe provenance is unioned. When either
    amount is not a plain number, or the sum overflows, the items are kept as
    separate entries, so nothing is ever dropped. Input items are not modified.
    """
    combined: dict[tuple, GroceryItem] = {}
    collisions = count()

    for item in items:
        key = (item.name.lower().strip(), item.unit)
        existing = combined.get(key)

        if existing is None:
            combined[key] = item.copy()
            continue

        current = parse_amount(existing.amount)
        incoming = parse_amount(item.amount)
        total = None
        if current is not None and incoming is not None:
            total = current + incoming
        if total is None or not math.isfinite(total):
            # Unmergeable amounts: file under a unique key so both survive
            combined[(*key, next(collisions))] = item.copy()
            continue

        existing.amount = format_amount(total)
        existing.from_recipes = union_titles(existing.from_recipes, item.from_recipes)
        if item.notes and item.notes != existing.notes:
            existing.notes = (
                f"{existing.notes}; {item.notes}" if existing.notes else item.notes
            )

    return list(combined.values())
