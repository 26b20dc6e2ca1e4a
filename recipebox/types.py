"""Recipe records shared by the store, the catalog and the grocery engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _text(value: Any) -> str:
    """Coerce a loosely-typed JSON value to a string ("" for null)."""
    if value is None:
        return ""
    return str(value)


def _list(value: Any) -> list:
    """A JSON array field, or [] when the value is missing or not an array."""
    return value if isinstance(value, list) else []


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass
class Ingredient:
    name: str
    amount: str = ""
    unit: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Ingredient:
        return cls(
            name=_text(data.get("name")),
            amount=_text(data.get("amount")),
            unit=_text(data.get("unit")),
            notes=_text(data.get("notes")),
        )

    def to_dict(self) -> dict:
        data = {"name": self.name, "amount": self.amount, "unit": self.unit}
        if self.notes:
            data["notes"] = self.notes
        return data


@dataclass
class Recipe:
    """A stored recipe.

    Only ``title`` and ``ingredients`` are read by the grocery engine; the
    rest is carried for the store and the catalog.
    """

    id: str
    title: str
    ingredients: list[Ingredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    servings: int = 0
    tags: list[str] = field(default_factory=list)
    source_url: str = ""
    prep_time: int | None = None  # minutes
    cook_time: int | None = None  # minutes
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Recipe:
        """Build a Recipe from either camelCase (recipes.json) or snake_case keys."""

        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            id=_text(data.get("id")),
            title=_text(data.get("title")),
            ingredients=[
                Ingredient.from_dict(i)
                for i in _list(data.get("ingredients"))
                if isinstance(i, dict)
            ],
            instructions=[_text(s) for s in _list(data.get("instructions"))],
            servings=_int(data.get("servings")),
            tags=[_text(t) for t in _list(data.get("tags"))],
            source_url=_text(pick("source_url", "sourceUrl", "")),
            prep_time=pick("prep_time", "prepTime"),
            cook_time=pick("cook_time", "cookTime"),
            created_at=_text(pick("created_at", "createdAt", "")),
            updated_at=_text(pick("updated_at", "updatedAt", "")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "instructions": list(self.instructions),
            "servings": self.servings,
            "tags": list(self.tags),
            "sourceUrl": self.source_url,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
