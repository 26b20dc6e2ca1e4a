"""Recipe browsing: free-text search and tag filtering."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from ..types import Recipe

TAG_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Meal Type": ("breakfast", "lunch", "dinner", "dessert", "snack"),
    "Cuisine": ("asian", "italian", "mexican", "american", "other"),
    "Protein": ("chicken", "beef", "pork", "fish", "vegetarian"),
}


def tag_category(tag: str) -> str:
    """Category name for a tag, or "" for tags outside the known set."""
    for category, tags in TAG_CATEGORIES.items():
        if tag in tags:
            return category
    return ""


def _matches_search(recipe: Recipe, search: str) -> bool:
    needle = search.lower()
    return (
        needle in recipe.title.lower()
        or any(needle in ing.name.lower() for ing in recipe.ingredients)
        or any(needle in tag.lower() for tag in recipe.tags)
    )


def filter_recipes(
    recipes: Iterable[Recipe],
    search: str = "",
    tags: Iterable[str] = (),
) -> list[Recipe]:
    """Recipes matching the search text and the selected tags.

    Selected tags are grouped by category: a recipe needs at least one tag
    from each group (OR within a category, AND across categories).
    """
    by_category: dict[str, set[str]] = {}
    for tag in tags:
        by_category.setdefault(tag_category(tag), set()).add(tag)

    result: list[Recipe] = []
    for recipe in recipes:
        if search.strip() and not _matches_search(recipe, search.strip()):
            continue
        recipe_tags = set(recipe.tags)
        if all(group & recipe_tags for group in by_category.values()):
            result.append(recipe)
    return result


def tag_counts(recipes: Iterable[Recipe]) -> dict[str, int]:
    """Number of recipes carrying each tag."""
    counts: Counter[str] = Counter()
    for recipe in recipes:
        counts.update(set(recipe.tags))
    return dict(counts)
