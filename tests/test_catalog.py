"""Tests for recipe search and tag filtering."""

from recipebox.grocery.catalog import filter_recipes, tag_category, tag_counts
from recipebox.types import Ingredient, Recipe

TACOS = Recipe(
    id="tacos",
    title="Chicken Tacos",
    ingredients=[Ingredient("chicken thighs"), Ingredient("tortilla")],
    tags=["dinner", "mexican", "chicken"],
)
CARBONARA = Recipe(
    id="carbonara",
    title="Carbonara",
    ingredients=[Ingredient("spaghetti"), Ingredient("guanciale")],
    tags=["dinner", "italian", "pork"],
)
PANCAKES = Recipe(
    id="pancakes",
    title="Pancakes",
    ingredients=[Ingredient("flour"), Ingredient("milk")],
    tags=["breakfast", "american", "vegetarian"],
)
ALL = [TACOS, CARBONARA, PANCAKES]


def _ids(recipes):
    return [r.id for r in recipes]


class TestTagCategory:
    def test_known(self):
        assert tag_category("dinner") == "Meal Type"
        assert tag_category("italian") == "Cuisine"
        assert tag_category("fish") == "Protein"

    def test_unknown(self):
        assert tag_category("quick") == ""


class TestFilterRecipes:
    def test_no_filters(self):
        assert _ids(filter_recipes(ALL)) == ["tacos", "carbonara", "pancakes"]

    def test_search_title(self):
        assert _ids(filter_recipes(ALL, search="carbo")) == ["carbonara"]

    def test_search_ingredient(self):
        assert _ids(filter_recipes(ALL, search="MILK")) == ["pancakes"]

    def test_search_tag(self):
        assert _ids(filter_recipes(ALL, search="mexic")) == ["tacos"]

    def test_blank_search_ignored(self):
        assert len(filter_recipes(ALL, search="   ")) == 3

    def test_or_within_category(self):
        result = filter_recipes(ALL, tags=["italian", "mexican"])
        assert _ids(result) == ["tacos", "carbonara"]

    def test_and_across_categories(self):
        result = filter_recipes(ALL, tags=["dinner", "pork"])
        assert _ids(result) == ["carbonara"]

    def test_no_match(self):
        assert filter_recipes(ALL, tags=["breakfast", "italian"]) == []

    def test_search_and_tags_combined(self):
        result = filter_recipes(ALL, search="chicken", tags=["dinner"])
        assert _ids(result) == ["tacos"]


class TestTagCounts:
    def test_counts(self):
        counts = tag_counts(ALL)
        assert counts["dinner"] == 2
        assert counts["breakfast"] == 1
        assert "fish" not in counts

    def test_duplicate_tags_counted_once(self):
        recipe = Recipe(id="x", title="X", tags=["snack", "snack"])
        assert tag_counts([recipe]) == {"snack": 1}
