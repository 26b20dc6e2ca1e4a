"""Tests for merging duplicate grocery items."""

import pytest

from recipebox.grocery.merge import format_amount, merge_items, parse_amount
from recipebox.grocery.models import GroceryItem


def _item(name, amount="", unit="", notes="", recipe="A"):
    return GroceryItem(
        name=name, amount=amount, unit=unit, notes=notes, from_recipes=[recipe]
    )


class TestParseAmount:
    @pytest.mark.parametrize(
        "text, expected",
        [("2", 2.0), ("1.5", 1.5), (".5", 0.5), (" 3 ", 3.0), ("1e2", 100.0)],
    )
    def test_numeric(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize(
        "text", ["", "pinch", "1/2", "2-3", "to taste", "inf", "nan", "2 cups"]
    )
    def test_not_numeric(self, text):
        assert parse_amount(text) is None


class TestFormatAmount:
    def test_integral(self):
        assert format_amount(3.0) == "3"

    def test_fractional(self):
        assert format_amount(2.5) == "2.5"


class TestMergeItems:
    def test_numeric_amounts_summed(self):
        result = merge_items([
            _item("Flour", "2", "cup", recipe="A"),
            _item("flour", "1", "cup", recipe="B"),
        ])
        assert len(result) == 1
        assert result[0].name == "Flour"
        assert result[0].amount == "3"
        assert result[0].from_recipes == ["A", "B"]

    def test_numeric_merge_is_commutative(self):
        a = _item("sugar", "0.5", "cup", recipe="A")
        b = _item("sugar", "1.25", "cup", recipe="B")
        assert merge_items([a, b])[0].amount == merge_items([b, a])[0].amount == "1.75"

    def test_different_units_kept_apart(self):
        result = merge_items([
            _item("flour", "2", "cups"),
            _item("flour", "200", "g"),
        ])
        assert [(i.amount, i.unit) for i in result] == [("2", "cups"), ("200", "g")]

    def test_salt_with_pinch_not_merged(self):
        result = merge_items([
            _item("salt", "1", "tsp", recipe="C"),
            _item("salt", "pinch", "", recipe="D"),
        ])
        assert len(result) == 2
        assert result[0].from_recipes == ["C"]
        assert result[1].from_recipes == ["D"]

    def test_non_numeric_collisions_lose_nothing(self):
        items = [
            _item("salt", "to taste", "", recipe="A"),
            _item("salt", "pinch", "", recipe="B"),
            _item("salt", "", "", recipe="C"),
        ]
        result = merge_items(items)
        assert len(result) == 3
        assert [i.from_recipes for i in result] == [["A"], ["B"], ["C"]]

    def test_numeric_collapse_after_non_numeric_collision(self):
        result = merge_items([
            _item("egg", "2", recipe="A"),
            _item("egg", "a few", recipe="B"),
            _item("egg", "1", recipe="C"),
        ])
        assert [i.amount for i in result] == ["3", "a few"]
        assert result[0].from_recipes == ["A", "C"]

    def test_overflowing_sum_kept_apart(self):
        result = merge_items([
            _item("salt", "1e308", "g", recipe="A"),
            _item("salt", "1e308", "g", recipe="B"),
        ])
        assert [(i.amount, i.from_recipes) for i in result] == [
            ("1e308", ["A"]),
            ("1e308", ["B"]),
        ]

    def test_same_recipe_title_not_repeated(self):
        result = merge_items([
            _item("garlic", "2", "clove", recipe="A"),
            _item("garlic", "1", "clove", recipe="A"),
        ])
        assert result[0].from_recipes == ["A"]

    def test_notes_joined(self):
        result = merge_items([
            _item("basil", "1", "cup", notes="chopped", recipe="A"),
            _item("basil", "1", "cup", notes="for garnish", recipe="B"),
        ])
        assert result[0].notes == "chopped; for garnish"

    def test_empty_note_does_not_overwrite(self):
        result = merge_items([
            _item("basil", "1", "cup", notes="chopped", recipe="A"),
            _item("basil", "1", "cup", notes="", recipe="B"),
        ])
        assert result[0].notes == "chopped"

    def test_identical_notes_not_repeated(self):
        result = merge_items([
            _item("basil", "1", "cup", notes="chopped", recipe="A"),
            _item("basil", "1", "cup", notes="chopped", recipe="B"),
        ])
        assert result[0].notes == "chopped"

    def test_inputs_not_mutated(self):
        first = _item("rice", "1", "cup", recipe="A")
        second = _item("rice", "2", "cup", recipe="B")
        merge_items([first, second])
        assert first.amount == "1"
        assert first.from_recipes == ["A"]

    def test_empty_input(self):
        assert merge_items([]) == []
