"""Tests for store sections and ingredient classification."""

import pytest

from recipebox.grocery.sections import (
    SECTION_KEYWORDS,
    SECTION_ORDER,
    StoreSection,
    classify,
)


class TestStoreSection:
    def test_display_order(self):
        assert [str(s) for s in SECTION_ORDER] == [
            "Produce",
            "Meat & Seafood",
            "Dairy & Eggs",
            "Grains & Pasta",
            "Condiments & Sauces",
            "Pantry",
            "Spices & Seasonings",
            "Other",
        ]

    def test_from_name(self):
        assert StoreSection.from_name("Dairy & Eggs") is StoreSection.DAIRY_EGGS
        assert StoreSection.from_name("Frozen") is None

    def test_keyword_table_is_read_only(self):
        with pytest.raises(TypeError):
            SECTION_KEYWORDS[StoreSection.OTHER] = ("anything",)

    def test_other_has_no_keywords(self):
        assert SECTION_KEYWORDS[StoreSection.OTHER] == ()


class TestClassify:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("salt", StoreSection.SPICES_SEASONINGS),
            ("flour", StoreSection.GRAINS_PASTA),
            ("olive oil", StoreSection.CONDIMENTS_SAUCES),
            ("butter", StoreSection.DAIRY_EGGS),
            ("chicken", StoreSection.MEAT_SEAFOOD),
            ("garlic", StoreSection.PRODUCE),
            ("honey", StoreSection.PANTRY),
        ],
    )
    def test_exact_keyword(self, name, expected):
        assert classify(name) is expected

    def test_case_and_whitespace_ignored(self):
        assert classify("  Salt ") is StoreSection.SPICES_SEASONINGS
        assert classify("FLOUR") is StoreSection.GRAINS_PASTA

    def test_keyword_inside_name(self):
        assert classify("red onion") is StoreSection.PRODUCE
        assert classify("chicken thighs") is StoreSection.MEAT_SEAFOOD
        assert classify("large eggs") is StoreSection.DAIRY_EGGS

    def test_name_inside_keyword(self):
        assert classify("scall") is StoreSection.PRODUCE

    def test_earlier_section_wins_partial_matches(self):
        # "pepper" is both a produce and a spice keyword
        assert classify("black pepper") is StoreSection.PRODUCE

    def test_exact_match_beats_earlier_partial_match(self):
        # "garlic powder" partially matches Produce ("garlic") but is an
        # exact spice keyword
        assert classify("garlic powder") is StoreSection.SPICES_SEASONINGS
        assert classify("tomato paste") is StoreSection.PANTRY

    def test_unknown_falls_back_to_other(self):
        assert classify("xyzzy123") is StoreSection.OTHER

    def test_blank_name_is_other(self):
        assert classify("") is StoreSection.OTHER
        assert classify("   ") is StoreSection.OTHER
