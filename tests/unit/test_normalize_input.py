"""Unit tests for search input normalization."""

import pytest

from src.hooks.normalize_input import format_ingredient_query, normalize_cuisine, normalize_ingredients


class TestNormalizeIngredients:
    """Test splitting of the free-text ingredient field."""

    def test_splits_and_trims(self):
        assert normalize_ingredients("chicken, garlic ,rice") == ["chicken", "garlic", "rice"]

    def test_drops_empty_entries(self):
        """Test that double and trailing commas do not produce empty ingredients."""
        assert normalize_ingredients("tomato,, basil, ") == ["tomato", "basil"]

    def test_preserves_order_and_case(self):
        assert normalize_ingredients("Basil, tomato, Garlic") == ["Basil", "tomato", "Garlic"]

    @pytest.mark.parametrize("text", [None, "", "   ", ",,,", " , , "])
    def test_blank_input_gives_empty_list(self, text):
        assert normalize_ingredients(text) == []

    def test_single_ingredient(self):
        assert normalize_ingredients("eggs") == ["eggs"]


class TestNormalizeCuisine:
    def test_passes_value_through(self):
        assert normalize_cuisine("Italian") == "Italian"

    @pytest.mark.parametrize("cuisine", [None, "", "  "])
    def test_blank_is_none(self, cuisine):
        assert normalize_cuisine(cuisine) is None


class TestFormatIngredientQuery:
    def test_comma_joined(self):
        assert format_ingredient_query(["chicken", "rice"]) == "chicken,rice"

    def test_single(self):
        assert format_ingredient_query(["rice"]) == "rice"
