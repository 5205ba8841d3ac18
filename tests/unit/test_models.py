"""Unit tests for Pydantic models validation."""

import pytest
from pydantic import ValidationError

from src.models.models import (
    AIRecommendationContext,
    CookingTimePreference,
    Cuisine,
    NutritionalFocus,
    Recipe,
    RecipeSearchResponse,
    RecipeSummary,
    ScoredRecipe,
)


class TestCuisine:
    """Test Cuisine parsing into the closed variant set."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("italian", Cuisine.ITALIAN),
            ("Italian", Cuisine.ITALIAN),
            (" THAI ", Cuisine.THAI),
            ("pakistani", Cuisine.PAKISTANI),
        ],
    )
    def test_parse_known_cuisines_case_insensitive(self, value, expected):
        assert Cuisine.parse(value) is expected

    @pytest.mark.parametrize("value", [None, "", "klingon", "french"])
    def test_parse_unknown_maps_to_unknown(self, value):
        """Test that any unrecognised cuisine maps to the UNKNOWN variant."""
        assert Cuisine.parse(value) is Cuisine.UNKNOWN

    def test_str_enum_compares_to_value(self):
        assert Cuisine.MEXICAN == "mexican"


class TestPreferenceEnums:
    def test_cooking_time_preference_fallback(self):
        assert CookingTimePreference.parse("quick") is CookingTimePreference.QUICK
        assert CookingTimePreference.parse("whenever") is CookingTimePreference.ANY
        assert CookingTimePreference.parse(None) is CookingTimePreference.ANY

    def test_nutritional_focus_fallback(self):
        assert NutritionalFocus.parse("high-protein") is NutritionalFocus.HIGH_PROTEIN
        assert NutritionalFocus.parse("paleo") is NutritionalFocus.ANY


class TestRecipe:
    """Test Recipe model validation and wire format."""

    def test_accepts_camel_case_payload(self):
        """Test that Spoonacular-style camelCase keys populate the model."""
        recipe = Recipe.model_validate(
            {
                "id": 715538,
                "title": "Bruschetta",
                "image": "https://img.spoonacular.com/715538.jpg",
                "readyInMinutes": 20,
                "servings": 4,
                "healthScore": 42.5,
                "glutenFree": False,
                "veryHealthy": True,
            }
        )

        assert recipe.id == 715538
        assert recipe.ready_in_minutes == 20
        assert recipe.health_score == 42.5
        assert recipe.gluten_free is False
        assert recipe.very_healthy is True
        assert recipe.vegan is None

    def test_accepts_snake_case_fields(self):
        recipe = Recipe(title="Tacos", ready_in_minutes=15)
        assert recipe.ready_in_minutes == 15

    def test_title_is_required(self):
        with pytest.raises(ValidationError):
            Recipe(title="")

    def test_negative_minutes_rejected(self):
        with pytest.raises(ValidationError):
            Recipe(title="Soup", readyInMinutes=-5)

    def test_health_score_bounds(self):
        with pytest.raises(ValidationError):
            Recipe(title="Soup", healthScore=101)

    def test_recipe_is_immutable(self):
        recipe = Recipe(title="Soup")
        with pytest.raises(ValidationError):
            recipe.title = "Stew"

    def test_identity_prefers_id(self):
        assert Recipe(id=7, title="Soup").identity == ("id", 7)
        assert Recipe(title="Soup").identity == ("title", "Soup")

    def test_identity_schemes_never_mix(self):
        """Test that an id-keyed and a title-keyed recipe with the same title differ."""
        assert Recipe(id=7, title="Soup").identity != Recipe(title="Soup").identity

    def test_to_wire_uses_camel_case_and_drops_unknowns(self):
        wire = Recipe(id=1, title="Soup", ready_in_minutes=30, vegetarian=False).to_wire()

        assert wire == {"id": 1, "title": "Soup", "image": "", "readyInMinutes": 30, "vegetarian": False}


class TestRecipeSearchResponse:
    def test_to_wire_shape(self):
        response = RecipeSearchResponse(recipes=[Recipe(id=1, title="Soup")], ai_suggestion="Try it!")

        assert response.to_wire() == {
            "recipes": [{"id": 1, "title": "Soup", "image": ""}],
            "aiSuggestion": "Try it!",
        }

    def test_suggestion_defaults_to_empty(self):
        assert RecipeSearchResponse(recipes=[]).ai_suggestion == ""


class TestContextModels:
    def test_recipe_summary_from_recipe(self):
        summary = RecipeSummary.from_recipe(Recipe(id=3, title="Pilaf", readyInMinutes=40, servings=2))

        assert summary.title == "Pilaf"
        assert summary.ready_in_minutes == 40
        assert summary.servings == 2

    def test_ai_context_defaults(self):
        context = AIRecommendationContext(ingredients=["rice"])

        assert context.recipes == []
        assert context.cuisine is None
        assert context.dietary_preferences is None
        assert context.cooking_time_preference is None

    def test_scored_recipe_bounds(self):
        with pytest.raises(ValidationError):
            ScoredRecipe(recipe=Recipe(title="Soup"), match_score=1.5)
