"""Data models and schemas for the Smart Recipe Finder service.

Defines Pydantic models for request/response validation and domain objects.
All models use Pydantic v2; wire payloads use the camelCase names of the
Spoonacular API and the web client (readyInMinutes, aiSuggestion, ...).
"""

from enum import Enum
from typing import List, Optional, Annotated

from pydantic import BaseModel, ConfigDict, Field


class Cuisine(str, Enum):
    """Closed set of cuisines with dedicated knowledge tables.

    UNKNOWN is the fallback variant for any other cuisine string; every
    lookup table has a documented behaviour for it.
    """

    ITALIAN = "italian"
    INDIAN = "indian"
    CHINESE = "chinese"
    MEXICAN = "mexican"
    MEDITERRANEAN = "mediterranean"
    THAI = "thai"
    PAKISTANI = "pakistani"
    AMERICAN = "american"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Cuisine":
        """Map a free-text cuisine name to a variant (case-insensitive)."""
        if not value:
            return cls.UNKNOWN
        try:
            cuisine = cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN
        return cuisine


class CookingTimePreference(str, Enum):
    QUICK = "quick"
    MODERATE = "moderate"
    ANY = "any"

    @classmethod
    def parse(cls, value: Optional[str]) -> "CookingTimePreference":
        """Unrecognised values map to ANY."""
        try:
            return cls(value)
        except ValueError:
            return cls.ANY


class NutritionalFocus(str, Enum):
    BALANCED = "balanced"
    HIGH_PROTEIN = "high-protein"
    LOW_CARB = "low-carb"
    VEGETARIAN = "vegetarian"
    ANY = "any"

    @classmethod
    def parse(cls, value: Optional[str]) -> "NutritionalFocus":
        """Unrecognised values map to ANY."""
        try:
            return cls(value)
        except ValueError:
            return cls.ANY


class Recipe(BaseModel):
    """Domain model for one candidate dish.

    Built fresh from each search response and never mutated afterwards.
    Identity is the numeric id when present, otherwise the title.
    Optional fields left as None mean "unknown", not "false", and are
    omitted when serialized with exclude_none.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Annotated[Optional[int], Field(None, description="Recipe ID from Spoonacular (absent for some providers)")]
    title: Annotated[str, Field(min_length=1, description="Recipe name or title")]
    image: Annotated[str, Field("", description="URL to recipe image")]
    source_url: Annotated[Optional[str], Field(None, alias="sourceUrl", description="URL to original recipe source")]
    ready_in_minutes: Annotated[
        Optional[int], Field(None, alias="readyInMinutes", ge=0, description="Total time (prep + cook) in minutes")
    ]
    servings: Annotated[Optional[int], Field(None, ge=0, description="Number of servings")]
    health_score: Annotated[Optional[float], Field(None, alias="healthScore", ge=0, le=100)]
    cheap: Optional[bool] = None
    dairy_free: Annotated[Optional[bool], Field(None, alias="dairyFree")]
    gluten_free: Annotated[Optional[bool], Field(None, alias="glutenFree")]
    ketogenic: Optional[bool] = None
    vegan: Optional[bool] = None
    vegetarian: Optional[bool] = None
    very_healthy: Annotated[Optional[bool], Field(None, alias="veryHealthy")]
    very_popular: Annotated[Optional[bool], Field(None, alias="veryPopular")]
    whole30: Optional[bool] = None

    @property
    def identity(self) -> tuple[str, int | str]:
        """Identity key: ("id", id) when id is set, else ("title", title). Never mixed."""
        if self.id is not None:
            return ("id", self.id)
        return ("title", self.title)

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, dropping unknown (None) fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class RecipeRequest(BaseModel):
    """Request body for POST /api/recipes.

    `ingredients` is a free-text, comma-separated string; validation of its
    content happens in the normalizer so an empty value becomes a 400.
    """

    ingredients: Optional[str] = None
    cuisine: Optional[str] = None


class RecipeSearchResponse(BaseModel):
    """Response body for POST /api/recipes: recipe cards plus the AI (or fallback) suggestion."""

    model_config = ConfigDict(populate_by_name=True)

    recipes: List[Recipe]
    ai_suggestion: Annotated[str, Field("", alias="aiSuggestion")]

    def to_wire(self) -> dict:
        return {
            "recipes": [recipe.to_wire() for recipe in self.recipes],
            "aiSuggestion": self.ai_suggestion,
        }


class ErrorResponse(BaseModel):
    error: str


class RecipeSummary(BaseModel):
    """Slim recipe view handed to the prompt builder."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    ready_in_minutes: Annotated[Optional[int], Field(None, alias="readyInMinutes")]
    servings: Optional[int] = None

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeSummary":
        return cls(title=recipe.title, ready_in_minutes=recipe.ready_in_minutes, servings=recipe.servings)


class AIRecommendationContext(BaseModel):
    """Per-request input for prompt generation.

    Ingredient order is the user's input order. The preference fields are
    plain strings so unrecognised values are accepted and mapped to the
    "any" wording by the prompt builder.
    """

    ingredients: List[str]
    cuisine: Optional[str] = None
    recipes: List[RecipeSummary] = Field(default_factory=list)
    dietary_preferences: Optional[List[str]] = None
    cooking_time_preference: Optional[str] = None
    nutritional_focus: Optional[str] = None


class FallbackRecommendationContext(BaseModel):
    """Per-request input for the rule-based fallback recommendation."""

    recipes: List[Recipe]
    ingredients: List[str]
    cuisine: Optional[str] = None


class ScoredRecipe(BaseModel):
    """Recipe tagged with its ingredient match score."""

    recipe: Recipe
    match_score: Annotated[float, Field(ge=0.0, le=1.0)]


class RecipeCategories(BaseModel):
    """Category buckets produced by one scoring pass. Insertion order = input order."""

    healthy: List[Recipe] = Field(default_factory=list)
    quick: List[Recipe] = Field(default_factory=list)
    cuisine_specific: List[Recipe] = Field(default_factory=list)
    ingredient_match: List[ScoredRecipe] = Field(default_factory=list)


class SavedRecipesResponse(BaseModel):
    recipes: List[dict]
    count: int


class ToggleSavedResponse(BaseModel):
    saved: bool
    count: int


class CuisineOption(BaseModel):
    value: str
    label: str
