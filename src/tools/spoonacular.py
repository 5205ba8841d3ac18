"""Spoonacular recipe search adapter.

Builds one of two request shapes against the Spoonacular REST API and
normalizes both response shapes into the internal Recipe model:

- cuisine given:    /recipes/complexSearch (cuisine filter + recipe information)
- no cuisine:       /recipes/findByIngredients (maximize used ingredients, ignore pantry)

A search is a single attempt: failures are raised to the caller, which turns
them into an HTTP error for the whole request.
"""

import asyncio
import re
from typing import Any, Optional

import aiohttp

from src.hooks.normalize_input import format_ingredient_query
from src.models.models import Recipe
from src.utils.logger import logger

COMPLEX_SEARCH_PATH = "/recipes/complexSearch"
FIND_BY_INGREDIENTS_PATH = "/recipes/findByIngredients"
RECIPE_PAGE_BASE_URL = "https://spoonacular.com/recipes"

# Spoonacular fields copied onto Recipe (accepted through its camelCase aliases)
_RECIPE_FIELDS = (
    "id",
    "title",
    "image",
    "readyInMinutes",
    "servings",
    "healthScore",
    "cheap",
    "dairyFree",
    "glutenFree",
    "ketogenic",
    "vegan",
    "vegetarian",
    "veryHealthy",
    "veryPopular",
    "whole30",
)


class RecipeSearchConfigError(Exception):
    """Raised when the search adapter is not configured (missing API key)."""


class RecipeSearchError(Exception):
    """Raised when the Spoonacular call fails.

    Attributes:
        status_code: Upstream HTTP status (401, 402, ...) or None for transport errors.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def build_recipe_url(title: str, recipe_id: Optional[int]) -> str:
    """Synthesize a Spoonacular recipe page link from title and id.

    The slug replaces whitespace runs with hyphens and lowercases the title:
    "Chicken Pasta Bake", 42 -> https://spoonacular.com/recipes/chicken-pasta-bake-42
    """
    slug = re.sub(r"\s+", "-", title).lower()
    return f"{RECIPE_PAGE_BASE_URL}/{slug}-{recipe_id}"


def build_search_request(
    ingredients: list[str], cuisine: Optional[str], number: int = 5
) -> tuple[str, dict[str, str | int]]:
    """Select endpoint and query parameters for a search.

    Boolean flags are sent as "true"/"false" strings (aiohttp rejects bool params).

    Returns:
        Tuple of (path, params).
    """
    ingredient_query = format_ingredient_query(ingredients)

    if cuisine and cuisine.strip():
        return COMPLEX_SEARCH_PATH, {
            "includeIngredients": ingredient_query,
            "cuisine": cuisine.strip(),
            "number": number,
            "sort": "random",
            "addRecipeInformation": "true",
            "addRecipeInstructions": "false",
            "addRecipeNutrition": "true",
        }

    return FIND_BY_INGREDIENTS_PATH, {
        "ingredients": ingredient_query,
        "number": number,
        "ranking": 1,  # maximize used ingredients
        "ignorePantry": "true",
    }


def normalize_recipe(data: dict[str, Any], keep_source_url: bool = True) -> Recipe:
    """Map one Spoonacular result to a Recipe.

    Args:
        data: A result object from either endpoint.
        keep_source_url: Use the provider's sourceUrl when present (complexSearch).
            findByIngredients results never carry one, so the link is always synthesized.
    """
    fields = {name: data[name] for name in _RECIPE_FIELDS if data.get(name) is not None}
    title = fields.get("title", "")

    source_url = data.get("sourceUrl") if keep_source_url else None
    fields["sourceUrl"] = source_url or build_recipe_url(title, fields.get("id"))

    return Recipe.model_validate(fields)


def parse_search_response(payload: Any, cuisine: Optional[str]) -> list[Recipe]:
    """Normalize either response shape into a list of Recipes.

    complexSearch wraps results in {"results": [...]}; findByIngredients
    returns the list directly.
    """
    if cuisine and cuisine.strip():
        results = payload.get("results", []) if isinstance(payload, dict) else []
        return [normalize_recipe(item, keep_source_url=True) for item in results]

    results = payload if isinstance(payload, list) else []
    return [normalize_recipe(item, keep_source_url=False) for item in results]


class SpoonacularClient:
    """Async client for the two Spoonacular search endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.spoonacular.com",
        timeout_seconds: float = 10,
        number: int = 5,
    ) -> None:
        """Initialize client configuration.

        An empty api_key is accepted here and reported on the first search,
        so a misconfigured server still starts and answers with a 500.

        Args:
            api_key: Spoonacular API key (sent as x-api-key header).
            base_url: API root URL.
            timeout_seconds: Total timeout for one request.
            number: Number of recipes to request.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.number = number

    async def _get_json(self, path: str, params: dict[str, str | int]) -> Any:
        """Perform one GET request and decode the JSON body. Raises aiohttp errors."""
        async with aiohttp.ClientSession() as session:
            async with session.get(
                f"{self.base_url}{path}",
                params=params,
                headers={"x-api-key": self.api_key},
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            ) as response:
                response.raise_for_status()
                return await response.json()

    async def search_recipes(self, ingredients: list[str], cuisine: Optional[str] = None) -> list[Recipe]:
        """Search recipes for the given ingredients and optional cuisine.

        Args:
            ingredients: Normalized ingredient list (non-empty).
            cuisine: Optional cuisine filter; selects the complexSearch endpoint.

        Returns:
            Normalized recipes in provider order.

        Raises:
            RecipeSearchConfigError: If no API key is configured.
            RecipeSearchError: On HTTP error status, transport failure or unparsable payload.
        """
        if not self.api_key:
            raise RecipeSearchConfigError("Spoonacular API key is not configured")

        path, params = build_search_request(ingredients, cuisine, number=self.number)
        logger.info(f"Searching Spoonacular {path} (ingredients={len(ingredients)}, cuisine={cuisine or '-'})")

        try:
            payload = await self._get_json(path, params)
        except aiohttp.ContentTypeError as e:
            logger.error(f"Spoonacular returned a non-JSON body ({e.message})")
            raise RecipeSearchError(f"Unreadable Spoonacular response: {e.message}") from e
        except aiohttp.ClientResponseError as e:
            logger.error(f"Spoonacular returned HTTP {e.status}: {e.message}")
            raise RecipeSearchError(f"Spoonacular request failed with status {e.status}", status_code=e.status) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Spoonacular request failed: {e}")
            raise RecipeSearchError(f"Spoonacular request failed: {e}") from e
        except ValueError as e:
            # JSON and text decoding errors
            logger.error(f"Unreadable Spoonacular response: {e}")
            raise RecipeSearchError(f"Unreadable Spoonacular response: {e}") from e

        try:
            recipes = parse_search_response(payload, cuisine)
        except (ValueError, AttributeError, TypeError) as e:
            logger.error(f"Unexpected Spoonacular payload: {e}")
            raise RecipeSearchError(f"Unexpected Spoonacular payload: {e}") from e

        logger.info(f"✓ Found {len(recipes)} recipes")
        return recipes
