"""HTTP routes for the Smart Recipe Finder service.

- POST /api/recipes: search recipes and attach an AI (or fallback) suggestion
- /api/cuisines: cuisine options for the search form
- /api/saved-recipes/*: saved-recipes panel (list, toggle, remove, clear, export, import)
- /health: liveness probe
"""

import asyncio
from functools import lru_cache
from typing import Literal

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from src.agents.agent import IngredientsRequiredError, RecipeRecommendationAgent, initialize_recipe_agent
from src.models.models import (
    CuisineOption,
    ErrorResponse,
    Recipe,
    RecipeRequest,
    SavedRecipesResponse,
    ToggleSavedResponse,
)
from src.storage.saved_recipes import FileStorage, SavedRecipesStore
from src.tools.spoonacular import RecipeSearchConfigError, RecipeSearchError
from src.utils.config import config
from src.utils.logger import logger

INGREDIENTS_REQUIRED_MESSAGE = "Ingredients are required"
FETCH_FAILED_MESSAGE = "Failed to fetch recipes. Please try again."
IMPORT_FAILED_MESSAGE = "Error importing recipes. Please check the file format."

# Upstream status -> client-facing message; anything else is a 500
SEARCH_ERROR_MESSAGES: dict[int, str] = {
    status.HTTP_401_UNAUTHORIZED: "API authentication failed. Please check the configuration.",
    status.HTTP_402_PAYMENT_REQUIRED: "API quota exceeded. Please try again later.",
}

CUISINE_OPTIONS: list[CuisineOption] = [
    CuisineOption(value="", label="All Cuisines"),
    CuisineOption(value="italian", label="Italian"),
    CuisineOption(value="pakistani", label="Pakistani"),
    CuisineOption(value="indian", label="Indian"),
    CuisineOption(value="chinese", label="Chinese"),
    CuisineOption(value="mexican", label="Mexican"),
    CuisineOption(value="mediterranean", label="Mediterranean"),
    CuisineOption(value="thai", label="Thai"),
    CuisineOption(value="american", label="American"),
]

router = APIRouter(prefix="/api", tags=["recipes"])
health_router = APIRouter(tags=["health"])


@lru_cache(maxsize=1)
def get_agent() -> RecipeRecommendationAgent:
    return initialize_recipe_agent()


@lru_cache(maxsize=1)
def get_store() -> SavedRecipesStore:
    return SavedRecipesStore(FileStorage(config.SAVED_RECIPES_DIR))


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post("/recipes", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def find_recipes(request: Request, agent: RecipeRecommendationAgent = Depends(get_agent)) -> JSONResponse:
    """Search recipes for a comma-separated ingredient list.

    Body: {"ingredients": "chicken, rice", "cuisine": "italian"} (cuisine optional).
    Returns {"recipes": [...], "aiSuggestion": "..."} or {"error": "..."}.
    """
    try:
        payload = RecipeRequest.model_validate(await request.json())
    except ValidationError as e:
        logger.warning(f"Invalid recipe request: {e.error_count()} errors")
        return _error(status.HTTP_400_BAD_REQUEST, INGREDIENTS_REQUIRED_MESSAGE)
    except ValueError as e:
        logger.error(f"Unreadable request body: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, FETCH_FAILED_MESSAGE)

    try:
        result = await agent.recommend(payload.ingredients, payload.cuisine)
    except RecipeSearchConfigError as e:
        logger.error(f"Recipe search not configured: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, FETCH_FAILED_MESSAGE)
    except RecipeSearchError as e:
        logger.error(f"Error fetching recipes: {e} (status={e.status_code})")
        message = SEARCH_ERROR_MESSAGES.get(e.status_code)
        if message:
            return _error(e.status_code, message)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, FETCH_FAILED_MESSAGE)
    except IngredientsRequiredError as e:
        logger.warning(f"Rejected recipe request: {e}")
        return _error(status.HTTP_400_BAD_REQUEST, INGREDIENTS_REQUIRED_MESSAGE)
    except Exception as e:
        logger.error(f"Unexpected error fetching recipes: {e}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, FETCH_FAILED_MESSAGE)

    logger.info(f"✓ Returning {len(result.recipes)} recipes")
    return JSONResponse(content=result.to_wire())


@router.get("/cuisines", response_model=list[CuisineOption])
async def list_cuisines() -> list[CuisineOption]:
    return CUISINE_OPTIONS


@router.get("/saved-recipes", response_model=SavedRecipesResponse)
def list_saved_recipes(store: SavedRecipesStore = Depends(get_store)) -> SavedRecipesResponse:
    recipes = store.saved_recipes
    return SavedRecipesResponse(recipes=[recipe.to_wire() for recipe in recipes], count=len(recipes))


@router.post("/saved-recipes/toggle", response_model=ToggleSavedResponse)
def toggle_saved_recipe(recipe: Recipe, store: SavedRecipesStore = Depends(get_store)) -> ToggleSavedResponse:
    """Save the recipe, or remove it if it is already saved."""
    saved = store.save_recipe(recipe)
    return ToggleSavedResponse(saved=saved, count=store.get_saved_recipe_count())


@router.delete("/saved-recipes/{key}", responses={400: {"model": ErrorResponse}})
def remove_saved_recipe(
    key: str,
    mode: Literal["id", "title"] = "id",
    store: SavedRecipesStore = Depends(get_store),
) -> JSONResponse:
    """Remove saved recipes by id (default) or by exact title."""
    lookup: int | str = key
    if mode == "id":
        try:
            lookup = int(key)
        except ValueError:
            return _error(status.HTTP_400_BAD_REQUEST, f"Invalid recipe id: {key}")

    removed = store.remove_recipe(lookup, mode)
    return JSONResponse(content={"removed": removed, "count": store.get_saved_recipe_count()})


@router.delete("/saved-recipes")
def clear_saved_recipes(store: SavedRecipesStore = Depends(get_store)) -> JSONResponse:
    store.clear_all_saved_recipes()
    return JSONResponse(content={"count": 0})


@router.get("/saved-recipes/export")
def export_saved_recipes(store: SavedRecipesStore = Depends(get_store)) -> Response:
    return Response(
        content=store.export_saved_recipes(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="saved-recipes.json"'},
    )


@router.post("/saved-recipes/import", responses={400: {"model": ErrorResponse}})
async def import_saved_recipes(request: Request, store: SavedRecipesStore = Depends(get_store)) -> JSONResponse:
    """Replace the saved collection with the JSON array sent as the raw request body."""
    body = (await request.body()).decode("utf-8", errors="replace")
    if not await asyncio.to_thread(store.import_saved_recipes, body):
        return _error(status.HTTP_400_BAD_REQUEST, IMPORT_FAILED_MESSAGE)
    return JSONResponse(content={"imported": True, "count": store.get_saved_recipe_count()})


@health_router.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "spoonacular_configured": bool(config.SPOONACULAR_API_KEY),
        "gemini_configured": bool(config.GEMINI_API_KEY),
    }
