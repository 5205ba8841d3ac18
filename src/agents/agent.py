"""Recipe recommendation pipeline.

Orchestrates one search request:
1. Normalize ingredients and cuisine (empty ingredients rejected before any network call)
2. Search Spoonacular (failures propagate to the HTTP layer)
3. Build system and user prompts
4. Ask Gemini for a suggestion; on any failure substitute the rule-based fallback

The Gemini failure path is a one-shot substitution, not a retry. Concurrent
requests are independent: the last response to resolve is what the client shows.
"""

import asyncio
import random
from typing import Optional

from google import genai
from google.genai import types

from src.agents.fallback import FallbackRecommender
from src.hooks.normalize_input import normalize_cuisine, normalize_ingredients
from src.models.models import (
    AIRecommendationContext,
    FallbackRecommendationContext,
    RecipeSearchResponse,
    RecipeSummary,
)
from src.prompts.prompts import generate_dynamic_prompt, generate_enhanced_user_prompt
from src.tools.spoonacular import SpoonacularClient
from src.utils.config import config
from src.utils.logger import logger


class IngredientsRequiredError(Exception):
    """Raised when a request carries no usable ingredients."""


async def generate_ai_suggestion(context: AIRecommendationContext, client: Optional[genai.Client] = None) -> str:
    """Call Gemini once with the generated system and user prompts.

    Args:
        context: Prompt context for this request.
        client: Gemini client to reuse; a new one is built when omitted.

    Returns:
        The model's text (first candidate), or "" when the response has none.

    Raises:
        ValueError: If GEMINI_API_KEY is not configured.
        Exception: Any error raised by the Gemini client.
    """
    if not config.GEMINI_API_KEY:
        raise ValueError("GEMINI_API_KEY is not configured")

    system_prompt = generate_dynamic_prompt(context)
    user_prompt = generate_enhanced_user_prompt(context)

    if client is None:
        client = genai.Client(api_key=config.GEMINI_API_KEY)

    # Sync client call run in a worker thread to keep the event loop free
    response = await asyncio.to_thread(
        client.models.generate_content,
        model=config.GEMINI_MODEL,
        contents=user_prompt,
        config=types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=config.TEMPERATURE,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
        ),
    )

    return response.text or ""


class RecipeRecommendationAgent:
    """Search recipes and attach an AI (or fallback) suggestion."""

    def __init__(
        self,
        search_client: SpoonacularClient,
        fallback: Optional[FallbackRecommender] = None,
        cooking_time_preference: str = "any",
    ) -> None:
        self.search_client = search_client
        self.fallback = fallback or FallbackRecommender()
        self.cooking_time_preference = cooking_time_preference
        self._genai_client: Optional[genai.Client] = None

    def get_genai_client(self) -> Optional[genai.Client]:
        """Gemini client shared by every request on this agent, built on first use."""
        if self._genai_client is None and config.GEMINI_API_KEY:
            self._genai_client = genai.Client(api_key=config.GEMINI_API_KEY)
        return self._genai_client

    async def suggest(self, ai_context: AIRecommendationContext, fallback_context: FallbackRecommendationContext) -> str:
        """Return the Gemini suggestion, or the fallback text if Gemini fails for any reason."""
        try:
            suggestion = await generate_ai_suggestion(ai_context, client=self.get_genai_client())
            logger.info(f"✓ AI suggestion generated ({len(suggestion)} chars)")
            return suggestion
        except Exception as e:
            logger.warning(f"AI suggestion unavailable, using fallback recommendation: {e}")
            return self.fallback.generate_smart_recommendation(fallback_context)

    async def recommend(self, ingredients_text: Optional[str], cuisine: Optional[str] = None) -> RecipeSearchResponse:
        """Run the full search + suggestion pipeline for one request.

        Args:
            ingredients_text: Raw comma-separated ingredient string.
            cuisine: Optional cuisine preference.

        Returns:
            RecipeSearchResponse with recipes and the suggestion text.

        Raises:
            IngredientsRequiredError: If no ingredients were given.
            RecipeSearchConfigError: If Spoonacular is not configured.
            RecipeSearchError: If the Spoonacular call fails.
        """
        ingredients = normalize_ingredients(ingredients_text)
        if not ingredients:
            raise IngredientsRequiredError("Ingredients are required")
        cuisine = normalize_cuisine(cuisine)

        logger.info(f"Recommending recipes for {ingredients} (cuisine={cuisine or '-'})")
        recipes = await self.search_client.search_recipes(ingredients, cuisine)

        ai_context = AIRecommendationContext(
            ingredients=ingredients,
            cuisine=cuisine,
            recipes=[RecipeSummary.from_recipe(recipe) for recipe in recipes],
            cooking_time_preference=self.cooking_time_preference,
        )
        fallback_context = FallbackRecommendationContext(recipes=recipes, ingredients=ingredients, cuisine=cuisine)

        suggestion = await self.suggest(ai_context, fallback_context)
        return RecipeSearchResponse(recipes=recipes, ai_suggestion=suggestion)


def initialize_recipe_agent(rng: Optional[random.Random] = None) -> RecipeRecommendationAgent:
    """Factory: build the recommendation agent from the module-level config.

    Args:
        rng: Optional random source for fallback tip selection.

    Returns:
        Configured RecipeRecommendationAgent.
    """
    logger.info("Initializing recipe recommendation agent...")
    search_client = SpoonacularClient(
        api_key=config.SPOONACULAR_API_KEY,
        base_url=config.SPOONACULAR_BASE_URL,
        timeout_seconds=config.REQUEST_TIMEOUT_SECONDS,
        number=config.MAX_RECIPES,
    )
    if not config.SPOONACULAR_API_KEY:
        logger.warning("SPOONACULAR_API_KEY is not set - recipe searches will fail")
    if not config.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set - suggestions will use the fallback recommender")

    agent = RecipeRecommendationAgent(
        search_client=search_client,
        fallback=FallbackRecommender(rng),
        cooking_time_preference=config.COOKING_TIME_PREFERENCE,
    )
    logger.info("✓ Recipe recommendation agent ready")
    return agent
