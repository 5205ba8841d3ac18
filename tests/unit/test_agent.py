"""Unit tests for the recommendation pipeline."""

import random
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.agents.agent import (
    IngredientsRequiredError,
    RecipeRecommendationAgent,
    generate_ai_suggestion,
    initialize_recipe_agent,
)
from src.agents.fallback import FallbackRecommender
from src.models.models import AIRecommendationContext, Recipe, RecipeSummary
from src.tools.spoonacular import RecipeSearchError, SpoonacularClient

RECIPES = [
    Recipe(id=1, title="Chicken Fried Rice", ready_in_minutes=25),
    Recipe(id=2, title="Rice Bowl", ready_in_minutes=15),
]


@pytest.fixture
def search_client():
    client = MagicMock(spec=SpoonacularClient)
    client.search_recipes = AsyncMock(return_value=RECIPES)
    return client


@pytest.fixture
def agent(search_client):
    return RecipeRecommendationAgent(search_client=search_client, fallback=FallbackRecommender(random.Random(1)))


class TestGenerateAISuggestion:
    """Test the single Gemini call."""

    @pytest.mark.asyncio
    async def test_missing_key_raises(self):
        with patch("src.agents.agent.config") as mock_config:
            mock_config.GEMINI_API_KEY = ""
            with pytest.raises(ValueError, match="GEMINI_API_KEY"):
                await generate_ai_suggestion(AIRecommendationContext(ingredients=["rice"]))

    @pytest.mark.asyncio
    @patch("src.agents.agent.genai.Client")
    async def test_sends_system_and_user_prompts(self, mock_client_cls):
        mock_response = MagicMock()
        mock_response.text = "Go with the fried rice!"
        mock_client_cls.return_value.models.generate_content.return_value = mock_response
        context = AIRecommendationContext(
            ingredients=["chicken", "rice"],
            recipes=[RecipeSummary(title="Chicken Fried Rice", ready_in_minutes=25)],
        )

        with patch("src.agents.agent.config") as mock_config:
            mock_config.GEMINI_API_KEY = "test-key"
            mock_config.GEMINI_MODEL = "gemini-test"
            mock_config.TEMPERATURE = 0.7
            mock_config.MAX_OUTPUT_TOKENS = 200
            result = await generate_ai_suggestion(context)

        assert result == "Go with the fried rice!"
        mock_client_cls.assert_called_once_with(api_key="test-key")
        kwargs = mock_client_cls.return_value.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"].startswith("I have these ingredients: chicken, rice.")
        assert "You are an expert chef" in str(kwargs["config"].system_instruction)
        assert kwargs["config"].temperature == 0.7
        assert kwargs["config"].max_output_tokens == 200

    @pytest.mark.asyncio
    @patch("src.agents.agent.genai.Client")
    async def test_empty_response_text(self, mock_client_cls):
        mock_client_cls.return_value.models.generate_content.return_value = MagicMock(text=None)

        with patch("src.agents.agent.config") as mock_config:
            mock_config.GEMINI_API_KEY = "test-key"
            mock_config.TEMPERATURE = 0.7
            mock_config.MAX_OUTPUT_TOKENS = 200
            result = await generate_ai_suggestion(AIRecommendationContext(ingredients=["rice"]))

        assert result == ""

    @pytest.mark.asyncio
    async def test_uses_given_client(self):
        client = MagicMock()
        client.models.generate_content.return_value = MagicMock(text="Reuse me.")

        with patch("src.agents.agent.genai.Client") as mock_client_cls, patch("src.agents.agent.config") as mock_config:
            mock_config.GEMINI_API_KEY = "test-key"
            mock_config.TEMPERATURE = 0.7
            mock_config.MAX_OUTPUT_TOKENS = 200
            result = await generate_ai_suggestion(AIRecommendationContext(ingredients=["rice"]), client=client)

        assert result == "Reuse me."
        mock_client_cls.assert_not_called()


class TestRecipeRecommendationAgent:
    """Test the search + suggestion pipeline."""

    @pytest.mark.asyncio
    @patch("src.agents.agent.generate_ai_suggestion", new_callable=AsyncMock)
    async def test_returns_ai_suggestion(self, mock_suggest, agent, search_client):
        mock_suggest.return_value = "Make the fried rice."

        result = await agent.recommend(" chicken, ,rice ", "  ")

        search_client.search_recipes.assert_awaited_once_with(["chicken", "rice"], None)
        assert result.recipes == RECIPES
        assert result.ai_suggestion == "Make the fried rice."
        context = mock_suggest.call_args.args[0]
        assert context.ingredients == ["chicken", "rice"]
        assert [r.title for r in context.recipes] == ["Chicken Fried Rice", "Rice Bowl"]
        assert context.cooking_time_preference == "any"

    @pytest.mark.asyncio
    @patch("src.agents.agent.generate_ai_suggestion", new_callable=AsyncMock)
    async def test_gemini_failure_uses_fallback(self, mock_suggest, agent):
        mock_suggest.side_effect = RuntimeError("quota exhausted")

        result = await agent.recommend("chicken, rice", "chinese")

        assert result.recipes == RECIPES
        assert result.ai_suggestion.startswith('This chinese dish perfectly matches your preference! I recommend "Chicken Fried Rice"')

    @pytest.mark.asyncio
    @patch("src.agents.agent.generate_ai_suggestion", new_callable=AsyncMock)
    async def test_no_recipes_fallback(self, mock_suggest, agent, search_client):
        search_client.search_recipes.return_value = []
        mock_suggest.side_effect = ValueError("GEMINI_API_KEY is not configured")

        result = await agent.recommend("chicken")

        assert result.recipes == []
        assert result.ai_suggestion.startswith("No recipes found with those exact ingredients.")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ingredients", [None, "", "   ", ",,,"])
    async def test_empty_ingredients_rejected_before_search(self, agent, search_client, ingredients):
        with pytest.raises(IngredientsRequiredError, match="Ingredients are required"):
            await agent.recommend(ingredients)

        search_client.search_recipes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_errors_propagate(self, agent, search_client):
        search_client.search_recipes.side_effect = RecipeSearchError("quota", status_code=402)

        with pytest.raises(RecipeSearchError):
            await agent.recommend("rice")

    @pytest.mark.asyncio
    async def test_gemini_client_built_once_per_agent(self, agent):
        """Test that consecutive requests share one Gemini client."""
        with patch("src.agents.agent.genai.Client") as mock_client_cls, patch("src.agents.agent.config") as mock_config:
            mock_config.GEMINI_API_KEY = "test-key"
            mock_config.TEMPERATURE = 0.7
            mock_config.MAX_OUTPUT_TOKENS = 200
            mock_client_cls.return_value.models.generate_content.return_value = MagicMock(text="Fry the rice.")

            first = await agent.recommend("chicken, rice")
            second = await agent.recommend("rice")

        assert first.ai_suggestion == second.ai_suggestion == "Fry the rice."
        mock_client_cls.assert_called_once_with(api_key="test-key")
        assert mock_client_cls.return_value.models.generate_content.call_count == 2

    @pytest.mark.asyncio
    async def test_no_gemini_client_without_key(self, agent):
        with patch("src.agents.agent.genai.Client") as mock_client_cls, patch("src.agents.agent.config") as mock_config:
            mock_config.GEMINI_API_KEY = ""

            result = await agent.recommend("chicken, rice")

        mock_client_cls.assert_not_called()
        assert result.ai_suggestion


class TestInitializeRecipeAgent:
    def test_builds_agent_from_config(self):
        with patch("src.agents.agent.config") as mock_config:
            mock_config.SPOONACULAR_API_KEY = "spoon-key"
            mock_config.SPOONACULAR_BASE_URL = "http://localhost:9000"
            mock_config.REQUEST_TIMEOUT_SECONDS = 3.0
            mock_config.MAX_RECIPES = 7
            mock_config.GEMINI_API_KEY = ""
            mock_config.COOKING_TIME_PREFERENCE = "quick"

            agent = initialize_recipe_agent(random.Random(0))

        assert agent.search_client.api_key == "spoon-key"
        assert agent.search_client.base_url == "http://localhost:9000"
        assert agent.search_client.number == 7
        assert agent.cooking_time_preference == "quick"
