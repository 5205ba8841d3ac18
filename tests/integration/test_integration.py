"""Live integration tests for the Smart Recipe Finder.

Runs the recommendation pipeline against the real Spoonacular and Gemini
APIs, in-process through the FastAPI test client and directly through the
agent. Each search consumes Spoonacular quota (roughly one point per test).

Run: pytest tests/integration -v
"""

import pytest
from fastapi.testclient import TestClient

from app import app
from src.agents.agent import initialize_recipe_agent
from src.api.routes import get_store
from src.storage.saved_recipes import InMemoryStorage, SavedRecipesStore
from src.utils.config import config
from src.utils.logger import logger


@pytest.fixture(scope="module")
def client():
    app.dependency_overrides[get_store] = lambda: SavedRecipesStore(InMemoryStorage())
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestRecipeSearchAPI:
    """POST /api/recipes against the live APIs."""

    def test_search_without_cuisine(self, client):
        response = client.post("/api/recipes", json={"ingredients": "chicken, rice"})

        assert response.status_code == 200
        data = response.json()
        assert isinstance(data["recipes"], list)
        assert data["aiSuggestion"]
        for recipe in data["recipes"]:
            assert recipe["title"]
            assert recipe["sourceUrl"].startswith("https://spoonacular.com/recipes/")
        logger.info(f"✓ {len(data['recipes'])} recipes, suggestion: {data['aiSuggestion'][:80]}...")

    def test_search_with_cuisine(self, client):
        response = client.post("/api/recipes", json={"ingredients": "tomato, basil", "cuisine": "italian"})

        assert response.status_code == 200
        data = response.json()
        assert data["aiSuggestion"]
        assert all("readyInMinutes" in recipe for recipe in data["recipes"])

    def test_empty_ingredients_rejected(self, client):
        response = client.post("/api/recipes", json={"ingredients": "  "})

        assert response.status_code == 400
        assert response.json() == {"error": "Ingredients are required"}


class TestRecommendationPipeline:
    """Direct agent calls."""

    @pytest.mark.asyncio
    async def test_recommend(self):
        agent = initialize_recipe_agent()

        result = await agent.recommend("eggs, spinach")

        assert result.ai_suggestion
        assert len(result.recipes) <= config.MAX_RECIPES
