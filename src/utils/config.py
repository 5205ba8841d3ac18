"""Configuration management for the Smart Recipe Finder service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API Key: used for the AI suggestion. Missing key means every request
        # falls back to the rule-based recommendation instead of failing.
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Spoonacular API Key: required for recipe search (requests fail with 500 without it)
        self.SPOONACULAR_API_KEY: str = os.getenv("SPOONACULAR_API_KEY", "")
        # Default: gemini-2.5-flash (fast, cost-effective for short suggestions)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Spoonacular base URL (override for proxies or test doubles)
        self.SPOONACULAR_BASE_URL: str = os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com")
        # Server host and port
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "7777"))
        # Number of recipes requested from Spoonacular per search. Default: 5
        self.MAX_RECIPES: int = int(os.getenv("MAX_RECIPES", "5"))
        # Timeout (seconds) for a single Spoonacular request. Default: 10
        self.REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))
        # LLM Model Parameters
        # Temperature: moderate sampling for varied but on-topic suggestions
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Max Output Tokens: suggestions are capped at ~150 words
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "200"))
        # Cooking time preference sent to the prompt builder: "quick", "moderate" or "any"
        self.COOKING_TIME_PREFERENCE: str = os.getenv("COOKING_TIME_PREFERENCE", "any")
        # Directory holding the saved-recipes storage file
        self.SAVED_RECIPES_DIR: str = os.getenv("SAVED_RECIPES_DIR", "tmp")

    def validate(self) -> None:
        """Validate configuration values.

        API keys are not checked here: a missing Spoonacular key fails the
        individual request and a missing Gemini key triggers the fallback.

        Raises:
            ValueError: If a value is out of range or not a recognised option.
        """
        if self.COOKING_TIME_PREFERENCE not in ("quick", "moderate", "any"):
            raise ValueError(
                f"COOKING_TIME_PREFERENCE must be 'quick', 'moderate' or 'any', got: {self.COOKING_TIME_PREFERENCE}"
            )
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 1:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 1, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if not (1 <= self.MAX_RECIPES <= 100):
            raise ValueError(
                f"MAX_RECIPES must be between 1 and 100, got: {self.MAX_RECIPES}"
            )
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be positive, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
