"""Pytest configuration and fixtures for integration tests.

Loads .env from the project root and skips the whole directory when the
Spoonacular or Gemini API key is missing. These tests call the live APIs and
consume quota.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env before test collection so src.utils.config sees the keys."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    print("\n" + "=" * 70)
    print("Note: These tests require valid SPOONACULAR_API_KEY and GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests if the required API keys are not configured."""
    missing = [name for name in ("SPOONACULAR_API_KEY", "GEMINI_API_KEY") if not os.getenv(name)]
    if missing:
        pytest.skip(
            f"Integration tests skipped. Missing API keys: {', '.join(missing)}. Please set these in your .env file.",
            allow_module_level=True,
        )
