"""Input normalization for recipe search requests.

Turns the free-text ingredient field of the search form into an ordered
ingredient list and passes the cuisine preference through. Runs before any
network call so that an empty ingredient list is rejected up front.
"""

from typing import Optional

from src.utils.logger import logger


def normalize_ingredients(text: Optional[str]) -> list[str]:
    """Split a comma-separated ingredient string into a trimmed list.

    Empty entries (",," or trailing commas) are dropped; the user's order is
    kept. Case is preserved: matching code lowercases on its own.

    Args:
        text: Raw ingredient string from the request, e.g. "chicken, garlic ,rice".

    Returns:
        List of ingredient names, e.g. ["chicken", "garlic", "rice"]. Empty list
        for None or blank input.
    """
    if not text:
        return []

    ingredients = [part.strip() for part in text.split(",")]
    ingredients = [ingredient for ingredient in ingredients if ingredient]

    logger.debug(f"Normalized ingredients: {ingredients}")
    return ingredients


def normalize_cuisine(cuisine: Optional[str]) -> Optional[str]:
    """Return the cuisine unmodified, or None when it is missing or blank."""
    if cuisine is None or not cuisine.strip():
        return None
    return cuisine


def format_ingredient_query(ingredients: list[str]) -> str:
    """Join ingredients into the comma-separated form Spoonacular expects."""
    return ",".join(ingredients)
