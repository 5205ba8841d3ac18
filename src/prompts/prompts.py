"""Prompts for the AI recipe suggestion.

Builds the system instruction and the user message sent to Gemini for one
search. The system prompt is enriched with static domain knowledge (cuisine
context, ingredient-category insights, time and nutrition preferences); the
user message lists the candidate recipes and a contextual cooking tip for the
first one. Both builders are pure functions of their context.
"""

from src.models.models import AIRecommendationContext, CookingTimePreference, Cuisine, NutritionalFocus
from src.prompts.cooking_tips import get_contextual_cooking_tip

BASE_SYSTEM_PROMPT = """You are an expert chef and nutritionist with deep knowledge of various cuisines and cooking techniques.
Based on the available ingredients and recipe options, provide personalized recommendations that consider:
1. Flavor compatibility of ingredients
2. Nutritional balance and health benefits
3. Cooking techniques that enhance the ingredients
4. Cuisine-specific preparation methods
5. Practical cooking tips for better results
6. Nutritional insights about the recommended dish

Keep your response under 150 words, be encouraging, and provide actionable advice."""

CLOSING_QUESTION = "Which recipe would you recommend and what specific tips can you provide to make it exceptional?"

CUISINE_CONTEXTS: dict[Cuisine, str] = {
    Cuisine.ITALIAN: "Italian cuisine emphasizes fresh ingredients, olive oil, herbs like basil and oregano, and proper pasta cooking techniques.",
    Cuisine.INDIAN: "Indian cuisine uses complex spice blends, ghee, and techniques like tempering (tadka) for deep flavor development.",
    Cuisine.CHINESE: "Chinese cuisine focuses on balance, wok cooking techniques, and the interplay of sweet, sour, salty, and bitter flavors.",
    Cuisine.MEXICAN: "Mexican cuisine features chiles, cilantro, lime, and techniques like roasting and slow-cooking for depth.",
    Cuisine.MEDITERRANEAN: "Mediterranean cuisine highlights olive oil, fresh herbs, garlic, and simple preparations that let ingredients shine.",
    Cuisine.THAI: "Thai cuisine balances sweet, sour, salty, and spicy flavors with fresh herbs and aromatic ingredients.",
    Cuisine.PAKISTANI: "Pakistani cuisine uses aromatic spices, ghee, and techniques like dum (slow steaming) for rich flavors.",
    Cuisine.AMERICAN: "American cuisine is diverse, often featuring grilling, smoking, and comfort food preparations.",
    Cuisine.UNKNOWN: "Focus on techniques that enhance the natural flavors of the ingredients.",
}

# (category members, insight) in output order
INGREDIENT_INSIGHTS: tuple[tuple[frozenset[str], str], ...] = (
    (
        frozenset({"chicken", "beef", "pork", "fish", "tofu"}),
        "Protein present - consider marination techniques and proper cooking temperatures",
    ),
    (
        frozenset({"garlic", "onion", "ginger", "shallots"}),
        "Aromatics available - focus on proper sautéing techniques for flavor base",
    ),
    (
        frozenset({"basil", "cilantro", "parsley", "mint"}),
        "Fresh herbs available - add at the end to preserve flavor and aroma",
    ),
    (
        frozenset({"tomato", "pepper", "onion", "carrot", "broccoli", "spinach", "mushroom"}),
        "Fresh vegetables - consider cooking methods that preserve texture and nutrients",
    ),
)
GENERIC_INGREDIENT_INSIGHT = "Focus on techniques that bring out the best in these ingredients."

TIME_PREFERENCE_CONTEXTS: dict[CookingTimePreference, str] = {
    CookingTimePreference.QUICK: "User prefers quick meals under 30 minutes - focus on efficient cooking methods",
    CookingTimePreference.MODERATE: "User doesn't mind spending moderate time cooking - can include techniques that build flavor",
    CookingTimePreference.ANY: "User is flexible with cooking time - can suggest both quick and elaborate preparations",
}

NUTRITIONAL_FOCUS_CONTEXTS: dict[NutritionalFocus, str] = {
    NutritionalFocus.BALANCED: "Focus on recipes with a good balance of macronutrients - protein, carbs, and healthy fats.",
    NutritionalFocus.HIGH_PROTEIN: "Prioritize recipes rich in protein sources like lean meats, fish, legumes, or tofu.",
    NutritionalFocus.LOW_CARB: "Focus on recipes that are lower in carbohydrates, emphasizing vegetables and proteins.",
    NutritionalFocus.VEGETARIAN: "Focus on plant-based recipes that are nutritionally complete with protein from various sources.",
    NutritionalFocus.ANY: "No specific nutritional focus - recommend based on flavor and cooking techniques.",
}


def get_cuisine_context(cuisine: str) -> str:
    return CUISINE_CONTEXTS[Cuisine.parse(cuisine)]


def get_ingredient_insights(ingredients: list[str]) -> str:
    """Concatenate the insights of every ingredient category present, joined with ". "."""
    ingredients_lower = {i.lower() for i in ingredients}
    insights = [insight for members, insight in INGREDIENT_INSIGHTS if ingredients_lower & members]
    return ". ".join(insights) or GENERIC_INGREDIENT_INSIGHT


def get_time_preference_context(preference: str) -> str:
    return TIME_PREFERENCE_CONTEXTS[CookingTimePreference.parse(preference)]


def get_nutritional_focus_context(focus: str) -> str:
    return NUTRITIONAL_FOCUS_CONTEXTS[NutritionalFocus.parse(focus)]


def generate_dynamic_prompt(context: AIRecommendationContext) -> str:
    """Generate the system instruction for one suggestion request.

    Sections are appended only when the corresponding context is present:
    cuisine, ingredient insights, dietary considerations, time preference and
    nutritional focus (skipped when "any").

    Args:
        context: Ingredients, cuisine, recipes and optional preferences.

    Returns:
        str: System prompt text.
    """
    system_prompt = BASE_SYSTEM_PROMPT

    if context.cuisine:
        system_prompt += f"\n\nCuisine Context: {get_cuisine_context(context.cuisine)}"

    if context.ingredients:
        system_prompt += f"\n\nIngredient Insights: {get_ingredient_insights(context.ingredients)}"

    if context.dietary_preferences:
        system_prompt += (
            f"\n\nDietary Considerations: User prefers {', '.join(context.dietary_preferences)} options."
        )

    if context.cooking_time_preference:
        system_prompt += f"\n\nTime Preference: {get_time_preference_context(context.cooking_time_preference)}"

    if context.nutritional_focus and context.nutritional_focus != NutritionalFocus.ANY.value:
        system_prompt += f"\n\nNutritional Focus: {get_nutritional_focus_context(context.nutritional_focus)}"

    return system_prompt


def _format_request_and_recipes(context: AIRecommendationContext) -> str:
    user_prompt = f"I have these ingredients: {', '.join(context.ingredients)}"

    if context.cuisine:
        user_prompt += f" and I'd like to make {context.cuisine} cuisine"

    user_prompt += ". Here are the recipe options I found:\n"

    for index, recipe in enumerate(context.recipes, start=1):
        user_prompt += f"{index}. {recipe.title}"
        if recipe.ready_in_minutes is not None:
            user_prompt += f" ({recipe.ready_in_minutes} minutes)"
        user_prompt += "\n"

    return user_prompt


def generate_enhanced_user_prompt(context: AIRecommendationContext) -> str:
    """Generate the user message with a contextual cooking tip for the first recipe.

    Deterministic: identical context gives byte-identical output.
    """
    user_prompt = _format_request_and_recipes(context)

    if context.recipes:
        contextual_tip = get_contextual_cooking_tip(
            recipe_title=context.recipes[0].title,
            ingredients=context.ingredients,
            cuisine=context.cuisine,
        )
        user_prompt += f"\n\nAdditional context: {contextual_tip}"

    user_prompt += f"\n\n{CLOSING_QUESTION}"
    return user_prompt


def generate_user_prompt(context: AIRecommendationContext) -> str:
    """Generate the plain user message (recipe list and closing question only)."""
    return f"{_format_request_and_recipes(context)}\n{CLOSING_QUESTION}"
