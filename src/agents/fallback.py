"""Rule-based recipe recommendation used when the Gemini call fails.

Classifies candidate recipes into category buckets (cuisine match, healthy,
quick, ingredient overlap), picks one recipe by a fixed priority order and
composes a recommendation sentence with supplementary tips.

The selected recipe and the reason sentence are deterministic. Tip wording
drawn from the tip pools goes through an injected random.Random, so a seeded
source makes the whole output reproducible.
"""

import random
from typing import Callable, NamedTuple, Optional

from src.models.models import (
    Cuisine,
    FallbackRecommendationContext,
    Recipe,
    RecipeCategories,
    ScoredRecipe,
)
from src.utils.logger import logger

HEALTH_KEYWORDS = ("salad", "grilled", "baked", "steamed", "fresh", "vegetable", "light", "healthy")
QUICK_KEYWORDS = ("easy", "quick", "simple", "fast", "15-minute", "30-minute", "ready")
QUICK_MAX_MINUTES = 30
SLOW_MIN_MINUTES = 60
INGREDIENT_MATCH_THRESHOLD = 0.5

CUISINE_KEYWORDS: dict[Cuisine, tuple[str, ...]] = {
    Cuisine.ITALIAN: ("pasta", "pizza", "risotto", "lasagna", "gnocchi", "bruschetta"),
    Cuisine.INDIAN: ("curry", "tikka", "biryani", "masala", "naan", "samosa", "korma"),
    Cuisine.CHINESE: ("stir-fry", "fried rice", "noodles", "dumplings", "wok", "sweet and sour"),
    Cuisine.MEXICAN: ("taco", "burrito", "quesadilla", "enchilada", "salsa", "guacamole"),
    Cuisine.MEDITERRANEAN: ("hummus", "falafel", "tabbouleh", "gyro", "kebab", "tzatziki"),
    Cuisine.THAI: ("curry", "pad thai", "stir-fry", "coconut", "lemongrass", "basil"),
    Cuisine.PAKISTANI: ("karahi", "biryani", "korma", "kebab", "naan", "haleem"),
    Cuisine.AMERICAN: ("burger", "bbq", "grilled", "sandwich", "fries", "mac and cheese"),
    Cuisine.UNKNOWN: (),
}

CUISINE_TIPS: dict[Cuisine, str] = {
    Cuisine.ITALIAN: "For authentic Italian flavor, use high-quality olive oil and fresh herbs. Don't overcook your pasta!",
    Cuisine.INDIAN: "Toast your spices before adding them to release their aromas. Ghee adds authentic flavor!",
    Cuisine.CHINESE: "Heat your wok until it is smoking hot before adding ingredients for perfect stir-fry results!",
    Cuisine.MEXICAN: "Fresh lime juice and cilantro at the end brighten all the flavors. Don't skip the chiles!",
    Cuisine.MEDITERRANEAN: "Extra virgin olive oil and fresh herbs are key. Let ingredients shine simply!",
    Cuisine.THAI: "Balance is crucial - sweet, sour, salty, and spicy. Fish sauce adds authentic umami!",
    Cuisine.PAKISTANI: "Garam masala at the end adds aromatic finish. Slow cooking develops deep flavors!",
    Cuisine.AMERICAN: "Don't be afraid to season generously. American cuisine loves bold flavors!",
}

HEALTH_TIPS = (
    "Add extra vegetables to boost nutrition without compromising flavor!",
    "Consider using less salt and more herbs for a healthier seasoning approach.",
    "Grilling or baking instead of frying can make this even healthier!",
    "Add a side salad to complete this nutritious meal.",
)

QUICK_TIPS = (
    "Prep all your ingredients before you start cooking for even faster results!",
    "A hot pan is your best friend for quick cooking - get it properly heated first.",
    "Cut ingredients uniformly for even cooking in less time.",
    "Multitask by prepping the next ingredient while one is cooking.",
)

GENERAL_TIPS = (
    "Taste as you go and adjust seasoning gradually - you can always add more!",
    "Fresh herbs at the end of cooking brighten flavors dramatically.",
    "A squeeze of lemon or lime can brighten almost any dish.",
    "Don't crowd the pan - cook in batches if needed for better browning.",
    "Let meat rest after cooking to redistribute juices for maximum flavor.",
)

INGREDIENT_TIPS: dict[str, str] = {
    "chicken": "Let chicken rest for 5 minutes after cooking to keep it juicy!",
    "tomatoes": "Use ripe tomatoes for the best flavor, or canned when fresh aren't available.",
    "garlic": "Sauté garlic slowly over medium heat to prevent burning and develop sweetness.",
    "onion": "Caramelize onions slowly for deep, sweet flavor that enhances any dish.",
    "rice": "Rinse rice before cooking and let it rest covered for 10 minutes after cooking.",
    "pasta": "Save some pasta water to add to your sauce for perfect consistency!",
}

SUBSTITUTIONS: dict[str, tuple[str, ...]] = {
    "chicken": ("tofu", "paneer", "chickpeas", "white beans"),
    "beef": ("mushrooms", "lentils", "black beans", "portobello"),
    "tomatoes": ("red bell peppers", "canned tomatoes", "tomato paste", "paprika"),
    "onions": ("shallots", "leeks", "green onions", "fennel"),
    "garlic": ("garlic powder", "shallots", "onion powder", "ginger"),
    "rice": ("quinoa", "couscous", "pasta", "potatoes"),
    "pasta": ("rice", "potatoes", "bread", "polenta"),
}
NO_SUBSTITUTIONS = "try adding common ingredients like eggs, flour, or herbs"

PROTEIN_INGREDIENTS = frozenset({"chicken", "beef", "fish", "tofu", "beans", "lentils"})
VEGETABLE_INGREDIENTS = frozenset({"tomato", "spinach", "broccoli", "pepper", "carrot", "onion", "mushroom"})
HEALTHY_FAT_INGREDIENTS = frozenset({"avocado", "olive oil", "nuts", "salmon"})
COMPLEX_CARB_INGREDIENTS = frozenset({"rice", "quinoa", "pasta", "potatoes", "sweet potatoes"})


def _has_any(ingredients: set[str], members: frozenset[str]) -> bool:
    return bool(ingredients & members)


# Checked in order; first match wins
NUTRITIONAL_INSIGHTS: tuple[tuple[Callable[[set[str]], bool], str], ...] = (
    (
        lambda i: _has_any(i, PROTEIN_INGREDIENTS),
        "This dish provides good protein for muscle maintenance and satiety.",
    ),
    (
        lambda i: len(i & VEGETABLE_INGREDIENTS) >= 3,
        "Packed with vegetables, this meal provides essential vitamins and fiber.",
    ),
    (
        lambda i: _has_any(i, HEALTHY_FAT_INGREDIENTS),
        "Contains healthy fats that support heart health and brain function.",
    ),
    (
        lambda i: _has_any(i, COMPLEX_CARB_INGREDIENTS),
        "Provides complex carbohydrates for sustained energy throughout the day.",
    ),
)
BALANCED_NUTRITION_INSIGHT = "This recipe offers a good balance of nutrients for a healthy meal."


def get_cuisine_keywords(cuisine: Optional[str]) -> tuple[str, ...]:
    return CUISINE_KEYWORDS[Cuisine.parse(cuisine)]


def calculate_ingredient_match(recipe_title: str, ingredients: list[str]) -> float:
    """Fraction of ingredients that match the recipe title.

    An ingredient matches when it is a substring of the lowercased title, or
    when the title's first word is a substring of the ingredient. The second
    test is asymmetric (short title words match many ingredients) and is kept
    as-is. An empty ingredient list scores 0.0.

    Args:
        recipe_title: Recipe title (any case).
        ingredients: Lowercased, trimmed ingredient names.

    Returns:
        Score in [0, 1].
    """
    if not ingredients:
        return 0.0

    title = recipe_title.lower()
    first_word = title.split(" ")[0]
    matched = [ingredient for ingredient in ingredients if ingredient in title or first_word in ingredient]
    return len(matched) / len(ingredients)


def analyze_recipes(recipes: list[Recipe], ingredients: list[str], cuisine: Optional[str] = None) -> RecipeCategories:
    """Sort recipes into category buckets in a single order-preserving pass.

    A recipe may land in several buckets. The cuisine bucket is only
    evaluated when a cuisine is given.
    """
    ingredient_list = [i.strip().lower() for i in ingredients]
    cuisine_keywords = get_cuisine_keywords(cuisine) if cuisine else ()
    categories = RecipeCategories()

    for recipe in recipes:
        title = recipe.title.lower()

        if any(keyword in title for keyword in HEALTH_KEYWORDS):
            categories.healthy.append(recipe)

        is_fast = recipe.ready_in_minutes is not None and recipe.ready_in_minutes <= QUICK_MAX_MINUTES
        if any(keyword in title for keyword in QUICK_KEYWORDS) or is_fast:
            categories.quick.append(recipe)

        if any(keyword in title for keyword in cuisine_keywords):
            categories.cuisine_specific.append(recipe)

        match_score = calculate_ingredient_match(recipe.title, ingredient_list)
        if match_score > INGREDIENT_MATCH_THRESHOLD:
            categories.ingredient_match.append(ScoredRecipe(recipe=recipe, match_score=match_score))

    logger.debug(
        f"Fallback categories: cuisine={len(categories.cuisine_specific)} healthy={len(categories.healthy)} "
        f"quick={len(categories.quick)} ingredient_match={len(categories.ingredient_match)}"
    )
    return categories


def get_ingredient_substitutions(ingredients: list[str]) -> str:
    suggestions = [
        f"{ingredient} → {' or '.join(SUBSTITUTIONS[ingredient.lower()])}"
        for ingredient in ingredients
        if ingredient.lower() in SUBSTITUTIONS
    ]
    return ", ".join(suggestions) if suggestions else NO_SUBSTITUTIONS


def generate_no_recipes_recommendation(ingredients: list[str], cuisine: Optional[str] = None) -> str:
    suggestions = get_ingredient_substitutions(ingredients)
    if cuisine:
        lead = f"Try searching for {cuisine} recipes with these ingredients or try these alternatives"
    else:
        lead = "Try these alternatives"
    return (
        f"No recipes found with those exact ingredients. {lead}: {suggestions}. "
        "Also, consider adding common pantry items like onions, garlic, or olive oil to expand your options!"
    )


def get_nutritional_insight(ingredients: list[str]) -> str:
    ingredient_set = {i.lower() for i in ingredients}
    for matches, insight in NUTRITIONAL_INSIGHTS:
        if matches(ingredient_set):
            return insight
    return BALANCED_NUTRITION_INSIGHT


class Selection(NamedTuple):
    recipe: Recipe
    reason: str
    tip: str


class FallbackRecommender:
    """Builds recommendation text without calling the language model.

    Args:
        rng: Source of randomness for tip selection. Pass random.Random(seed)
            for reproducible output.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        # Strict selection priority; the first strategy that yields a recipe wins
        self.selection_priority: tuple[Callable[..., Optional[Selection]], ...] = (
            self._select_cuisine_specific,
            self._select_healthy,
            self._select_quick,
            self._select_ingredient_match,
        )

    def get_general_cooking_tip(self) -> str:
        return self.rng.choice(GENERAL_TIPS)

    def get_cuisine_specific_tip(self, cuisine: Optional[str]) -> str:
        tip = CUISINE_TIPS.get(Cuisine.parse(cuisine))
        return tip or self.get_general_cooking_tip()

    def get_ingredient_based_tip(self, ingredients: list[str]) -> str:
        for ingredient in ingredients:
            tip = INGREDIENT_TIPS.get(ingredient.lower())
            if tip:
                return tip
        return self.get_general_cooking_tip()

    def _select_cuisine_specific(self, categories, ingredients, cuisine) -> Optional[Selection]:
        if not categories.cuisine_specific:
            return None
        return Selection(
            categories.cuisine_specific[0],
            f"This {cuisine} dish perfectly matches your preference! ",
            self.get_cuisine_specific_tip(cuisine),
        )

    def _select_healthy(self, categories, ingredients, cuisine) -> Optional[Selection]:
        if not categories.healthy:
            return None
        return Selection(categories.healthy[0], "This looks like a nutritious choice! ", self.rng.choice(HEALTH_TIPS))

    def _select_quick(self, categories, ingredients, cuisine) -> Optional[Selection]:
        if not categories.quick:
            return None
        return Selection(categories.quick[0], "Perfect for a quick and delicious meal! ", self.rng.choice(QUICK_TIPS))

    def _select_ingredient_match(self, categories, ingredients, cuisine) -> Optional[Selection]:
        if not categories.ingredient_match:
            return None
        best = sorted(categories.ingredient_match, key=lambda scored: scored.match_score, reverse=True)[0]
        return Selection(
            best.recipe,
            "This recipe makes great use of your ingredients! ",
            self.get_ingredient_based_tip(ingredients),
        )

    def generate_recommendation(
        self,
        categories: RecipeCategories,
        ingredients: list[str],
        cuisine: Optional[str],
        all_recipes: list[Recipe],
    ) -> str:
        """Pick one recipe by priority and compose the recommendation sentence.

        Args:
            categories: Buckets from analyze_recipes.
            ingredients: User's ingredient list.
            cuisine: Optional cuisine preference.
            all_recipes: Full candidate list (non-empty); its first entry is the last resort.

        Returns:
            '{reason}I recommend "{title}" - it looks delicious and should work well with your ingredients. {tip}'
        """
        selection = None
        for strategy in self.selection_priority:
            selection = strategy(categories, ingredients, cuisine)
            if selection:
                break
        if selection is None:
            selection = Selection(all_recipes[0], "This looks like a delicious option! ", self.get_general_cooking_tip())

        recipe, reason, tip = selection

        minutes = recipe.ready_in_minutes
        if minutes is not None:
            if minutes <= QUICK_MAX_MINUTES:
                tip += " This quick recipe is perfect for busy days!"
            elif minutes > SLOW_MIN_MINUTES:
                tip += " Take your time with this recipe - good things come to those who wait!"

        tip += f" {get_nutritional_insight(ingredients)}"

        return (
            f'{reason}I recommend "{recipe.title}" - it looks delicious and should work well '
            f"with your ingredients. {tip}"
        )

    def generate_smart_recommendation(self, context: FallbackRecommendationContext) -> str:
        """Entry point: recommendation text for a search when the AI suggestion is unavailable."""
        if not context.recipes:
            return generate_no_recipes_recommendation(context.ingredients, context.cuisine)

        categories = analyze_recipes(context.recipes, context.ingredients, context.cuisine)
        return self.generate_recommendation(categories, context.ingredients, context.cuisine, context.recipes)
