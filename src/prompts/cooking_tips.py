"""Contextual cooking tips based on recipe type, cuisine and ingredients.

The recipe type is decided by an ordered rule table (first match wins), so
the tie-break order can be read directly from RECIPE_TYPE_RULES.
"""

from typing import Callable, Optional

from src.models.models import Cuisine

PROTEINS = frozenset({"chicken", "beef", "pork", "lamb", "fish", "salmon", "cod"})
TYPE_VEGETABLES = frozenset({"tomato", "onion", "pepper", "zucchini", "eggplant", "spinach", "broccoli"})
HERBS = frozenset({"basil", "cilantro", "parsley", "mint"})
SPICES = frozenset({"cumin", "coriander", "turmeric", "paprika"})

# Title sub-rules for protein-based dishes, checked in order; fallback "protein-dish"
PROTEIN_TITLE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("grill", "bbq"), "grilled"),
    (("stir", "wok"), "stir-fry"),
    (("curry", "stew"), "curry"),
    (("roast", "baked"), "roasted"),
    (("soup",), "soup"),
)

# Title sub-rules for vegetable dishes; fallback "vegetable-dish"
VEGETABLE_TITLE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("salad",), "salad"),
    (("soup",), "soup"),
    (("stir", "sauté"), "sauted"),
)


def _title_has(title: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in title for keyword in keywords)


def _first_title_match(title: str, rules, default: str) -> str:
    for keywords, recipe_type in rules:
        if _title_has(title, keywords):
            return recipe_type
    return default


def _protein_dish(title: str, ingredients: list[str]) -> Optional[str]:
    if any(i in PROTEINS for i in ingredients):
        return _first_title_match(title, PROTEIN_TITLE_RULES, "protein-dish")
    return None


def _pasta_dish(title: str, ingredients: list[str]) -> Optional[str]:
    if _title_has(title, ("pasta", "spaghetti", "lasagna")) or any(i in ("pasta", "spaghetti") for i in ingredients):
        return "pasta"
    return None


def _rice_dish(title: str, ingredients: list[str]) -> Optional[str]:
    if _title_has(title, ("rice", "risotto", "pilaf")) or "rice" in ingredients:
        return "rice-dish"
    return None


def _vegetable_dish(title: str, ingredients: list[str]) -> Optional[str]:
    if len([i for i in ingredients if i in TYPE_VEGETABLES]) >= 2:
        return _first_title_match(title, VEGETABLE_TITLE_RULES, "vegetable-dish")
    return None


def _baked_goods(title: str, ingredients: list[str]) -> Optional[str]:
    if _title_has(title, ("bread", "cake", "pie", "baked")):
        return "baked"
    return None


# Priority order of recipe type classification
RECIPE_TYPE_RULES: tuple[Callable[[str, list[str]], Optional[str]], ...] = (
    _protein_dish,
    _pasta_dish,
    _rice_dish,
    _vegetable_dish,
    _baked_goods,
)

RECIPE_TYPE_TIPS: dict[str, str] = {
    "grilled": "For perfect grilling, preheat your grill to medium-high and oil the grates to prevent sticking.",
    "stir-fry": "Keep ingredients moving in the wok and cook on high heat for the best texture and flavor.",
    "curry": "Build layers of flavor by toasting spices first, then aromatics, before adding liquids.",
    "roasted": "Use high heat (400-425°F) for caramelization and do not overcrowd the pan.",
    "soup": "Start with a good flavor base and simmer slowly to develop deep flavors.",
    "pasta": "Cook pasta in well-salted water and save some pasta water to adjust sauce consistency.",
    "rice-dish": "Rinse rice until water runs clear and let it rest covered for 10 minutes after cooking.",
    "salad": "Dress salad just before serving and use a balance of acidic and sweet elements.",
    "sauted": "Use medium-high heat and do not overcrowd the pan for proper browning.",
    "vegetable-dish": "Cook vegetables quickly to preserve nutrients and vibrant colors.",
    "baked": "Measure ingredients precisely and follow temperature instructions for best results.",
    "protein-dish": "Let protein rest after cooking to redistribute juices for maximum flavor.",
    "general": "Taste as you go and adjust seasoning gradually for the best results.",
}

# Cuisine -> recipe type -> tip. "general" is the per-cuisine fallback;
# cuisines without an entry (american, unknown) add nothing.
CUISINE_TYPE_TIPS: dict[Cuisine, dict[str, str]] = {
    Cuisine.ITALIAN: {
        "pasta": "Use high-quality olive oil and finish with fresh herbs for authentic flavor.",
        "general": "Let ingredients shine with simple preparations and high-quality olive oil.",
    },
    Cuisine.INDIAN: {
        "curry": "Toast whole spices before grinding for maximum flavor, and use ghee for richness.",
        "rice-dish": "Soak basmati rice for 30 minutes before cooking for fluffy, separate grains.",
        "general": "Build flavor layers with spices, and finish with garam masala for aromatic complexity.",
    },
    Cuisine.CHINESE: {
        "stir-fry": "Heat your wok until smoking before adding oil for the perfect sear.",
        "rice-dish": "Use day-old rice for fried rice to prevent sogginess.",
        "general": "Balance flavors and textures, and use high heat for quick cooking.",
    },
    Cuisine.MEXICAN: {
        "general": "Fresh lime juice and cilantro at the end brighten all flavors.",
        "vegetable-dish": "Roast vegetables with chiles and lime for authentic Mexican flavor.",
    },
    Cuisine.MEDITERRANEAN: {
        "general": "Extra virgin olive oil and fresh herbs are essential for authentic flavor.",
        "vegetable-dish": "Grill vegetables with olive oil and herbs for Mediterranean perfection.",
    },
    Cuisine.THAI: {
        "curry": "Balance sweet, sour, salty, and spicy flavors with fish sauce and lime.",
        "general": "Fresh herbs and aromatics are key - add them at the end for maximum flavor.",
    },
    Cuisine.PAKISTANI: {
        "curry": "Slow-cook with ghee and whole spices for deep, authentic flavors.",
        "rice-dish": "Layer rice and curry for dum cooking to infuse flavors throughout.",
        "general": "Garam masala at the end adds aromatic finish to any dish.",
    },
}

# Ingredient-triggered technique tips, highest priority first
TECHNIQUE_TIPS: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({"chicken"}), "Brine chicken for extra moisture and flavor before cooking."),
    (frozenset({"beef"}), "Season beef generously and let it come to room temperature before cooking."),
    (frozenset({"fish"}), "Cook fish quickly over high heat and avoid overcooking for the best texture."),
    (frozenset({"tomatoes"}), "Use ripe tomatoes and remove seeds for less watery results in cooked dishes."),
    (frozenset({"garlic"}), "Sauté garlic slowly over medium heat to prevent burning and develop sweetness."),
    (frozenset({"onion"}), "Caramelize onions slowly for deep, sweet flavor that enhances any dish."),
    (HERBS, "Add fresh herbs at the end of cooking to preserve their bright flavors."),
    (SPICES, "Toast spices briefly in oil before adding other ingredients to release their aromas."),
)

# Preparation stages in cooking order
PREPARATION_STAGES: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({"garlic", "onion", "shallots", "ginger"}), "aromatics (garlic, onions, etc.)"),
    (frozenset({"carrots", "potatoes", "sweet potatoes", "winter squash"}), "hard vegetables"),
    (frozenset({"chicken", "beef", "pork", "fish", "tofu", "tempeh"}), "protein"),
    (frozenset({"zucchini", "bell peppers", "mushrooms", "spinach", "tomatoes"}), "soft vegetables"),
    (frozenset({"basil", "cilantro", "parsley", "mint", "dill"}), "fresh herbs (at the end)"),
)


def determine_recipe_type(title: str, ingredients: list[str]) -> str:
    """Classify a recipe into one of the RECIPE_TYPE_TIPS tags. First matching rule wins."""
    title_lower = title.lower()
    ingredients_lower = [i.lower() for i in ingredients]

    for rule in RECIPE_TYPE_RULES:
        recipe_type = rule(title_lower, ingredients_lower)
        if recipe_type:
            return recipe_type
    return "general"


def get_cuisine_specific_cooking_tip(cuisine: str, recipe_type: str) -> str:
    tips = CUISINE_TYPE_TIPS.get(Cuisine.parse(cuisine), {})
    return tips.get(recipe_type) or tips.get("general", "")


def get_technique_specific_tip(ingredients: list[str]) -> str:
    ingredients_lower = {i.lower() for i in ingredients}
    for triggers, tip in TECHNIQUE_TIPS:
        if ingredients_lower & triggers:
            return tip
    return ""


def get_contextual_cooking_tip(recipe_title: str, ingredients: list[str], cuisine: Optional[str] = None) -> str:
    """Build a cooking tip for a recipe from its type, the cuisine and the ingredients.

    Args:
        recipe_title: Title of the recipe the tip is for.
        ingredients: User's ingredient list.
        cuisine: Optional cuisine preference.

    Returns:
        Base tip for the recipe type, followed by an optional cuisine-specific
        tip and an optional ingredient technique tip. Deterministic.
    """
    recipe_type = determine_recipe_type(recipe_title, ingredients)
    tip = RECIPE_TYPE_TIPS.get(recipe_type, RECIPE_TYPE_TIPS["general"])

    if cuisine:
        cuisine_tip = get_cuisine_specific_cooking_tip(cuisine, recipe_type)
        if cuisine_tip:
            tip += f" {cuisine_tip}"

    technique_tip = get_technique_specific_tip(ingredients)
    if technique_tip:
        tip += f" {technique_tip}"

    return tip


def get_optimal_preparation_order(ingredients: list[str]) -> list[str]:
    ingredients_lower = {i.lower() for i in ingredients}
    order = [stage for members, stage in PREPARATION_STAGES if ingredients_lower & members]
    return order or ["ingredients as needed"]


def get_preparation_order_tip(ingredients: list[str]) -> str:
    """Suggest the order in which to prepare the given ingredients."""
    order = get_optimal_preparation_order(ingredients)
    return f"For best results, prepare ingredients in this order: {' → '.join(order)}."
