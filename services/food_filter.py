"""Food suitability filter.

Pure functions that drop contraindicated catalog items for a patient:
allergens, dietary habit, diabetes (sugar), hypertension (sodium) and
season. An empty result is a valid outcome, not an error.
"""

from typing import Iterable, List

from core.logger import get_logger
from schemas.food_schema import FoodContext, FoodItem, RecipeItem
from schemas.patient_schema import PatientProfile

logger = get_logger("services.food_filter")

SUGAR_LIMIT_G = 10.0
SODIUM_LIMIT_MG = 500.0

NON_VEG_CATEGORIES = {"meat", "fish", "eggs"}

EXCLUDED_CATEGORIES = {
    "vegetarian": NON_VEG_CATEGORIES,
    "jain": NON_VEG_CATEGORIES,
    "vegan": NON_VEG_CATEGORIES | {"dairy"},
    "eggetarian": {"meat", "fish"},
    "non_vegetarian": set(),
}


def _value(v) -> str:
    return getattr(v, "value", v)


def season_matches(seasons: Iterable[str], season: str) -> bool:
    """True when `season` is unset/'all' or listed (directly or via 'all')."""
    if not season or season == "all":
        return True
    seasons = list(seasons or [])
    return season in seasons or "all" in seasons


def has_allergen(allergens: Iterable[str], allergies: Iterable[str]) -> bool:
    return bool(set(allergens or []) & set(allergies or []))


def is_food_suitable(food: FoodItem, patient: PatientProfile, context: FoodContext) -> bool:
    """Apply the suitability rules in order; all must pass."""
    if has_allergen(food.allergens, patient.allergies):
        return False

    excluded = EXCLUDED_CATEGORIES.get(_value(patient.dietary_habits), set())
    if _value(food.category) in excluded:
        return False

    if "diabetes" in patient.conditions and food.sugar > SUGAR_LIMIT_G:
        return False
    if "hypertension" in patient.conditions and food.sodium > SODIUM_LIMIT_MG:
        return False

    if not season_matches(food.season, context.season):
        return False

    return True


def suitable_foods(catalog: Iterable[FoodItem], patient: PatientProfile,
                   context: FoodContext = None) -> List[FoodItem]:
    """Return catalog foods that are not contraindicated, in catalog order.

    Foods whose id is in `context.exclude_ids` are dropped as well.
    """
    context = context or FoodContext()
    excluded_ids = set(context.exclude_ids)
    catalog = list(catalog)
    out = [
        food for food in catalog
        if food.id not in excluded_ids and is_food_suitable(food, patient, context)
    ]
    logger.debug("Suitable foods for patient %s: %s -> %s", patient.id, len(catalog), len(out))
    return out


def suitable_recipes(recipes: Iterable[RecipeItem], patient: PatientProfile,
                     season: str = "all") -> List[RecipeItem]:
    """Return recipes free of the patient's allergens that suit their primary dosha."""
    primary = patient.primary_dosha
    out = []
    for recipe in recipes:
        if has_allergen(recipe.allergens, patient.allergies):
            continue
        if any(has_allergen(ing.allergens, patient.allergies) for ing in recipe.ingredients):
            continue
        if not getattr(recipe.dosha_suitability, primary, True):
            continue
        if not season_matches(recipe.season, season):
            continue
        out.append(recipe)
    return out
