"""Food scoring and ranking.

score = 0.3*protein - 0.1*sugar + 0.2*fiber + dosha bonus + season bonus
(+ category bonus when the context names preferred categories). Ranking is
a stable descending sort, so ties keep catalog order and identical inputs
always rank identically.
"""

from typing import Iterable, List

from schemas.food_schema import FoodContext, FoodItem
from schemas.patient_schema import PatientProfile

DOSHA_BONUS = 10.0
SEASON_BONUS = 5.0
CATEGORY_BONUS = 5.0


def score_food(food: FoodItem, patient: PatientProfile, context: FoodContext = None) -> float:
    """Return the suitability score of one food for a patient and context."""
    context = context or FoodContext()
    score = 0.3 * food.protein - 0.1 * food.sugar + 0.2 * food.fiber

    impact = getattr(food.dosha_impact, patient.primary_dosha)
    if getattr(impact, "value", impact) == "decreases":
        score += DOSHA_BONUS

    # exact season match only, not via "all"
    if context.season and context.season != "all" and context.season in food.season:
        score += SEASON_BONUS

    category = getattr(food.category, "value", food.category)
    if context.preferred_categories and category in context.preferred_categories:
        score += CATEGORY_BONUS

    return score


def rank_foods(foods: Iterable[FoodItem], patient: PatientProfile,
               context: FoodContext = None) -> List[FoodItem]:
    """Sort foods by descending score; `sorted` is stable so ties keep input order."""
    context = context or FoodContext()
    return sorted(foods, key=lambda food: score_food(food, patient, context), reverse=True)
