"""Nutrition calculation helpers.

Provides BMI/BMR, the daily calorie target and nutrient aggregation used by
the planner, the diet chart service and meal-set analysis.
"""

from typing import Dict, Iterable, Optional
from core.logger import get_logger

logger = get_logger("services.nutrition_calculator")

DEFAULT_ACTIVITY_FACTOR = 1.5

ACTIVITY_FACTORS = {
    'sedentary': 1.2,
    'light': 1.375,
    'moderate': 1.55,
    'active': 1.725,
    'very_active': 1.9,
}

MACROS = ('protein', 'carbs', 'fat', 'fiber')


class NutritionCalculator:
    """Class-based nutrition calculator used across the engine."""

    def calculate_bmi(self, height_cm: float, weight_kg: float) -> float:
        """Calculate BMI from height in cm and weight in kg."""
        h_m = height_cm / 100.0
        if h_m <= 0:
            return 0.0
        return weight_kg / (h_m * h_m)

    def calculate_bmr(self, age: int, height_cm: float, weight_kg: float, gender: str) -> float:
        """Calculate BMR using Mifflin-St Jeor; non-male profiles use the female constant."""
        gender = getattr(gender, 'value', gender) or ''
        if gender.lower() == 'male':
            return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5
        return 10 * weight_kg + 6.25 * height_cm - 5 * age - 161

    def activity_factor(self, activity_level: Optional[str], use_activity_level: bool = False) -> float:
        """Return the multiplier applied to BMR.

        The flat 1.5 factor is used unless the caller opts into the
        activity-level table and the patient has a known level.
        """
        level = getattr(activity_level, 'value', activity_level)
        if use_activity_level and level in ACTIVITY_FACTORS:
            return ACTIVITY_FACTORS[level]
        return DEFAULT_ACTIVITY_FACTOR

    def daily_calorie_target(self, patient, target_calories: Optional[float] = None,
                             use_activity_level: bool = False) -> float:
        """Resolve the daily calorie target for a patient.

        Precedence: explicit `target_calories`, then the patient's
        `calorie_override`, then round(bmr x activity factor).
        """
        if target_calories:
            return float(target_calories)
        if patient.calorie_override:
            return float(patient.calorie_override)
        factor = self.activity_factor(patient.activity_level, use_activity_level)
        val = float(round(patient.bmr * factor))
        logger.debug("Calorie target for patient %s: bmr=%s factor=%s -> %s",
                     patient.id, patient.bmr, factor, val)
        return val

    def sum_items(self, items: Iterable) -> Dict[str, float]:
        """Sum quantity-weighted calories and macros over plan meal items."""
        totals = {'calories': 0.0, 'protein': 0.0, 'carbs': 0.0, 'fat': 0.0, 'fiber': 0.0}
        for item in items:
            food = item.food
            totals['calories'] += food.calories * item.quantity
            for key in MACROS:
                totals[key] += getattr(food, key) * item.quantity
        return {k: round(v, 2) for k, v in totals.items()}

    def sum_chart_foods(self, foods: Iterable) -> Dict[str, float]:
        """Sum quantity-weighted nutrition over chart foods (per-serving values)."""
        totals = {'calories': 0.0, 'protein': 0.0, 'carbs': 0.0, 'fat': 0.0, 'fiber': 0.0}
        for food in foods:
            quantity = food.quantity or 1
            for key in totals:
                totals[key] += (getattr(food, key, 0) or 0) * quantity
        return {k: round(v, 2) for k, v in totals.items()}


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = ["NutritionCalculator", "nutrition_calculator", "ACTIVITY_FACTORS", "DEFAULT_ACTIVITY_FACTOR"]
