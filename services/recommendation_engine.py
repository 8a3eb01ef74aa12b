"""Recommendation engine service.

Builds deterministic diet plans: the day planner splits a daily calorie
target across meal slots and fills each slot through filter -> rank ->
compose, and the plan aggregator repeats it for N days and attaches
guideline text. Also serves the time-of-day suggestions used by the
real-time endpoint.
"""

from collections import OrderedDict
from datetime import datetime
from typing import Callable, Dict, List, Optional

from core.logger import get_logger
from schemas.food_schema import FoodContext, FoodItem
from schemas.patient_schema import PatientProfile
from schemas.plan_schema import (
    DayMeals,
    DayPlan,
    DietPlan,
    MealSlot,
    Nutrition,
    PlanOptions,
    PlanSource,
)
from services.ayurvedic_balance import compute_balance
from services.food_filter import suitable_foods
from services.food_scoring import rank_foods
from services.meal_composer import compose_meal
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.recommendation_engine")

SNACK_SLOTS = ("morning_snack", "evening_snack")

MEAL_SLOTS = OrderedDict([
    ("breakfast", {
        "share": 0.25,
        "meal_type": "breakfast",
        "categories": ["breakfast", "beverages", "fruits", "grains"],
        "timing": "7:00-8:00 AM",
    }),
    ("morning_snack", {
        "share": 0.05,
        "meal_type": "snack",
        "categories": ["snacks", "fruits", "nuts_seeds", "beverages"],
        "timing": "10:30-11:00 AM",
    }),
    ("lunch", {
        "share": 0.40,
        "meal_type": "lunch",
        "categories": ["main_course", "vegetables", "grains", "pulses"],
        "timing": "12:30-1:30 PM",
    }),
    ("evening_snack", {
        "share": 0.05,
        "meal_type": "snack",
        "categories": ["snacks", "fruits", "nuts_seeds", "beverages"],
        "timing": "4:30-5:00 PM",
    }),
    ("dinner", {
        "share": 0.30,
        "meal_type": "dinner",
        "categories": ["main_course", "vegetables", "light", "pulses"],
        "timing": "7:00-8:00 PM",
    }),
])

MEAL_TYPE_CATEGORIES = {
    "breakfast": MEAL_SLOTS["breakfast"]["categories"],
    "lunch": MEAL_SLOTS["lunch"]["categories"],
    "dinner": MEAL_SLOTS["dinner"]["categories"],
    "snack": MEAL_SLOTS["morning_snack"]["categories"],
}

NUTRITIONAL_GUIDANCE = {
    "breakfast": "Start with a light, warm and easily digestible meal. Include whole grains and fruits.",
    "lunch": "Lunch is the main meal of the day when digestive fire is strongest. Include all six tastes.",
    "dinner": "Keep dinner light and early. Avoid heavy, oily foods and finish eating 2-3 hours before sleep.",
    "snack": "Choose light, nourishing snacks. Fresh fruit, nuts or herbal tea work well.",
}

AYURVEDIC_ADVICE = {
    "breakfast": {
        "vata": "Warm, moist and grounding foods such as cooked cereals with ghee.",
        "pitta": "Cool, sweet foods such as fresh fruits and milk.",
        "kapha": "Light, warm and spicy foods; keep portions small.",
    },
    "lunch": {
        "vata": "Warm, cooked foods with healthy fats and moderate spices.",
        "pitta": "Cooling foods with sweet, bitter and astringent tastes.",
        "kapha": "Light, warm foods with pungent and bitter tastes.",
    },
    "dinner": {
        "vata": "Warm, nourishing soups and stews.",
        "pitta": "Cool, light foods; avoid spicy dishes.",
        "kapha": "Very light meals; consider skipping dinner if not hungry.",
    },
    "snack": {
        "vata": "Warm herbal teas, soaked nuts or dates.",
        "pitta": "Sweet fruits, coconut water or rose tea.",
        "kapha": "Ginger tea, apple slices or a handful of roasted seeds.",
    },
}

DOSHA_TIPS = {
    "vata": [
        "Eat warm, cooked and slightly oily meals at regular times.",
        "Favor sweet, sour and salty tastes; reduce raw and dry foods.",
        "Sip warm water or ginger tea through the day.",
    ],
    "pitta": [
        "Favor cooling foods with sweet, bitter and astringent tastes.",
        "Limit chilli, fried food, alcohol and excess salt.",
        "Do not skip meals; eat lunch as the main meal.",
    ],
    "kapha": [
        "Favor light, warm and dry foods with pungent, bitter and astringent tastes.",
        "Reduce dairy, sweets and heavy fried foods.",
        "Keep dinner small and eat it early.",
    ],
}


def determine_meal_type(hour: int) -> str:
    """Map an hour of the day (0-23) to breakfast, lunch, dinner or snack."""
    if 6 <= hour <= 10:
        return "breakfast"
    if 12 <= hour <= 14:
        return "lunch"
    if 18 <= hour <= 21:
        return "dinner"
    return "snack"


def empty_slot_warning(slot: str) -> str:
    return f"No suitable items for {slot.replace('_', ' ')}"


def summarize_day(day_index: int, meals: DayMeals, primary_dosha: str,
                  warnings: Optional[List[str]] = None) -> DayPlan:
    """Aggregate calories, nutrition and balance over a day's slots.

    Shared by the deterministic planner and the generative adapter so both
    paths produce identical day structure.
    """
    items = meals.all_items()
    totals = nutrition_calculator.sum_items(items)
    return DayPlan(
        day_index=day_index,
        meals=meals,
        total_calories=totals["calories"],
        nutrition=Nutrition(
            protein=totals["protein"],
            carbs=totals["carbs"],
            fat=totals["fat"],
            fiber=totals["fiber"],
        ),
        ayurvedic_balance=compute_balance([item.food for item in items], primary_dosha),
        warnings=list(warnings or []),
    )


class RecommendationEngine:
    """Deterministic day planner and multi-day plan aggregator."""

    def __init__(self, max_items_per_meal: int = 4):
        self.max_items_per_meal = max_items_per_meal

    def active_slots(self, include_snacks: bool) -> List[str]:
        return [s for s in MEAL_SLOTS if include_snacks or s not in SNACK_SLOTS]

    def compose_day(self, patient: PatientProfile, daily_calories: float,
                    options: PlanOptions, candidates: List[FoodItem],
                    day_index: int = 1) -> DayPlan:
        """Build one day's plan from pre-filtered candidate foods.

        Every slot ranks the same candidates with its own category bias. An
        empty slot carries a warning instead of failing the day.
        """
        slots: Dict[str, MealSlot] = {}
        warnings = []
        active = self.active_slots(options.include_snacks)

        for name, cfg in MEAL_SLOTS.items():
            if name not in active:
                slots[name] = MealSlot(timing=cfg["timing"])
                continue
            target = daily_calories * cfg["share"]
            context = FoodContext(
                season=options.season,
                meal_type=cfg["meal_type"],
                preferred_categories=cfg["categories"],
            )
            ranked = rank_foods(candidates, patient, context)
            slot = compose_meal(ranked, target, self.max_items_per_meal)
            slot.timing = cfg["timing"]
            if not slot.items:
                slot.warning = empty_slot_warning(name)
                warnings.append(slot.warning)
                logger.warning("Day %s: empty %s for patient %s", day_index, name, patient.id)
            slots[name] = slot

        return summarize_day(day_index, DayMeals(**slots), patient.primary_dosha, warnings)

    def generate_plan(self, patient: PatientProfile, foods: List[FoodItem],
                      options: Optional[PlanOptions] = None,
                      clock: Callable[[], datetime] = datetime.utcnow) -> DietPlan:
        """Generate a multi-day plan without any external collaborator.

        Days are independent: the same inputs give the same day every time,
        so repeated days are expected on small catalogs.
        """
        options = options or PlanOptions()
        target = nutrition_calculator.daily_calorie_target(
            patient, options.target_calories, options.use_activity_level
        )
        logger.info("Generating %s-day plan for patient %s (target=%s kcal)",
                    options.duration_days, patient.id, target)

        candidates = suitable_foods(foods, patient, FoodContext(season=options.season))
        if not candidates:
            logger.warning("No suitable foods for patient %s; plan will be empty", patient.id)

        days = [
            self.compose_day(patient, target, options, candidates, day_index=i)
            for i in range(1, options.duration_days + 1)
        ]
        return self.build_plan(patient, target, options, days, PlanSource.fallback, clock)

    def build_plan(self, patient: PatientProfile, target: float, options: PlanOptions,
                   days: List[DayPlan], source: PlanSource,
                   clock: Callable[[], datetime] = datetime.utcnow,
                   guidelines: Optional[List[str]] = None,
                   tips: Optional[List[str]] = None) -> DietPlan:
        """Wrap composed days into a DietPlan with guideline text and warnings."""
        warnings = []
        for day in days:
            warnings.extend(f"Day {day.day_index}: {w}" for w in day.warnings)
        return DietPlan(
            patient_id=patient.id,
            target_calories=target,
            duration_days=options.duration_days,
            days=days,
            general_guidelines=guidelines or self.general_guidelines(patient),
            ayurvedic_tips=tips or self.ayurvedic_tips(patient),
            warnings=warnings,
            generated_at=clock(),
            source=source,
        )

    def general_guidelines(self, patient: PatientProfile) -> List[str]:
        """Static guideline lines, extended by age and conditions."""
        lines = [
            f"Follow a {patient.primary_dosha}-pacifying diet suited to your constitution.",
            "Eat at regular times and make lunch the largest meal of the day.",
            "Drink 8-10 glasses of water daily; prefer warm water.",
            "Include a variety of colorful vegetables and whole grains.",
        ]
        if patient.age > 60:
            lines.append("Prefer soft, easily digestible foods and ensure adequate calcium.")
        if "diabetes" in patient.conditions:
            lines.append("Monitor blood sugar; avoid refined sugar and favor high-fiber foods.")
        if "hypertension" in patient.conditions:
            lines.append("Limit salt intake and favor potassium-rich foods.")
        return lines

    def ayurvedic_tips(self, patient: PatientProfile) -> List[str]:
        return list(DOSHA_TIPS[patient.primary_dosha])

    def realtime_suggestions(self, patient: PatientProfile, foods: List[FoodItem],
                             hour: int, season: str = "all", limit: int = 5) -> Dict:
        """Top-ranked foods for the meal the hour falls in, with guidance text."""
        meal_type = determine_meal_type(hour)
        context = FoodContext(
            season=season,
            meal_type=meal_type,
            preferred_categories=MEAL_TYPE_CATEGORIES[meal_type],
        )
        ranked = rank_foods(suitable_foods(foods, patient, context), patient, context)
        return {
            "meal_type": meal_type,
            "hour": hour,
            "recommendations": ranked[:limit],
            "nutritional_guidance": NUTRITIONAL_GUIDANCE[meal_type],
            "ayurvedic_advice": AYURVEDIC_ADVICE[meal_type][patient.primary_dosha],
            "warning": None if ranked else empty_slot_warning(meal_type),
        }


# export singleton
recommendation_service = RecommendationEngine()
__all__ = ["RecommendationEngine", "recommendation_service", "summarize_day",
           "determine_meal_type", "MEAL_SLOTS"]
