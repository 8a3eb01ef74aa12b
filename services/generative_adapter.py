"""Generative-plan adapter.

Asks an external text generator for a diet plan and reconciles whatever
JSON comes back into the canonical `DietPlan` shape. Reconciliation never
trusts the response: food names are resolved against the patient's
suitable foods only, calories are recomputed from the catalog and every
slot is trimmed back under its calorie bound. Any failure of the generator
or of the response falls back to the deterministic planner, once, with no
retry.
"""

import json
import math
import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from core import config
from core.exceptions import GenerationError, MalformedOutputError
from core.logger import get_logger
from schemas.food_schema import FoodContext, FoodItem, RecipeItem
from schemas.patient_schema import PatientProfile
from schemas.plan_schema import DayMeals, DietPlan, MealItem, MealSlot, PlanOptions, PlanSource
from services.food_filter import suitable_foods, suitable_recipes
from services.food_scoring import rank_foods
from services.meal_composer import OVERSHOOT_TOLERANCE
from services.nutrition_calculator import nutrition_calculator
from services.recommendation_engine import (
    MEAL_SLOTS,
    RecommendationEngine,
    empty_slot_warning,
    recommendation_service,
    summarize_day,
)
from services.text_generator import TextGenerator

logger = get_logger("services.generative_adapter")

MIN_QUANTITY = 0.5
MAX_QUANTITY = 1.5

SLOT_ALIASES = {
    "breakfast": "breakfast",
    "lunch": "lunch",
    "dinner": "dinner",
    "morning_snack": "morning_snack",
    "morningsnack": "morning_snack",
    "mid_morning_snack": "morning_snack",
    "snack": "morning_snack",
    "snacks": "morning_snack",
    "evening_snack": "evening_snack",
    "eveningsnack": "evening_snack",
    "afternoon_snack": "evening_snack",
}

_NAME_KEYS = ("name", "food_name", "item", "food")
_QUANTITY_KEYS = ("quantity", "servings", "portion")
_DAY_KEYS = ("day_index", "dayIndex", "day", "date")
_DAY_PATTERN = re.compile(r"^day[\s_-]*(\d+)$", re.IGNORECASE)
_NUMBER = re.compile(r"\d+(?:\.\d+)?")

PROMPT_TEMPLATE = """You are an experienced Ayurvedic dietitian. Create a {days}-day diet plan.

### Patient
- Age: {age}
- Gender: {gender}
- Height: {height} cm, Weight: {weight} kg (BMI {bmi}, BMR {bmr} kcal)
- Dosha: {dosha} (primary: {primary})
- Dietary habits: {habits}
- Activity level: {activity}
- Conditions: {conditions}
- Allergies: {allergies}

### Targets
- Daily calories: {target} kcal
- Meals: {meals}

### Allowed foods (per 100 g serving)
{foods}

### Suggested recipes
{recipes}

### Rules
Use ONLY the allowed foods or suggested recipes, by exact name.
Quantities are servings between 0.5 and 1.5.
Return STRICT JSON ONLY, no prose, in this shape:
{{
  "days": [
    {{
      "day": 1,
      "meals": {{
        "breakfast": {{"timing": "7:00-8:00 AM", "items": [{{"name": "...", "quantity": 1}}]}}
      }}
    }}
  ],
  "general_guidelines": ["..."],
  "ayurvedic_tips": ["..."]
}}
"""


def _text(value) -> str:
    return str(getattr(value, "value", value) or "")


def extract_json(raw: str) -> Dict[str, Any]:
    """Pull the first JSON object out of generated text.

    Raises:
        MalformedOutputError: when no object can be parsed.
    """
    if not raw:
        raise MalformedOutputError("Empty response", raw=raw)
    text = raw.replace("```json", "").replace("```JSON", "").replace("```", "")
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        raise MalformedOutputError("No JSON object in response", raw=raw)
    try:
        data = json.loads(text[start:end + 1])
    except (ValueError, RecursionError) as exc:
        raise MalformedOutputError(f"Invalid JSON in response: {exc}", raw=raw) from exc
    if not isinstance(data, dict):
        raise MalformedOutputError("Response JSON is not an object", raw=raw)
    return data


def parse_quantity(value) -> float:
    """Leading number of a quantity, clamped to [0.5, 1.5]; 1.0 when absent."""
    if isinstance(value, bool) or value is None:
        return 1.0
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            match = _NUMBER.search(str(value))
            if not match:
                return 1.0
            number = float(match.group())
    except OverflowError:
        return MAX_QUANTITY
    if math.isnan(number) or number <= 0:
        return 1.0
    return max(MIN_QUANTITY, min(MAX_QUANTITY, number))


def normalize_slot_name(key: str) -> Optional[str]:
    slot = re.sub(r"[\s-]+", "_", str(key).strip()).lower()
    return SLOT_ALIASES.get(slot)


def _day_number(value, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    match = _NUMBER.search(str(value or ""))
    return int(float(match.group())) if match else default


def day_entries(data: Dict[str, Any]) -> Dict[int, Dict[str, Any]]:
    """Index the response's days by day number.

    Accepts ``{"days": [...]}``, ``{"days": {"Day 1": ...}}`` and top-level
    ``{"Day 1": ...}`` keys.
    """
    days = data.get("days")
    out: Dict[int, Dict[str, Any]] = {}
    if isinstance(days, list):
        for pos, day in enumerate(days, 1):
            if not isinstance(day, dict):
                continue
            raw_index = next((day[k] for k in _DAY_KEYS if k in day), None)
            out.setdefault(_day_number(raw_index, pos), day)
    elif isinstance(days, dict):
        for pos, (key, day) in enumerate(days.items(), 1):
            if isinstance(day, dict):
                out.setdefault(_day_number(key, pos), day)
    else:
        for key, day in data.items():
            match = _DAY_PATTERN.match(str(key).strip())
            if match and isinstance(day, dict):
                out.setdefault(int(match.group(1)), day)
    return out


def slot_entries(value) -> Tuple[List[Any], Optional[str]]:
    """Return the raw item entries and timing of one slot in any accepted form."""
    if value is None:
        return [], None
    if isinstance(value, (str, list)):
        return (value if isinstance(value, list) else [value]), None
    if not isinstance(value, dict):
        return [], None
    timing = value.get("timing") or value.get("time")
    if isinstance(value.get("items"), list):
        return value["items"], timing
    if isinstance(value.get("foods"), list):
        return value["foods"], timing
    if "recipe" in value:
        ingredients = value.get("ingredients")
        if isinstance(ingredients, list) and ingredients:
            return ingredients, timing
        return [value["recipe"]], timing
    if any(k in value for k in _NAME_KEYS):
        return [value], timing
    return [], timing


def _entry_name_and_quantity(entry) -> Tuple[Optional[str], float]:
    if isinstance(entry, str):
        return entry, 1.0
    if isinstance(entry, dict):
        name = next((entry[k] for k in _NAME_KEYS if entry.get(k)), None)
        quantity = next((entry[k] for k in _QUANTITY_KEYS if k in entry), None)
        return (str(name) if name else None), parse_quantity(quantity)
    return None, 1.0


class GenerativePlanAdapter:
    """Generative plan path with deterministic fallback."""

    def __init__(self, generator: Optional[TextGenerator] = None,
                 engine: RecommendationEngine = recommendation_service,
                 max_foods: int = config.PROMPT_MAX_FOODS,
                 max_recipes_per_meal: int = config.PROMPT_MAX_RECIPES_PER_MEAL):
        self.generator = generator
        self.engine = engine
        self.max_foods = max_foods
        self.max_recipes_per_meal = max_recipes_per_meal

    def generate(self, patient: PatientProfile, foods: List[FoodItem],
                 recipes: Optional[List[RecipeItem]] = None,
                 options: Optional[PlanOptions] = None,
                 clock: Callable[[], datetime] = datetime.utcnow) -> DietPlan:
        """Generate a plan, preferring the text generator when one is available.

        Never raises for generator or response failures; those yield a
        deterministic plan tagged ``source="fallback"``.
        """
        options = options or PlanOptions()
        if self.generator is None or not options.use_generative:
            return self.engine.generate_plan(patient, foods, options, clock)

        candidates = suitable_foods(foods, patient, FoodContext(season=options.season))
        if not candidates:
            logger.info("No suitable foods for patient %s; skipping text generation", patient.id)
            return self.engine.generate_plan(patient, foods, options, clock)

        try:
            plan = self.generate_via_text(patient, candidates, recipes or [], options, clock)
        except (GenerationError, MalformedOutputError) as exc:
            logger.warning("Generative plan failed for patient %s, using fallback: %s",
                           patient.id, exc.message)
            if isinstance(exc, MalformedOutputError) and exc.raw:
                logger.debug("Raw generator output: %s", exc.raw[:2000])
            return self.engine.generate_plan(patient, foods, options, clock)

        logger.info("Generative plan ready for patient %s (%s days)", patient.id, len(plan.days))
        return plan

    def generate_via_text(self, patient: PatientProfile, candidates: List[FoodItem],
                          recipes: List[RecipeItem], options: PlanOptions,
                          clock: Callable[[], datetime] = datetime.utcnow) -> DietPlan:
        """Single attempt against the generator; raises on any failure."""
        target = nutrition_calculator.daily_calorie_target(
            patient, options.target_calories, options.use_activity_level
        )
        context = FoodContext(season=options.season)
        prompt_foods = rank_foods(candidates, patient, context)[:self.max_foods]
        usable_recipes = suitable_recipes(recipes, patient, options.season)
        prompt = self.build_prompt(patient, target, options, prompt_foods, usable_recipes)

        try:
            raw = self.generator.generate(prompt)
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(f"Text generation failed: {exc}", cause=exc) from exc

        try:
            data = extract_json(raw)
            return self.map_response(data, patient, target, options, candidates, usable_recipes, clock)
        except MalformedOutputError:
            raise
        except Exception as exc:
            raise MalformedOutputError(f"Unusable response: {exc!r}", raw=str(raw)) from exc

    def build_prompt(self, patient: PatientProfile, target: float, options: PlanOptions,
                     foods: List[FoodItem], recipes: List[RecipeItem]) -> str:
        """Render the bounded prompt: at most `max_foods` foods and
        `max_recipes_per_meal` recipes per meal type."""
        food_lines = "\n".join(
            f"- {f.name} [{_text(f.category)}]: {f.calories:g} kcal, {f.protein:g} g protein; "
            f"rasa {_text(f.rasa)}, vata {_text(f.dosha_impact.vata)}, "
            f"pitta {_text(f.dosha_impact.pitta)}, kapha {_text(f.dosha_impact.kapha)}"
            for f in foods[:self.max_foods]
        ) or "- none"

        per_type: Dict[str, List[RecipeItem]] = {}
        for recipe in recipes:
            bucket = per_type.setdefault(_text(recipe.meal_type), [])
            if len(bucket) < self.max_recipes_per_meal:
                bucket.append(recipe)
        recipe_lines = "\n".join(
            f"- {meal_type}: " + "; ".join(
                f"{r.name} ({', '.join(i.name for i in r.ingredients) or 'no listed ingredients'})"
                for r in items
            )
            for meal_type, items in per_type.items()
        ) or "- none"

        meals = self.engine.active_slots(options.include_snacks)
        return PROMPT_TEMPLATE.format(
            days=options.duration_days,
            age=patient.age,
            gender=_text(patient.gender),
            height=patient.height_cm,
            weight=patient.weight_kg,
            bmi=patient.bmi,
            bmr=patient.bmr,
            dosha=_text(patient.dosha),
            primary=patient.primary_dosha,
            habits=_text(patient.dietary_habits),
            activity=_text(patient.activity_level) or "unspecified",
            conditions=", ".join(patient.conditions) or "none",
            allergies=", ".join(patient.allergies) or "none",
            target=int(round(target)),
            meals=", ".join(meals),
            foods=food_lines,
            recipes=recipe_lines,
        )

    def map_response(self, data: Dict[str, Any], patient: PatientProfile, target: float,
                     options: PlanOptions, candidates: List[FoodItem],
                     recipes: List[RecipeItem],
                     clock: Callable[[], datetime] = datetime.utcnow) -> DietPlan:
        """Reconcile a parsed response into a `DietPlan` tagged generative.

        Raises:
            MalformedOutputError: fewer days than requested or nothing resolvable.
        """
        foods_by_name = {}
        for food in candidates:
            foods_by_name.setdefault(food.name.strip().lower(), food)
        recipes_by_name = {r.name.strip().lower(): r for r in recipes}

        entries = day_entries(data)
        missing = [i for i in range(1, options.duration_days + 1) if i not in entries]
        if missing:
            raise MalformedOutputError(
                f"Response has {len(entries)} usable days, expected {options.duration_days}"
            )

        active = self.engine.active_slots(options.include_snacks)
        days = []
        resolved_total = 0
        for index in range(1, options.duration_days + 1):
            day = entries[index]
            meals_raw = day.get("meals") if isinstance(day.get("meals"), dict) else day
            slots: Dict[str, MealSlot] = {}
            for key, value in meals_raw.items():
                name = normalize_slot_name(key)
                if name is None or name in slots:
                    continue
                if name not in active:
                    logger.debug("Dropping %s from day %s; slot not requested", name, index)
                    continue
                slots[name] = self._build_slot(name, value, target, foods_by_name, recipes_by_name)

            warnings = []
            for name, cfg in MEAL_SLOTS.items():
                slot = slots.get(name)
                if slot is None:
                    slot = slots[name] = MealSlot(
                        target_calories=round(target * cfg["share"], 2) if name in active else 0.0,
                    )
                if not slot.timing:
                    slot.timing = cfg["timing"]
                if name in active and not slot.items:
                    slot.warning = empty_slot_warning(name)
                    warnings.append(slot.warning)
                resolved_total += len(slot.items)
            days.append(summarize_day(index, DayMeals(**slots), patient.primary_dosha, warnings))

        if resolved_total == 0:
            raise MalformedOutputError("No response items matched suitable catalog foods")

        return self.engine.build_plan(
            patient, target, options, days, PlanSource.generative, clock,
            guidelines=self._string_list(data, "general_guidelines", "generalGuidelines"),
            tips=self._string_list(data, "ayurvedic_tips", "ayurvedicTips"),
        )

    def _build_slot(self, name: str, value, daily_target: float,
                    foods_by_name: Dict[str, FoodItem],
                    recipes_by_name: Dict[str, RecipeItem]) -> MealSlot:
        target = daily_target * MEAL_SLOTS[name]["share"]
        raw_items, timing = slot_entries(value)
        items: List[MealItem] = []
        for entry in raw_items:
            item_name, quantity = _entry_name_and_quantity(entry)
            resolved = self._resolve(item_name, foods_by_name, recipes_by_name)
            if not resolved:
                logger.info("Dropping unresolved item %r from %s", item_name, name)
                continue
            items.extend(MealItem(food=food, quantity=quantity) for food in resolved)

        limit = target * OVERSHOOT_TOLERANCE
        while items and sum(i.calories for i in items) > limit:
            dropped = items.pop()
            logger.debug("Trimmed %s from %s to respect calorie bound", dropped.food.name, name)

        return MealSlot(
            items=items,
            total_calories=round(sum(i.calories for i in items), 2),
            target_calories=round(target, 2),
            timing=str(timing) if timing else "",
        )

    @staticmethod
    def _resolve(name: Optional[str], foods_by_name: Dict[str, FoodItem],
                 recipes_by_name: Dict[str, RecipeItem]) -> List[FoodItem]:
        if not name:
            return []
        key = name.strip().lower()
        if key in foods_by_name:
            return [foods_by_name[key]]
        recipe = recipes_by_name.get(key)
        if recipe is None:
            return []
        return [
            foods_by_name[i.name.strip().lower()]
            for i in recipe.ingredients
            if i.name.strip().lower() in foods_by_name
        ]

    @staticmethod
    def _string_list(data: Dict[str, Any], *keys) -> Optional[List[str]]:
        for key in keys:
            value = data.get(key)
            if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
                return value
        return None
