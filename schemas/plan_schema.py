"""Schemas for generated diet plans.

Every slot, day and plan field has a default here, so the deterministic and
generative paths produce the same structure: a `DayPlan` always carries all
five meal slots, and an `AyurvedicBalance` always carries every rasa and
dosha key, zero-filled.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from core import config
from schemas.food_schema import FoodItem, Season


class PlanSource(str, Enum):
    generative = "generative"
    fallback = "fallback"


RASAS = ("sweet", "sour", "salty", "pungent", "bitter", "astringent")
DOSHAS = ("vata", "pitta", "kapha")
SLOT_NAMES = ("breakfast", "morning_snack", "lunch", "evening_snack", "dinner")


def _zero_rasa() -> Dict[str, int]:
    return {rasa: 0 for rasa in RASAS}


def _zero_dosha_impact() -> Dict[str, Dict[str, int]]:
    return {dosha: {"increases": 0, "decreases": 0, "neutral": 0} for dosha in DOSHAS}


class MealItem(BaseModel):
    """A catalog food with a quantity in servings (1 serving = 100 g)."""

    food: FoodItem
    quantity: float = Field(1.0, gt=0)

    @property
    def calories(self) -> float:
        return self.food.calories * self.quantity


class MealSlot(BaseModel):
    items: List[MealItem] = Field(default_factory=list)
    total_calories: float = 0.0
    target_calories: float = 0.0
    timing: str = ""
    warning: Optional[str] = None


class Nutrition(BaseModel):
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0


class AyurvedicBalance(BaseModel):
    """Rasa and dosha tallies for a set of foods, scored against one dosha."""

    primary_dosha: str = "vata"
    total_items: int = 0
    rasa_distribution: Dict[str, int] = Field(default_factory=_zero_rasa)
    dosha_impact: Dict[str, Dict[str, int]] = Field(default_factory=_zero_dosha_impact)
    balance_score: int = Field(0, ge=0, le=100)


class DayMeals(BaseModel):
    breakfast: MealSlot = Field(default_factory=MealSlot)
    morning_snack: MealSlot = Field(default_factory=MealSlot)
    lunch: MealSlot = Field(default_factory=MealSlot)
    evening_snack: MealSlot = Field(default_factory=MealSlot)
    dinner: MealSlot = Field(default_factory=MealSlot)

    def slots(self):
        """Yield (slot_name, MealSlot) in serving order."""
        for name in SLOT_NAMES:
            yield name, getattr(self, name)

    def all_items(self) -> List[MealItem]:
        return [item for _, slot in self.slots() for item in slot.items]


class DayPlan(BaseModel):
    day_index: int = Field(..., ge=1)
    meals: DayMeals = Field(default_factory=DayMeals)
    total_calories: float = 0.0
    nutrition: Nutrition = Field(default_factory=Nutrition)
    ayurvedic_balance: AyurvedicBalance = Field(default_factory=AyurvedicBalance)
    warnings: List[str] = Field(default_factory=list)


class DietPlan(BaseModel):
    patient_id: Optional[str] = None
    target_calories: float
    duration_days: int
    days: List[DayPlan] = Field(default_factory=list)
    general_guidelines: List[str] = Field(default_factory=list)
    ayurvedic_tips: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    generated_at: datetime
    source: PlanSource


class PlanOptions(BaseModel):
    """Options for multi-day plan generation."""

    duration_days: int = Field(7, ge=1, le=config.MAX_PLAN_DAYS, examples=[7])
    include_snacks: bool = Field(False, examples=[True])
    target_calories: Optional[float] = Field(None, gt=0, examples=[1800])
    season: Season = Field(Season.all, examples=["winter"])
    use_generative: bool = Field(True, description="Try the text generator before the deterministic planner")
    use_activity_level: bool = Field(
        False,
        description="Use the activity-level multiplier table instead of the flat 1.5 factor",
    )

    @field_validator("season", mode="before")
    @classmethod
    def _normalize_season(cls, value):
        return str(getattr(value, "value", value) or "all").strip().lower() or "all"
