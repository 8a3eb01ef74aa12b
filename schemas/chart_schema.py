"""Schemas for persisted diet charts.

A chart's `total_nutrition` and `ayurvedic_balance` are caches derived from
its meals; the chart service recomputes both on every create and update.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from schemas.plan_schema import AyurvedicBalance


class ChartFood(BaseModel):
    """A food line in a chart meal; nutrition is per serving."""

    food_id: Optional[str] = None
    name: str = Field(..., min_length=1, examples=["Moong Dal Khichdi"])
    quantity: float = Field(1.0, gt=0, examples=[1.0])
    calories: float = Field(0.0, ge=0, examples=[180])
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    fiber: float = Field(0.0, ge=0)
    rasa: Optional[str] = Field(None, examples=["sweet"])
    dosha_impact: Dict[str, str] = Field(default_factory=dict, examples=[{"vata": "decreases"}])
    guna: List[str] = Field(default_factory=list)

    @field_validator("quantity", mode="before")
    @classmethod
    def _default_quantity(cls, value):
        return 1.0 if value is None else value


class ChartMeal(BaseModel):
    name: str = "Meal"
    time: str = ""
    foods: List[ChartFood] = Field(default_factory=list)
    instructions: str = ""
    total_calories: float = 0.0


class NutritionTotals(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0


class DietChart(BaseModel):
    id: Optional[str] = None
    patient_id: str
    dietitian_id: str = ""
    chart_name: str = ""
    meals: List[ChartMeal] = Field(default_factory=list)
    total_nutrition: NutritionTotals = Field(default_factory=NutritionTotals)
    ayurvedic_balance: AyurvedicBalance = Field(default_factory=AyurvedicBalance)
    status: str = "active"
    duration_days: int = 1
    season: str = "all"
    notes: str = ""
    instructions: str = ""
    target_calories: Optional[float] = None
    source: str = "manual"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class DietChartCreate(BaseModel):
    """Request payload for creating a diet chart."""

    patient_id: Optional[str] = Field(None, examples=["3f1c..."])
    meals: Optional[List[ChartMeal]] = Field(None, description="At least one meal is required")
    dietitian_id: str = ""
    chart_name: Optional[str] = None
    duration_days: int = Field(1, ge=1)
    season: str = "all"
    notes: str = ""
    instructions: str = ""
    target_calories: Optional[float] = Field(None, gt=0)


class DietChartUpdate(BaseModel):
    """Request payload replacing a chart's meals."""

    meals: List[ChartMeal]
    status: Optional[str] = None
    notes: Optional[str] = None


class ChartFromPlanRequest(BaseModel):
    """Generate a plan and store one of its days as a chart."""

    day_index: int = Field(1, ge=1)
    dietitian_id: str = ""
