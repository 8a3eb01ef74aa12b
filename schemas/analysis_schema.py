"""Schemas for meal-set analysis and real-time suggestions."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from schemas.chart_schema import ChartFood
from schemas.food_schema import FoodItem
from schemas.plan_schema import AyurvedicBalance


class MealAnalysisRequest(BaseModel):
    foods: List[ChartFood] = Field(..., description="Foods with per-serving nutrition and quantities")
    patient_id: Optional[str] = None


class NutritionSummary(BaseModel):
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    total_fiber: float = 0.0


class AyurvedicAnalysis(AyurvedicBalance):
    quality_distribution: Dict[str, float] = Field(default_factory=dict)


class MealAnalysis(BaseModel):
    nutrition_summary: NutritionSummary
    ayurvedic_analysis: AyurvedicAnalysis
    recommendations: List[str] = Field(default_factory=list)


class RealtimeRecommendation(BaseModel):
    meal_type: str
    hour: int
    recommendations: List[FoodItem] = Field(default_factory=list)
    nutritional_guidance: str
    ayurvedic_advice: str
    warning: Optional[str] = None
