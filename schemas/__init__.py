"""Pydantic schema package for patients, catalog, plans and charts."""

from .patient_schema import PatientProfile, PatientUpdateRequest
from .food_schema import FoodItem, RecipeItem, FoodContext
from .plan_schema import MealItem, MealSlot, DayPlan, DietPlan, AyurvedicBalance, PlanOptions
from .chart_schema import ChartFood, ChartMeal, DietChart, DietChartCreate, DietChartUpdate
from .analysis_schema import MealAnalysisRequest, MealAnalysis

__all__ = [
    "PatientProfile",
    "PatientUpdateRequest",
    "FoodItem",
    "RecipeItem",
    "FoodContext",
    "MealItem",
    "MealSlot",
    "DayPlan",
    "DietPlan",
    "AyurvedicBalance",
    "PlanOptions",
    "ChartFood",
    "ChartMeal",
    "DietChart",
    "DietChartCreate",
    "DietChartUpdate",
    "MealAnalysisRequest",
    "MealAnalysis",
]
