"""Diet plan API router.

Generates multi-day plans (generative path with deterministic fallback)
and analyzes arbitrary meal sets.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_read
from schemas.analysis_schema import MealAnalysis, MealAnalysisRequest
from schemas.plan_schema import DietPlan, PlanOptions
from services.diet_service import DietService

logger = get_logger("api.diet_plans")
router = APIRouter(prefix="/api/diet-plans", tags=["diet-plans"])


@router.post("/analyze", response_model=MealAnalysis)
def analyze_meals(payload: MealAnalysisRequest, db: Session = Depends(get_db_read)):
    """Nutrition summary and Ayurvedic balance of a set of foods."""
    return DietService(db).analyze_meal_set(payload.foods, payload.patient_id)


@router.post("/{patient_id}", response_model=DietPlan)
def generate_diet_plan(patient_id: str, options: Optional[PlanOptions] = None,
                       db: Session = Depends(get_db_read)):
    """Generate a plan for a stored patient.

    Generator failures never surface here; they yield a plan tagged
    ``source="fallback"``.

    Raises:
        PatientNotFoundError: If the patient does not exist.
    """
    return DietService(db).generate_diet_plan(patient_id, options)
