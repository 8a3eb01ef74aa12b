"""Diet chart API router.

Charts are stored plans; nutrition and balance are recomputed by the
service on every create and update.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from schemas.chart_schema import ChartFromPlanRequest, DietChart, DietChartCreate, DietChartUpdate
from services.diet_service import DietService

logger = get_logger("api.diet_charts")
router = APIRouter(prefix="/api/diet-charts", tags=["diet-charts"])


@router.post("", response_model=DietChart, status_code=201)
def create_chart(payload: DietChartCreate, db: Session = Depends(get_db_write)):
    """Create a chart.

    Raises:
        ValidationError: If `patient_id` or `meals` is missing.
        PatientNotFoundError: If the patient does not exist.
    """
    return DietService(db).create_diet_chart(payload)


@router.post("/from-plan/{patient_id}", response_model=DietChart, status_code=201)
def create_chart_from_plan(patient_id: str, payload: ChartFromPlanRequest,
                           db: Session = Depends(get_db_write)):
    """Generate a plan and save one of its days as a chart."""
    return DietService(db).create_chart_from_plan(
        patient_id, day_index=payload.day_index, dietitian_id=payload.dietitian_id
    )


@router.get("/patient/{patient_id}", response_model=List[DietChart])
def list_patient_charts(patient_id: str, db: Session = Depends(get_db_read)):
    return DietService(db).list_diet_charts(patient_id)


@router.get("/{chart_id}", response_model=DietChart)
def get_chart(chart_id: str, db: Session = Depends(get_db_read)):
    return DietService(db).get_diet_chart(chart_id)


@router.put("/{chart_id}", response_model=DietChart)
def update_chart(chart_id: str, payload: DietChartUpdate, db: Session = Depends(get_db_write)):
    """Replace a chart's meals; totals and balance are recomputed from scratch.

    Raises:
        NotFoundError: If the chart does not exist.
    """
    return DietService(db).update_diet_chart(chart_id, payload.meals, payload.status, payload.notes)
