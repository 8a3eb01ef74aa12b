"""Patient API router.

Create, read and update patient profiles. `bmi` and `bmr` in responses are
recomputed from the stored biometrics on every read.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from schemas.patient_schema import PatientProfile, PatientUpdateRequest
from services.diet_service import DietService

logger = get_logger("api.patients")
router = APIRouter(prefix="/api/patients", tags=["patients"])


@router.post("", response_model=PatientProfile, status_code=201)
def create_patient(payload: PatientProfile, db: Session = Depends(get_db_write)):
    """Store a new patient profile and return it with its id."""
    logger.info("Creating patient: %s", payload.name)
    return DietService(db).create_patient(payload)


@router.get("/{patient_id}", response_model=PatientProfile)
def get_patient(patient_id: str, db: Session = Depends(get_db_read)):
    """Return one patient.

    Raises:
        PatientNotFoundError: If the patient does not exist.
    """
    return DietService(db).get_patient(patient_id)


@router.put("/{patient_id}", response_model=PatientProfile)
def update_patient(patient_id: str, payload: PatientUpdateRequest, db: Session = Depends(get_db_write)):
    """Apply a partial update; fields left out keep their stored values."""
    return DietService(db).update_patient(patient_id, payload)
