"""Food catalog API router.

Lists, searches and filters the catalog, and returns foods suitable for a
given patient, either ranked for a meal type or for the current hour.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.exceptions import ValidationError
from core.logger import get_logger
from database.deps import get_db_read
from schemas.analysis_schema import RealtimeRecommendation
from schemas.food_schema import FoodContext, FoodItem, RecipeItem
from services.catalog_service import CatalogService
from services.diet_service import DietService

logger = get_logger("api.foods")
router = APIRouter(prefix="/api/foods", tags=["foods"])


@router.get("", response_model=List[FoodItem])
def list_foods(limit: Optional[int] = Query(None, ge=1), db: Session = Depends(get_db_read)):
    """Return the catalog in catalog order."""
    return CatalogService(db).load_foods(limit)


@router.get("/recipes", response_model=List[RecipeItem])
def list_recipes(db: Session = Depends(get_db_read)):
    return CatalogService(db).load_recipes()


@router.get("/search", response_model=List[FoodItem])
def search_foods(q: str = Query(..., min_length=1), limit: int = Query(20, ge=1, le=100),
                 db: Session = Depends(get_db_read)):
    """Match any whitespace-separated term against name, category, rasa, virya, guna, season or region."""
    return CatalogService(db).search_foods(q, limit)


@router.get("/filter", response_model=List[FoodItem])
def filter_foods(
    category: Optional[str] = None,
    rasa: Optional[str] = None,
    dosha: Optional[str] = None,
    effect: str = "decreases",
    season: Optional[str] = None,
    region: Optional[str] = None,
    min_calories: Optional[float] = None,
    max_calories: Optional[float] = None,
    min_protein: Optional[float] = None,
    max_protein: Optional[float] = None,
    sort_by: Optional[str] = Query(None, pattern="^(calories|protein|name)$"),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db_read),
):
    if dosha and dosha not in ("vata", "pitta", "kapha"):
        raise ValidationError("dosha must be one of vata, pitta, kapha", field="dosha")
    return CatalogService(db).filter_foods(
        category=category, rasa=rasa, dosha=dosha, effect=effect, season=season,
        region=region, min_calories=min_calories, max_calories=max_calories,
        min_protein=min_protein, max_protein=max_protein, sort_by=sort_by, limit=limit,
    )


@router.post("/suitable/{patient_id}", response_model=List[FoodItem])
def suitable_foods_for_patient(patient_id: str, context: Optional[FoodContext] = None,
                               db: Session = Depends(get_db_read)):
    """Suitable foods for a patient, ranked best first.

    Raises:
        PatientNotFoundError: If the patient does not exist.
    """
    foods = DietService(db).get_suitable_foods(patient_id, context)
    logger.info("Suitable foods for %s: %s", patient_id, len(foods))
    return foods


@router.get("/realtime/{patient_id}", response_model=RealtimeRecommendation)
def realtime_recommendations(patient_id: str, hour: Optional[int] = Query(None, ge=0, le=23),
                             season: str = "all", db: Session = Depends(get_db_read)):
    """Suggestions for the meal the given (or current) hour falls in."""
    return DietService(db).get_realtime_recommendations(patient_id, hour, season)
