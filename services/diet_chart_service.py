"""Diet chart records.

A chart's nutrition totals, per-meal calories and Ayurvedic balance are
always recomputed from its meals before it is written, on create and on
every update, and updates replace the whole record. Nothing is carried
over incrementally from the stored copy.
"""

from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, PatientNotFoundError, ValidationError
from core.logger import get_logger
from core.repository import CollectionRepository
from schemas.chart_schema import ChartFood, ChartMeal, DietChart, DietChartCreate, NutritionTotals
from schemas.patient_schema import primary_dosha_of
from schemas.plan_schema import DietPlan, MealItem
from services.ayurvedic_balance import compute_balance
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.diet_chart_service")


def chart_food_from_item(item: MealItem) -> ChartFood:
    food = item.food
    return ChartFood(
        food_id=food.id,
        name=food.name,
        quantity=item.quantity,
        calories=food.calories,
        protein=food.protein,
        carbs=food.carbs,
        fat=food.fat,
        fiber=food.fiber,
        rasa=food.rasa.value,
        dosha_impact={d: getattr(food.dosha_impact, d).value for d in ("vata", "pitta", "kapha")},
        guna=[g.value for g in food.guna],
    )


def recompute(chart: DietChart, primary_dosha: str) -> DietChart:
    """Refresh meal totals, chart nutrition and balance from the meals."""
    all_foods: List[ChartFood] = []
    for meal in chart.meals:
        meal.total_calories = nutrition_calculator.sum_chart_foods(meal.foods)["calories"]
        all_foods.extend(meal.foods)
    chart.total_nutrition = NutritionTotals(**nutrition_calculator.sum_chart_foods(all_foods))
    chart.ayurvedic_balance = compute_balance(all_foods, primary_dosha)
    return chart


class DietChartService:
    """Create, update and read diet charts in the `dietCharts` collection."""

    def __init__(self, session: Session):
        self.charts = CollectionRepository(session, "dietCharts")
        self.patients = CollectionRepository(session, "patients")

    def _primary_dosha(self, patient_id: str) -> str:
        patient = self.patients.find_by_id(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id)
        return primary_dosha_of(patient.get("dosha"))

    def create_chart(self, payload: DietChartCreate, source: str = "manual") -> DietChart:
        """Validate, recompute and persist a new chart.

        Raises:
            ValidationError: missing patient id or meals.
            PatientNotFoundError: the patient does not exist.
        """
        if not payload.patient_id:
            raise ValidationError("patient_id is required", field="patient_id")
        if not payload.meals:
            raise ValidationError("At least one meal is required", field="meals")
        primary = self._primary_dosha(payload.patient_id)

        chart = DietChart(
            patient_id=payload.patient_id,
            dietitian_id=payload.dietitian_id,
            chart_name=payload.chart_name or f"Diet chart for patient {payload.patient_id}",
            meals=[m.model_copy(deep=True) for m in payload.meals],
            duration_days=payload.duration_days,
            season=payload.season,
            notes=payload.notes,
            instructions=payload.instructions,
            target_calories=payload.target_calories,
            source=source,
        )
        recompute(chart, primary)
        record = self.charts.create(chart.model_dump(mode="json", exclude={"id", "created_at", "updated_at"}))
        logger.info("Created diet chart %s for patient %s (%s kcal)",
                    record["id"], chart.patient_id, chart.total_nutrition.calories)
        return DietChart(**record)

    def update_chart(self, chart_id: str, meals: Optional[List[ChartMeal]],
                     status: Optional[str] = None, notes: Optional[str] = None) -> DietChart:
        """Replace a chart's meals and rewrite the whole record.

        Raises:
            NotFoundError: no chart with `chart_id`.
            ValidationError: `meals` missing or empty.
        """
        record = self.charts.find_by_id(chart_id)
        if record is None:
            raise NotFoundError("DietChart", chart_id)
        if not meals:
            raise ValidationError("At least one meal is required", field="meals")
        try:
            chart = DietChart(**record)
        except PydanticValidationError as exc:
            raise ValidationError(f"Stored chart {chart_id} is invalid: {exc}") from exc

        chart.meals = [m.model_copy(deep=True) for m in meals]
        if status is not None:
            chart.status = status
        if notes is not None:
            chart.notes = notes
        recompute(chart, self._primary_dosha(chart.patient_id))

        updated = self.charts.update(chart_id, chart.model_dump(mode="json", exclude={"id", "created_at", "updated_at"}))
        logger.info("Updated diet chart %s (%s kcal)", chart_id, chart.total_nutrition.calories)
        return DietChart(**updated)

    def create_chart_from_plan(self, plan: DietPlan, day_index: int = 1,
                               dietitian_id: str = "") -> DietChart:
        """Store one day of a generated plan as a chart."""
        day = next((d for d in plan.days if d.day_index == day_index), None)
        if day is None:
            raise ValidationError(f"Plan has no day {day_index}", field="day_index")
        meals = [
            ChartMeal(
                name=name.replace("_", " ").title(),
                time=slot.timing,
                foods=[chart_food_from_item(item) for item in slot.items],
            )
            for name, slot in day.meals.slots()
            if slot.items
        ]
        payload = DietChartCreate(
            patient_id=plan.patient_id,
            meals=meals,
            dietitian_id=dietitian_id,
            chart_name=f"Day {day_index} plan",
            duration_days=1,
            target_calories=plan.target_calories,
            notes="; ".join(day.warnings),
            instructions=" ".join(plan.ayurvedic_tips),
        )
        return self.create_chart(payload, source=plan.source.value)

    def get_chart(self, chart_id: str) -> DietChart:
        record = self.charts.find_by_id(chart_id)
        if record is None:
            raise NotFoundError("DietChart", chart_id)
        return DietChart(**record)

    def list_charts_for_patient(self, patient_id: str) -> List[DietChart]:
        return [DietChart(**r) for r in self.charts.find_by_field("patient_id", patient_id)]
