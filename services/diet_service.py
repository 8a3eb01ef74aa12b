"""Diet service: the operations exposed to HTTP callers.

Wires patients, the catalog, the planners and the chart store together
for one database session. Missing patients always raise
`PatientNotFoundError`; they are never replaced by a default profile.
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from core.exceptions import PatientNotFoundError
from core.logger import get_logger
from core.repository import CollectionRepository
from schemas.analysis_schema import (
    AyurvedicAnalysis,
    MealAnalysis,
    NutritionSummary,
    RealtimeRecommendation,
)
from schemas.chart_schema import ChartFood, ChartMeal, DietChart, DietChartCreate
from schemas.food_schema import FoodContext, FoodItem
from schemas.patient_schema import PatientProfile, PatientUpdateRequest
from schemas.plan_schema import DietPlan, PlanOptions
from services.ayurvedic_balance import compute_balance, quality_distribution
from services.catalog_service import CatalogService
from services.diet_chart_service import DietChartService
from services.food_filter import suitable_foods
from services.food_scoring import rank_foods
from services.generative_adapter import GenerativePlanAdapter
from services.nutrition_calculator import nutrition_calculator
from services.recommendation_engine import MEAL_TYPE_CATEGORIES, recommendation_service
from services.text_generator import get_text_generator

logger = get_logger("services.diet_service")

_UNSET = object()


class DietService:
    """Facade over the planning engine for one database session."""

    def __init__(self, session: Session, generator=_UNSET,
                 clock: Callable[[], datetime] = datetime.utcnow):
        self.patients = CollectionRepository(session, "patients")
        self.catalog = CatalogService(session)
        self.charts = DietChartService(session)
        self._generator = generator
        self._adapter: Optional[GenerativePlanAdapter] = None
        self.clock = clock

    @property
    def adapter(self) -> GenerativePlanAdapter:
        """Plan adapter, built on first use so only plan requests configure a generator."""
        if self._adapter is None:
            if self._generator is _UNSET:
                self._generator = get_text_generator()
            self._adapter = GenerativePlanAdapter(self._generator, recommendation_service)
        return self._adapter

    # Patients
    def create_patient(self, profile: PatientProfile) -> PatientProfile:
        data = profile.model_dump(mode="json", exclude={"id", "bmi", "bmr"})
        record = self.patients.create(data)
        logger.info("Created patient %s", record["id"])
        return PatientProfile(**record)

    def get_patient(self, patient_id: str) -> PatientProfile:
        record = self.patients.find_by_id(patient_id)
        if record is None:
            raise PatientNotFoundError(patient_id)
        return PatientProfile(**record)

    def update_patient(self, patient_id: str, changes: PatientUpdateRequest) -> PatientProfile:
        current = self.get_patient(patient_id)
        merged = {**current.model_dump(mode="json", exclude={"bmi", "bmr"}),
                  **changes.model_dump(mode="json", exclude_unset=True)}
        profile = PatientProfile(**merged)
        record = self.patients.update(patient_id, profile.model_dump(mode="json", exclude={"id", "bmi", "bmr"}))
        logger.info("Updated patient %s", patient_id)
        return PatientProfile(**record)

    # Plans
    def generate_diet_plan(self, patient_id: str, options: Optional[PlanOptions] = None) -> DietPlan:
        """Generate a multi-day plan for a stored patient."""
        patient = self.get_patient(patient_id)
        options = options or PlanOptions()
        foods = self.catalog.load_foods()
        adapter = self.adapter
        recipes = []
        if adapter.generator is not None and options.use_generative:
            recipes = self.catalog.load_recipes(foods)
        logger.info("Plan request: patient=%s days=%s snacks=%s catalog=%s",
                    patient_id, options.duration_days, options.include_snacks, len(foods))
        plan = adapter.generate(patient, foods, recipes, options, self.clock)
        logger.info("Plan generated: patient=%s source=%s warnings=%s",
                    patient_id, plan.source.value, len(plan.warnings))
        return plan

    def get_suitable_foods(self, patient_id: str, context: Optional[FoodContext] = None) -> List[FoodItem]:
        """Suitable foods for a patient, ranked, honouring `exclude_ids` and `limit`."""
        patient = self.get_patient(patient_id)
        context = context or FoodContext()
        if context.meal_type and not context.preferred_categories:
            categories = MEAL_TYPE_CATEGORIES.get(context.meal_type, [])
            context = context.model_copy(update={"preferred_categories": categories})
        ranked = rank_foods(suitable_foods(self.catalog.load_foods(), patient, context), patient, context)
        return ranked[:context.limit] if context.limit else ranked

    def get_realtime_recommendations(self, patient_id: str, hour: Optional[int] = None,
                                     season: str = "all") -> RealtimeRecommendation:
        patient = self.get_patient(patient_id)
        hour = self.clock().hour if hour is None else hour
        result = recommendation_service.realtime_suggestions(
            patient, self.catalog.load_foods(), hour, season
        )
        return RealtimeRecommendation(**result)

    # Analysis
    def analyze_meal_set(self, foods: List[ChartFood], patient_id: Optional[str] = None) -> MealAnalysis:
        """Nutrition summary and Ayurvedic analysis of an arbitrary set of foods."""
        patient = self.get_patient(patient_id) if patient_id else None
        totals = nutrition_calculator.sum_chart_foods(foods)
        primary = patient.primary_dosha if patient else "vata"
        balance = compute_balance(foods, primary)
        analysis = AyurvedicAnalysis(
            **balance.model_dump(),
            quality_distribution=quality_distribution(foods),
        )
        summary = NutritionSummary(**{f"total_{k}": v for k, v in totals.items()})
        recommendations = self._analysis_recommendations(summary, analysis, patient) if patient else []
        return MealAnalysis(
            nutrition_summary=summary,
            ayurvedic_analysis=analysis,
            recommendations=recommendations,
        )

    def _analysis_recommendations(self, summary: NutritionSummary, analysis: AyurvedicAnalysis,
                                  patient: PatientProfile) -> List[str]:
        lines = []
        dosha = patient.primary_dosha
        tallies: Dict[str, int] = analysis.dosha_impact[dosha]
        if tallies["increases"] > tallies["decreases"]:
            lines.append(f"This meal set may aggravate {dosha}; add more {dosha}-pacifying foods.")
        missing = [rasa for rasa, count in analysis.rasa_distribution.items() if count == 0]
        if missing:
            lines.append(f"Consider adding {', '.join(missing)} tastes for a complete meal.")
        if summary.total_fiber < 5 and analysis.total_items:
            lines.append("Fiber is low; include whole grains, vegetables or pulses.")
        if "diabetes" in patient.conditions:
            lines.append("Prefer low-glycemic foods and keep portions moderate.")
        return lines

    # Charts
    def create_diet_chart(self, payload: DietChartCreate) -> DietChart:
        return self.charts.create_chart(payload)

    def update_diet_chart(self, chart_id: str, meals: Optional[List[ChartMeal]],
                          status: Optional[str] = None, notes: Optional[str] = None) -> DietChart:
        return self.charts.update_chart(chart_id, meals, status=status, notes=notes)

    def create_chart_from_plan(self, patient_id: str, options: Optional[PlanOptions] = None,
                               day_index: int = 1, dietitian_id: str = "") -> DietChart:
        plan = self.generate_diet_plan(patient_id, options)
        return self.charts.create_chart_from_plan(plan, day_index, dietitian_id)

    def get_diet_chart(self, chart_id: str) -> DietChart:
        return self.charts.get_chart(chart_id)

    def list_diet_charts(self, patient_id: str) -> List[DietChart]:
        self.get_patient(patient_id)
        return self.charts.list_charts_for_patient(patient_id)
