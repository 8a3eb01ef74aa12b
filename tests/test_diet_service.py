"""Tests for the diet service facade against a seeded in-memory catalog."""
import pytest

import services.diet_service as diet_service_module
from conftest import fixed_clock
from core.exceptions import PatientNotFoundError
from core.repository import CollectionRepository
from schemas.chart_schema import ChartFood
from schemas.food_schema import FoodContext
from schemas.patient_schema import PatientUpdateRequest
from schemas.plan_schema import PlanOptions, PlanSource
from services.diet_service import DietService
from services.text_generator import TextGenerator


class BrokenGenerator(TextGenerator):
    def generate(self, prompt):
        raise ConnectionError("network unreachable")


@pytest.fixture
def service(seeded_db):
    return DietService(seeded_db, generator=None, clock=fixed_clock)


@pytest.fixture
def patient(service, vata_patient):
    return service.create_patient(vata_patient)


def test_patient_round_trip_recomputes_bmr(service, patient):
    loaded = service.get_patient(patient.id)
    assert loaded.bmr == 1400
    assert loaded.allergies == ["peanuts"]

    updated = service.update_patient(patient.id, PatientUpdateRequest(weight_kg=70))
    assert updated.weight_kg == 70
    assert updated.bmr == 1500
    assert updated.dosha.value == "vata"


def test_unknown_patient_raises(service):
    with pytest.raises(PatientNotFoundError) as exc_info:
        service.generate_diet_plan("does-not-exist")
    assert exc_info.value.status_code == 404
    with pytest.raises(PatientNotFoundError):
        service.get_suitable_foods("does-not-exist")


def test_generate_plan_from_seeded_catalog(service, patient):
    plan = service.generate_diet_plan(patient.id, PlanOptions(duration_days=7, include_snacks=True))
    assert plan.patient_id == patient.id
    assert plan.source == PlanSource.fallback
    assert len(plan.days) == 7
    assert [d.day_index for d in plan.days] == list(range(1, 8))
    for day in plan.days:
        assert day.meals.breakfast.items
        assert day.meals.lunch.items
        assert day.meals.dinner.items
        assert all("peanuts" not in i.food.allergens for i in day.meals.all_items())


def test_broken_generator_still_returns_plan(seeded_db, vata_patient):
    service = DietService(seeded_db, generator=BrokenGenerator(), clock=fixed_clock)
    patient = service.create_patient(vata_patient)
    plan = service.generate_diet_plan(patient.id, PlanOptions(duration_days=1))
    assert plan.source == PlanSource.fallback
    assert plan.days[0].meals.all_items()


def test_empty_catalog_plan_is_not_an_error(db, vata_patient):
    service = DietService(db, generator=None, clock=fixed_clock)
    patient = service.create_patient(vata_patient)
    plan = service.generate_diet_plan(patient.id, PlanOptions(duration_days=1))
    day = plan.days[0]
    assert all(slot.items == [] and slot.total_calories == 0 for _, slot in day.meals.slots())
    assert plan.warnings


def test_suitable_foods_honours_context(service, patient):
    foods = service.get_suitable_foods(patient.id, FoodContext(meal_type="breakfast", limit=5))
    assert len(foods) == 5
    assert "Peanut Chutney" not in [f.name for f in foods]

    first = foods[0]
    rest = service.get_suitable_foods(patient.id, FoodContext(meal_type="breakfast", exclude_ids=[first.id]))
    assert first.id not in [f.id for f in rest]


def test_analyze_meal_set(service, patient):
    foods = [
        ChartFood(name="Khichdi", calories=150, protein=6, quantity=2, rasa="sweet",
                  dosha_impact={"vata": "decreases"}, guna=["light"]),
        ChartFood(name="Salad", calories=40, fiber=3, rasa="bitter",
                  dosha_impact={"vata": "increases"}, guna=["dry", "light"]),
    ]
    analysis = service.analyze_meal_set(foods, patient.id)
    assert analysis.nutrition_summary.total_calories == 340
    assert analysis.nutrition_summary.total_protein == 12
    assert analysis.ayurvedic_analysis.total_items == 2
    assert analysis.ayurvedic_analysis.quality_distribution == {"light": 3, "dry": 1}
    assert analysis.recommendations

    anonymous = service.analyze_meal_set(foods)
    assert anonymous.recommendations == []


def test_realtime_recommendations(service, patient):
    result = service.get_realtime_recommendations(patient.id, hour=13)
    assert result.meal_type == "lunch"
    assert 0 < len(result.recommendations) <= 5
    assert result.ayurvedic_advice

    at_clock = service.get_realtime_recommendations(patient.id)
    assert at_clock.hour == 8
    assert at_clock.meal_type == "breakfast"


class CountingGenerator(TextGenerator):
    def __init__(self):
        self.calls = 0

    def generate(self, prompt):
        self.calls += 1
        raise ConnectionError("offline")


def test_bad_recipe_record_does_not_break_planning(seeded_db, vata_patient):
    CollectionRepository(seeded_db, "recipes").create({"name": "Masala Dosa", "meal_type": "brunch"})

    service = DietService(seeded_db, generator=None, clock=fixed_clock)
    patient = service.create_patient(vata_patient)
    plan = service.generate_diet_plan(patient.id, PlanOptions(duration_days=1))
    assert plan.source == PlanSource.fallback

    generator = CountingGenerator()
    with_generator = DietService(seeded_db, generator=generator, clock=fixed_clock)
    plan = with_generator.generate_diet_plan(patient.id, PlanOptions(duration_days=1))
    assert plan.source == PlanSource.fallback
    assert generator.calls == 1


def test_generator_is_created_only_for_plan_requests(seeded_db, vata_patient, monkeypatch):
    created = []

    def fake_get_text_generator():
        created.append(CountingGenerator())
        return created[-1]

    monkeypatch.setattr(diet_service_module, "get_text_generator", fake_get_text_generator)
    service = DietService(seeded_db, clock=fixed_clock)
    patient = service.create_patient(vata_patient)
    service.get_patient(patient.id)
    service.get_suitable_foods(patient.id)
    assert created == []

    service.generate_diet_plan(patient.id, PlanOptions(duration_days=1))
    service.generate_diet_plan(patient.id, PlanOptions(duration_days=1))
    assert len(created) == 1
    assert created[0].calls == 2
