"""Tests for the day planner and plan aggregator."""
import pytest

from conftest import fixed_clock
from schemas.plan_schema import PlanOptions, PlanSource
from services.recommendation_engine import determine_meal_type, recommendation_service


def _plan(patient, foods, **options):
    return recommendation_service.generate_plan(patient, foods, PlanOptions(**options), clock=fixed_clock)


def test_target_from_bmr_and_breakfast_bound(catalog, vata_patient):
    assert vata_patient.bmr == 1400
    plan = _plan(vata_patient, catalog, duration_days=1, include_snacks=False)
    assert plan.target_calories == 2100
    assert len(plan.days) == 1
    breakfast = plan.days[0].meals.breakfast
    assert breakfast.target_calories == 525
    assert breakfast.total_calories <= 630
    assert plan.source == PlanSource.fallback


def test_every_slot_respects_calorie_bound(catalog, vata_patient):
    plan = _plan(vata_patient, catalog, duration_days=3, include_snacks=True)
    for day in plan.days:
        for _, slot in day.meals.slots():
            assert slot.total_calories <= slot.target_calories * 1.2 + 1e-9


def test_plan_is_deterministic(catalog, vata_patient):
    first = _plan(vata_patient, catalog, duration_days=3, include_snacks=True)
    second = _plan(vata_patient, list(catalog), duration_days=3, include_snacks=True)
    assert first.model_dump_json() == second.model_dump_json()


def test_allergens_never_appear(catalog, vata_patient):
    plan = _plan(vata_patient, catalog, duration_days=2, include_snacks=True)
    for day in plan.days:
        for item in day.meals.all_items():
            assert not set(item.food.allergens) & set(vata_patient.allergies)
            assert item.food.name != "Peanut Chutney"


def test_empty_catalog_gives_empty_slots_with_warnings(vata_patient):
    plan = _plan(vata_patient, [], duration_days=2)
    assert len(plan.days) == 2
    for day in plan.days:
        for _, slot in day.meals.slots():
            assert slot.items == []
            assert slot.total_calories == 0
        assert day.total_calories == 0
        assert day.ayurvedic_balance.balance_score == 0
        assert len(day.warnings) == 3
    assert "Day 1: No suitable items for breakfast" in plan.warnings


def test_snack_slots_only_when_requested(catalog, vata_patient):
    without = _plan(vata_patient, catalog, duration_days=1).days[0]
    assert without.meals.morning_snack.items == []
    assert without.meals.morning_snack.target_calories == 0
    assert without.meals.morning_snack.warning is None

    with_snacks = _plan(vata_patient, catalog, duration_days=1, include_snacks=True).days[0]
    assert with_snacks.meals.morning_snack.target_calories == 105
    assert with_snacks.meals.evening_snack.target_calories == 105


def test_day_totals_match_items(catalog, vata_patient):
    day = _plan(vata_patient, catalog, duration_days=1, include_snacks=True).days[0]
    items = day.meals.all_items()
    assert day.total_calories == pytest.approx(sum(i.food.calories * i.quantity for i in items))
    assert day.nutrition.protein == pytest.approx(sum(i.food.protein * i.quantity for i in items), abs=0.01)
    assert day.ayurvedic_balance.total_items == len(items)


def test_target_precedence(catalog, vata_patient):
    assert _plan(vata_patient, catalog, duration_days=1, target_calories=1800).target_calories == 1800
    overridden = vata_patient.model_copy(update={"calorie_override": 1600})
    assert _plan(overridden, catalog, duration_days=1).target_calories == 1600
    active = vata_patient.model_copy(update={"activity_level": "sedentary"})
    assert _plan(active, catalog, duration_days=1).target_calories == 2100
    assert _plan(active, catalog, duration_days=1, use_activity_level=True).target_calories == 1680


def test_guidelines_and_tips(catalog, vata_patient):
    older = vata_patient.model_copy(update={"age": 70, "conditions": ["diabetes"]})
    plan = _plan(older, catalog, duration_days=1)
    text = " ".join(plan.general_guidelines)
    assert "vata" in text
    assert "calcium" in text
    assert "blood sugar" in text
    assert plan.ayurvedic_tips
    assert plan.generated_at == fixed_clock()


@pytest.mark.parametrize("hour,meal", [
    (6, "breakfast"), (10, "breakfast"), (11, "snack"), (12, "lunch"),
    (14, "lunch"), (16, "snack"), (18, "dinner"), (21, "dinner"), (23, "snack"), (0, "snack"),
])
def test_determine_meal_type(hour, meal):
    assert determine_meal_type(hour) == meal


def test_realtime_suggestions(catalog, vata_patient):
    result = recommendation_service.realtime_suggestions(vata_patient, catalog, hour=8)
    assert result["meal_type"] == "breakfast"
    assert 0 < len(result["recommendations"]) <= 5
    assert "Peanut Chutney" not in [f.name for f in result["recommendations"]]
    assert result["warning"] is None

    empty = recommendation_service.realtime_suggestions(vata_patient, [], hour=13)
    assert empty["recommendations"] == []
    assert empty["warning"]
