"""Tests for BMI/BMR and calorie target calculations."""
import pytest

from schemas.patient_schema import PatientProfile
from services.nutrition_calculator import nutrition_calculator


def test_bmi():
    assert nutrition_calculator.calculate_bmi(160, 64) == pytest.approx(25.0)
    assert nutrition_calculator.calculate_bmi(0, 64) == 0.0


@pytest.mark.parametrize("gender,expected", [
    ("male", 1400),
    ("female", 1234),
    ("other", 1234),
])
def test_bmr_by_gender(gender, expected):
    assert nutrition_calculator.calculate_bmr(41, 160, 60, gender) == pytest.approx(expected)


def test_patient_computed_fields_ignore_input():
    patient = PatientProfile(age=41, gender="male", height_cm=160, weight_kg=60, bmr=9999, bmi=1)
    assert patient.bmr == 1400
    assert patient.bmi == pytest.approx(23.44)


@pytest.mark.parametrize("dosha,primary", [
    ("vata", "vata"), ("pitta-kapha", "pitta"), ("vata-kapha", "vata"), ("kapha", "kapha"),
    ("tridoshic", "vata"), (None, "vata"),
])
def test_primary_dosha(dosha, primary):
    patient = PatientProfile(age=30, gender="female", height_cm=160, weight_kg=55, dosha=dosha)
    assert patient.primary_dosha == primary


def test_activity_factor_is_flat_unless_requested():
    assert nutrition_calculator.activity_factor("very_active") == 1.5
    assert nutrition_calculator.activity_factor("very_active", use_activity_level=True) == 1.9
    assert nutrition_calculator.activity_factor(None, use_activity_level=True) == 1.5


def test_sum_items(catalog):
    from schemas.plan_schema import MealItem
    items = [MealItem(food=catalog[1], quantity=1.5), MealItem(food=catalog[2], quantity=0.5)]
    totals = nutrition_calculator.sum_items(items)
    assert totals["calories"] == 345
    assert totals["protein"] == pytest.approx(8.25)
