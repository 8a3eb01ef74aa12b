"""Tests for the greedy meal composer."""
import pytest

from services.food_scoring import rank_foods
from services.meal_composer import calculate_quantity, compose_meal


@pytest.mark.parametrize("remaining,expected", [
    (40, 0.5),
    (80, 0.75),
    (120, 1.0),
    (150, 1.5),
    (1000, 1.5),
    (-50, 0.5),
])
def test_calculate_quantity_buckets(make_food, remaining, expected):
    food = make_food("Hundred", calories=100)
    assert calculate_quantity(food, remaining) == expected


def test_zero_calorie_food_gets_one_serving(make_food):
    assert calculate_quantity(make_food("Water", calories=0), 300) == 1.0


def test_empty_input_gives_empty_slot():
    slot = compose_meal([], 500)
    assert slot.items == []
    assert slot.total_calories == 0
    assert slot.target_calories == 500


def test_large_food_is_skipped_not_fatal(make_food):
    big = make_food("Big", calories=600)
    small = make_food("Small", calories=100)
    slot = compose_meal([big, small], 200)
    assert [i.food.name for i in slot.items] == ["Small"]
    assert slot.items[0].quantity == 1.5
    assert slot.total_calories == 150


def test_max_items_respected(make_food):
    foods = [make_food(f"Food {i}", calories=10) for i in range(10)]
    slot = compose_meal(foods, 1000, max_items=3)
    assert len(slot.items) == 3


@pytest.mark.parametrize("target", [0, 25, 50, 105, 262.5, 525, 630, 840, 1200])
def test_calorie_bound_holds(catalog, vata_patient, target):
    slot = compose_meal(rank_foods(catalog, vata_patient), target)
    assert slot.total_calories <= target * 1.2 + 1e-9


def test_same_input_same_slot(catalog, vata_patient):
    ranked = rank_foods(catalog, vata_patient)
    assert compose_meal(ranked, 525) == compose_meal(ranked, 525)
