"""Tests for food scoring and ranking."""
import pytest

from schemas.food_schema import FoodContext
from services.food_filter import suitable_foods
from services.food_scoring import rank_foods, score_food


def test_score_formula(make_food, vata_patient):
    food = make_food("Test", protein=10, sugar=5, fiber=5, season=["winter"],
                     dosha_impact={"vata": "decreases"})
    assert score_food(food, vata_patient) == pytest.approx(3 - 0.5 + 1 + 10)
    assert score_food(food, vata_patient, FoodContext(season="winter")) == pytest.approx(3 - 0.5 + 1 + 10 + 5)


def test_season_bonus_needs_exact_match(make_food, vata_patient):
    food = make_food("Everywhere", season=["all"])
    assert score_food(food, vata_patient, FoodContext(season="winter")) == pytest.approx(0)


def test_compound_dosha_uses_first_component(make_food, pitta_patient):
    food = make_food("Cooling", dosha_impact={"vata": "increases", "pitta": "decreases"})
    assert pitta_patient.primary_dosha == "pitta"
    assert score_food(food, pitta_patient) == pytest.approx(10)


def test_category_bonus_only_with_preferred_categories(make_food, vata_patient):
    food = make_food("Poha", category="breakfast")
    assert score_food(food, vata_patient) == pytest.approx(0)
    context = FoodContext(preferred_categories=["breakfast"])
    assert score_food(food, vata_patient, context) == pytest.approx(5)


def test_rank_is_descending(catalog, vata_patient):
    ranked = rank_foods(catalog, vata_patient)
    scores = [score_food(f, vata_patient) for f in ranked]
    assert scores == sorted(scores, reverse=True)


def test_rank_ties_keep_catalog_order(make_food, vata_patient):
    foods = [make_food(name) for name in ("Alpha", "Beta", "Gamma", "Delta")]
    assert [f.name for f in rank_foods(foods, vata_patient)] == ["Alpha", "Beta", "Gamma", "Delta"]


def test_rank_is_reproducible(catalog, vata_patient):
    first = [f.name for f in rank_foods(catalog, vata_patient)]
    second = [f.name for f in rank_foods(list(catalog), vata_patient)]
    assert first == second


def test_top_scored_allergen_never_survives_filtering(catalog, vata_patient):
    assert rank_foods(catalog, vata_patient)[0].name == "Peanut Chutney"
    ranked = rank_foods(suitable_foods(catalog, vata_patient), vata_patient)
    assert "Peanut Chutney" not in [f.name for f in ranked]
