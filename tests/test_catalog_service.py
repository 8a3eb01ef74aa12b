"""Tests for catalog loading, search and attribute filters."""
import pytest

from core.repository import CollectionRepository
from services.catalog_service import CatalogService


@pytest.fixture
def service(db, catalog):
    CollectionRepository(db, "foods").create_many([f.model_dump(mode="json") for f in catalog])
    return CatalogService(db)


def _names(foods):
    return [f.name for f in foods]


def test_load_foods_keeps_catalog_order(service, catalog):
    assert _names(service.load_foods()) == _names(catalog)
    assert _names(service.load_foods(limit=2)) == ["Peanut Chutney", "Poha"]
    assert service.get_food("poha").calories == 180
    assert service.get_food("missing") is None


def test_recipe_ingredients_resolve_by_name(db, service):
    CollectionRepository(db, "recipes").create({
        "name": "Poha Plate",
        "meal_type": "breakfast",
        "ingredients": ["poha", "Curry Leaves"],
    })
    recipe = service.load_recipes()[0]
    assert recipe.ingredients[0].id == "poha"
    assert recipe.ingredients[1].name == "Curry Leaves"
    assert recipe.ingredients[1].calories == 0


def test_search_matches_any_term(service):
    assert _names(service.search_foods("pungent")) == ["Ginger Tea", "Chicken Curry"]
    assert _names(service.search_foods("rice SOUP")) == ["Basmati Rice", "Vegetable Soup"]
    assert len(service.search_foods("sweet", limit=2)) == 2


def test_blank_search_returns_nothing(service):
    assert service.search_foods("   ") == []


def test_filter_by_category_and_dosha_effect(service):
    assert _names(service.filter_foods(category="grains")) == ["Basmati Rice"]
    assert _names(service.filter_foods(dosha="kapha", effect="increases")) == [
        "Peanut Chutney", "Basmati Rice", "Banana", "Chicken Curry", "Paneer",
    ]


def test_filter_by_season_keeps_all_season_foods(service):
    summer = _names(service.filter_foods(season="summer"))
    assert "Spinach" not in summer
    assert len(summer) == 9


def test_filter_bounds_and_sorting(service):
    light = service.filter_foods(max_calories=50, sort_by="calories")
    assert _names(light) == ["Ginger Tea", "Spinach", "Vegetable Soup"]

    protein = service.filter_foods(min_protein=18, sort_by="name")
    assert _names(protein) == ["Chicken Curry", "Paneer", "Peanut Chutney"]
    assert len(service.filter_foods(limit=3)) == 3


def test_invalid_recipe_records_are_skipped(db, service):
    recipes = CollectionRepository(db, "recipes")
    recipes.create({"name": "Masala Dosa", "meal_type": "brunch"})
    recipes.create({"name": "Mystery Stew", "meal_type": "dinner", "ingredients": [{"name": None}]})
    recipes.create({"name": "Rice Bowl", "meal_type": "lunch", "ingredients": ["Basmati Rice"]})
    assert [r.name for r in service.load_recipes()] == ["Rice Bowl"]
