"""Catalog access: loads foods and recipes from the document store.

Catalog order is insertion order in the store, which is what makes ranking
ties stable. Recipe ingredients stored by name are resolved to catalog
foods when a food of that name exists.
"""

from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.logger import get_logger
from core.repository import CollectionRepository
from schemas.food_schema import FoodItem, RecipeItem
from services.food_filter import season_matches

logger = get_logger("services.catalog_service")

SORT_KEYS = {
    "calories": lambda f: f.calories,
    "protein": lambda f: f.protein,
    "name": lambda f: f.name.lower(),
}


def _value(v) -> str:
    return str(getattr(v, "value", v))


class CatalogService:
    """Read-only view over the `foods` and `recipes` collections."""

    def __init__(self, session: Session):
        self.foods_repo = CollectionRepository(session, "foods")
        self.recipes_repo = CollectionRepository(session, "recipes")

    def load_foods(self, limit: Optional[int] = None) -> List[FoodItem]:
        foods = [FoodItem(**record) for record in self.foods_repo.find_all(limit)]
        logger.debug("Loaded %s foods", len(foods))
        return foods

    def get_food(self, food_id: str) -> Optional[FoodItem]:
        record = self.foods_repo.find_by_id(food_id)
        return FoodItem(**record) if record else None

    def load_recipes(self, foods: Optional[List[FoodItem]] = None) -> List[RecipeItem]:
        """Load recipes, resolving string ingredients against the food catalog.

        Ingredient names without a catalog match are kept as bare items with
        ingestion defaults. Records that fail validation are skipped with a warning.
        """
        foods = foods if foods is not None else self.load_foods()
        by_name: Dict[str, FoodItem] = {}
        for food in foods:
            by_name.setdefault(food.name.strip().lower(), food)

        recipes = []
        for record in self.recipes_repo.find_all():
            try:
                ingredients = []
                for ing in record.get("ingredients") or []:
                    if isinstance(ing, dict):
                        name = str(ing.get("name") or "")
                        ingredients.append(by_name.get(name.strip().lower()) or FoodItem(**ing))
                    elif str(ing).strip():
                        ingredients.append(by_name.get(str(ing).strip().lower()) or FoodItem(name=str(ing).strip()))
                recipes.append(RecipeItem(**{**record, "ingredients": ingredients}))
            except PydanticValidationError as exc:
                logger.warning("Skipping recipe %s (%s): %s",
                               record.get("id"), record.get("name"), exc.errors()[0]["msg"])
        return recipes

    def search_foods(self, query: str, limit: int = 20) -> List[FoodItem]:
        """Return foods where any query term appears in a descriptive field."""
        terms = [t for t in (query or "").lower().split() if t]
        if not terms:
            return []
        out = []
        for food in self.load_foods():
            haystack = " ".join([
                food.name.lower(),
                _value(food.category),
                _value(food.rasa),
                _value(food.virya),
                " ".join(_value(g) for g in food.guna),
                " ".join(food.season),
                " ".join(food.region),
            ])
            if any(term in haystack for term in terms):
                out.append(food)
            if len(out) >= limit:
                break
        return out

    def filter_foods(self, category: Optional[str] = None, rasa: Optional[str] = None,
                     dosha: Optional[str] = None, effect: str = "decreases",
                     season: Optional[str] = None, region: Optional[str] = None,
                     min_calories: Optional[float] = None, max_calories: Optional[float] = None,
                     min_protein: Optional[float] = None, max_protein: Optional[float] = None,
                     sort_by: Optional[str] = None, limit: Optional[int] = None) -> List[FoodItem]:
        """Filter the catalog by attributes and nutrient bounds."""
        foods = self.load_foods()
        if category:
            foods = [f for f in foods if _value(f.category) == category]
        if rasa:
            foods = [f for f in foods if _value(f.rasa) == rasa]
        if dosha:
            foods = [f for f in foods if _value(getattr(f.dosha_impact, dosha, "")) == effect]
        if season:
            foods = [f for f in foods if season_matches(f.season, season)]
        if region:
            foods = [f for f in foods if region in f.region or "all" in f.region]
        if min_calories is not None:
            foods = [f for f in foods if f.calories >= min_calories]
        if max_calories is not None:
            foods = [f for f in foods if f.calories <= max_calories]
        if min_protein is not None:
            foods = [f for f in foods if f.protein >= min_protein]
        if max_protein is not None:
            foods = [f for f in foods if f.protein <= max_protein]
        if sort_by in SORT_KEYS:
            foods = sorted(foods, key=SORT_KEYS[sort_by])
        return foods[:limit] if limit else foods
