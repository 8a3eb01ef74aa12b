"""Greedy meal composer.

Walks a ranked food list once and fills one meal slot up to its calorie
target with a 20% overshoot tolerance. The running total counts
quantity-adjusted calories, so a slot's `total_calories` never exceeds
`target * 1.2`.
"""

from typing import Iterable

from schemas.food_schema import FoodItem
from schemas.plan_schema import MealItem, MealSlot

OVERSHOOT_TOLERANCE = 1.2
DEFAULT_MAX_ITEMS = 4
MAX_SERVINGS = 1.5


def calculate_quantity(food: FoodItem, remaining_calories: float) -> float:
    """Bucket remaining/food calories into 0.5, 0.75, 1.0 or 1.5 servings."""
    if food.calories <= 0:
        return 1.0
    ratio = min(remaining_calories / food.calories, MAX_SERVINGS)
    if ratio < 0.5:
        return 0.5
    if ratio < 1:
        return 0.75
    if ratio < 1.5:
        return 1.0
    return MAX_SERVINGS


def compose_meal(ranked_foods: Iterable[FoodItem], target_calories: float,
                 max_items: int = DEFAULT_MAX_ITEMS) -> MealSlot:
    """Select up to `max_items` foods for one slot.

    A food is accepted while `running + food.calories <= target * 1.2`.
    An empty input yields an empty slot; callers attach the warning.
    """
    limit = target_calories * OVERSHOOT_TOLERANCE
    items = []
    running = 0.0
    for food in ranked_foods:
        if len(items) >= max_items:
            break
        if running + food.calories > limit:
            continue
        quantity = calculate_quantity(food, target_calories - running)
        items.append(MealItem(food=food, quantity=quantity))
        running += food.calories * quantity
    return MealSlot(
        items=items,
        total_calories=round(running, 2),
        target_calories=round(target_calories, 2),
    )
