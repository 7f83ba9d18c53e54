"""Meal-plan skeleton synthesis."""

from wellplan.meals.allocator import (
    MealPlan,
    MealSlot,
    filter_allergens,
    meal_plan_to_dict,
    synthesize_meal_plan,
)
from wellplan.meals.catalog import MealOption

__all__ = [
    "MealOption",
    "MealPlan",
    "MealSlot",
    "filter_allergens",
    "meal_plan_to_dict",
    "synthesize_meal_plan",
]
