"""Meal slot allocation for a daily meal-plan skeleton.

Splits the recommended calorie target across ordered meal slots and fills
each slot with the first few diet-appropriate options that survive the
allergy filter. No randomization: identical inputs give identical plans.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from wellplan.errors import ValidationError
from wellplan.meals.catalog import ALLERGY_KEYWORDS, MealOption, get_meal_options
from wellplan.profiles.body_calc import (
    BodyCompositionEstimate,
    MacroSplit,
    macro_split_to_dict,
    round_half_up,
)

logger = logging.getLogger(__name__)


MEAL_FREQUENCY_COUNTS = {
    "1-2": 2,
    "3": 3,
    "4-5": 4,
    "6+": 5,
}

# (slot name, minimum meal count, percent of daily calories, catalog key).
# Percentages add up to 110 at five meals; kept that way for compatibility
# with plans already shown to users.
MEAL_SLOT_STRUCTURE: tuple[tuple[str, int, int, str], ...] = (
    ("Breakfast", 1, 25, "breakfast"),
    ("Lunch", 2, 35, "lunch"),
    ("Dinner", 3, 30, "dinner"),
    ("Snack", 4, 10, "snack"),
    ("Second Snack", 5, 10, "snack"),
)

OPTIONS_PER_SLOT = 3


@dataclass(frozen=True)
class MealSlot:
    """A meal slot with its calorie share and suggested options."""

    name: str
    calories: int
    options: tuple[MealOption, ...]


@dataclass(frozen=True)
class MealPlan:
    """Daily meal-plan skeleton."""

    diet_type: str
    calories_per_day: int
    macros: MacroSplit
    meal_count: int
    meal_slots: tuple[MealSlot, ...]

    @property
    def slot_names(self) -> list[str]:
        return [slot.name for slot in self.meal_slots]


def allergy_keywords(food_allergies: Iterable[str]) -> tuple[str, ...]:
    """Collect name keywords for the active allergies.

    Allergies without a keyword list (anything but nuts, dairy, eggs) are
    ignored.
    """
    active = {a.strip().lower() for a in food_allergies}
    keywords: list[str] = []
    for allergy, words in ALLERGY_KEYWORDS.items():
        if allergy in active:
            keywords.extend(words)
    return tuple(keywords)


def filter_allergens(
    options: Iterable[MealOption],
    food_allergies: Iterable[str],
) -> tuple[MealOption, ...]:
    """Drop options whose name contains a keyword of an active allergy.

    Args:
        options: Candidate options, in catalog order
        food_allergies: Allergy names from the questionnaire

    Returns:
        Surviving options, order preserved
    """
    keywords = allergy_keywords(food_allergies)
    if not keywords:
        return tuple(options)

    kept = []
    for option in options:
        name = option.name.lower()
        if any(keyword in name for keyword in keywords):
            logger.debug("Filtered meal option %r (allergy keyword)", option.name)
            continue
        kept.append(option)
    return tuple(kept)


def meal_count_for(meal_frequency: str) -> int:
    """Map a meal frequency answer to the number of meal slots."""
    try:
        return MEAL_FREQUENCY_COUNTS[meal_frequency]
    except KeyError:
        raise ValidationError(
            "meal_frequency",
            f"'meal_frequency' must be one of {tuple(MEAL_FREQUENCY_COUNTS)}, "
            f"got {meal_frequency!r}",
        )


def synthesize_meal_plan(
    estimate: Optional[BodyCompositionEstimate],
    dietary_preference: str,
    meal_frequency: str,
    food_allergies: Iterable[str] = (),
) -> Optional[MealPlan]:
    """Build the meal-plan skeleton for a body-composition estimate.

    Args:
        estimate: Output of the body composition estimator, or None
        dietary_preference: Diet whose option catalog is used
        meal_frequency: Questionnaire answer ("1-2", "3", "4-5", "6+")
        food_allergies: Allergy names; nuts, dairy and eggs are filtered

    Returns:
        MealPlan, or None when no estimate is available

    Raises:
        ValidationError: If the diet or meal frequency is unknown
    """
    if estimate is None:
        return None

    try:
        catalog = get_meal_options(dietary_preference)
    except KeyError:
        raise ValidationError(
            "dietary_preference",
            f"No meal catalog for dietary preference {dietary_preference!r}",
        )

    meal_count = meal_count_for(meal_frequency)
    allergies = tuple(food_allergies)
    calories = estimate.recommended_calories

    slots = []
    for name, min_count, percent, meal_type in MEAL_SLOT_STRUCTURE:
        if meal_count < min_count:
            break
        options = filter_allergens(catalog[meal_type], allergies)
        slots.append(
            MealSlot(
                name=name,
                calories=int(round_half_up(calories * percent / 100)),
                options=options[:OPTIONS_PER_SLOT],
            )
        )

    logger.debug(
        "Meal plan: diet=%s meals=%d slots=%s",
        dietary_preference, meal_count, [s.name for s in slots],
    )

    return MealPlan(
        diet_type=dietary_preference,
        calories_per_day=calories,
        macros=estimate.macro_split,
        meal_count=meal_count,
        meal_slots=tuple(slots),
    )


def meal_option_to_dict(option: MealOption) -> dict[str, Any]:
    return {
        "name": option.name,
        "protein_g": option.protein_g,
        "carbs_g": option.carbs_g,
        "fat_g": option.fat_g,
    }


def meal_plan_to_dict(plan: MealPlan) -> dict[str, Any]:
    """Convert a MealPlan to dict for JSON output."""
    return {
        "diet_type": plan.diet_type,
        "calories_per_day": plan.calories_per_day,
        "macros": macro_split_to_dict(plan.macros),
        "meal_count": plan.meal_count,
        "meal_slots": [
            {
                "name": slot.name,
                "calories": slot.calories,
                "options": [meal_option_to_dict(o) for o in slot.options],
            }
            for slot in plan.meal_slots
        ],
    }

