"""Built-in meal option catalogs for each dietary preference.

Each diet has breakfast, lunch, dinner and snack options annotated with
protein/carb/fat grams per serving. Order matters: the synthesizer keeps
the first options that survive the allergy filter.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MealOption:
    """One serving suggestion for a meal slot."""

    name: str
    protein_g: int
    carbs_g: int
    fat_g: int

    @property
    def calories(self) -> int:
        return self.protein_g * 4 + self.carbs_g * 4 + self.fat_g * 9


MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


def _options(*rows: tuple[str, int, int, int]) -> tuple[MealOption, ...]:
    """Build a tuple of options from (name, protein, carbs, fat) rows."""
    return tuple(MealOption(name, p, c, f) for name, p, c, f in rows)


# =============================================================================
# Omnivore
# =============================================================================

OMNIVORE_OPTIONS = {
    "breakfast": _options(
        ("Greek yogurt parfait with berries", 20, 35, 6),
        ("Scrambled eggs on whole-grain toast", 22, 28, 14),
        ("Cottage cheese with pineapple", 24, 20, 4),
        ("Oatmeal with banana and cinnamon", 10, 58, 5),
        ("Turkey sausage breakfast burrito", 26, 34, 14),
    ),
    "lunch": _options(
        ("Turkey and cheese whole-wheat wrap", 32, 38, 16),
        ("Grilled chicken salad with quinoa", 38, 30, 14),
        ("Beef and vegetable stir-fry with rice", 34, 52, 14),
        ("Tuna salad lettuce cups", 30, 8, 12),
    ),
    "dinner": _options(
        ("Baked salmon with sweet potato", 36, 40, 18),
        ("Chicken parmesan with zucchini noodles", 42, 18, 20),
        ("Lean steak with roasted vegetables", 40, 22, 20),
        ("Turkey chili with beans", 34, 36, 10),
    ),
    "snack": _options(
        ("Greek yogurt with honey", 15, 20, 3),
        ("Apple slices with peanut butter", 7, 25, 16),
        ("Hard-boiled eggs", 12, 1, 10),
        ("Hummus with carrot sticks", 5, 18, 8),
        ("Beef jerky", 15, 6, 2),
    ),
}


# =============================================================================
# Vegetarian (eggs and dairy allowed)
# =============================================================================

VEGETARIAN_OPTIONS = {
    "breakfast": _options(
        ("Veggie omelette with feta", 24, 8, 18),
        ("Greek yogurt bowl with granola", 20, 45, 8),
        ("Overnight oats with chia and berries", 12, 55, 10),
        ("Whole-grain toast with avocado", 9, 36, 16),
    ),
    "lunch": _options(
        ("Lentil soup with whole-grain bread", 22, 60, 6),
        ("Caprese quinoa salad with mozzarella", 20, 42, 16),
        ("Chickpea and spinach curry with rice", 18, 70, 12),
        ("Black bean burrito bowl", 20, 65, 12),
    ),
    "dinner": _options(
        ("Tofu and vegetable stir-fry", 24, 30, 14),
        ("Spinach and ricotta stuffed peppers", 22, 28, 16),
        ("Eggplant lasagna", 24, 36, 18),
        ("Bean and sweet potato chili", 18, 58, 6),
    ),
    "snack": _options(
        ("Cottage cheese with cucumber", 14, 6, 3),
        ("Trail mix with almonds", 6, 18, 14),
        ("Hummus with bell pepper strips", 5, 14, 8),
        ("Edamame", 11, 9, 5),
    ),
}


# =============================================================================
# Vegan
# =============================================================================

VEGAN_OPTIONS = {
    "breakfast": _options(
        ("Tofu scramble with spinach", 22, 10, 14),
        ("Overnight oats with chia and berries", 12, 55, 10),
        ("Peanut banana protein smoothie", 24, 45, 12),
        ("Whole-grain toast with avocado", 9, 36, 16),
    ),
    "lunch": _options(
        ("Lentil and vegetable soup", 20, 50, 4),
        ("Chickpea quinoa power bowl", 20, 62, 14),
        ("Tempeh and roasted vegetable wrap", 24, 42, 14),
        ("Black bean burrito bowl", 18, 65, 10),
    ),
    "dinner": _options(
        ("Tofu and broccoli stir-fry with brown rice", 24, 55, 14),
        ("Red lentil dal with basmati rice", 22, 70, 8),
        ("Stuffed peppers with quinoa and beans", 16, 55, 8),
        ("Seitan fajitas with peppers", 34, 36, 10),
    ),
    "snack": _options(
        ("Roasted chickpeas", 8, 22, 4),
        ("Almonds and dried apricots", 6, 20, 14),
        ("Hummus with carrot sticks", 5, 18, 8),
        ("Edamame", 11, 9, 5),
    ),
}


# =============================================================================
# Pescatarian
# =============================================================================

PESCATARIAN_OPTIONS = {
    "breakfast": _options(
        ("Smoked salmon and egg bagel", 26, 40, 14),
        ("Greek yogurt parfait with berries", 20, 35, 6),
        ("Oatmeal with walnuts and blueberries", 10, 50, 14),
        ("Whole-grain toast with avocado", 9, 36, 16),
    ),
    "lunch": _options(
        ("Tuna nicoise salad", 32, 20, 18),
        ("Shrimp and quinoa bowl", 30, 45, 10),
        ("Salmon poke bowl", 30, 55, 14),
        ("Lentil soup with whole-grain bread", 22, 60, 6),
    ),
    "dinner": _options(
        ("Baked cod with roasted potatoes", 34, 40, 8),
        ("Grilled salmon with asparagus", 36, 10, 20),
        ("Shrimp stir-fry with brown rice", 30, 55, 10),
        ("Tofu and vegetable curry", 22, 40, 14),
    ),
    "snack": _options(
        ("Tuna on rice cakes", 16, 14, 2),
        ("Cottage cheese with berries", 14, 12, 3),
        ("Mixed nuts", 6, 8, 18),
        ("Hummus with cucumber", 5, 12, 8),
    ),
}


# =============================================================================
# Keto (high fat, very low carb)
# =============================================================================

KETO_OPTIONS = {
    "breakfast": _options(
        ("Bacon and cheese omelette", 28, 2, 34),
        ("Avocado baked eggs", 14, 6, 26),
        ("Chia pudding with coconut cream", 6, 8, 24),
        ("Smoked salmon with cream cheese roll-ups", 18, 2, 20),
    ),
    "lunch": _options(
        ("Cobb salad with blue cheese", 34, 8, 38),
        ("Bunless burger with avocado", 32, 6, 36),
        ("Tuna-stuffed avocado", 26, 8, 28),
        ("Zucchini noodles with pesto chicken", 32, 10, 26),
    ),
    "dinner": _options(
        ("Ribeye steak with garlic butter", 44, 2, 40),
        ("Salmon with creamed spinach", 36, 6, 34),
        ("Pork chops with cauliflower mash", 36, 10, 28),
        ("Chicken thighs with roasted broccoli", 34, 8, 26),
    ),
    "snack": _options(
        ("Cheese crisps", 10, 1, 12),
        ("Macadamia nuts", 2, 4, 22),
        ("Celery with almond butter", 4, 6, 16),
        ("Pork rinds", 9, 0, 5),
    ),
}


# =============================================================================
# Paleo
# =============================================================================

PALEO_OPTIONS = {
    "breakfast": _options(
        ("Sweet potato hash with eggs", 18, 30, 16),
        ("Banana almond flour pancakes", 12, 36, 18),
        ("Turkey and vegetable breakfast skillet", 28, 14, 14),
        ("Berry coconut smoothie bowl", 6, 40, 16),
    ),
    "lunch": _options(
        ("Grilled chicken with mixed greens and olive oil", 38, 12, 18),
        ("Salmon salad with avocado", 32, 10, 26),
        ("Beef lettuce wraps", 30, 10, 20),
        ("Shrimp and mango salad", 26, 28, 10),
    ),
    "dinner": _options(
        ("Grass-fed steak with roasted root vegetables", 40, 30, 20),
        ("Baked chicken with butternut squash", 36, 34, 12),
        ("Pork tenderloin with apples and Brussels sprouts", 36, 28, 12),
        ("Cod with sweet potato fries", 32, 40, 10),
    ),
    "snack": _options(
        ("Apple slices with almond butter", 5, 25, 16),
        ("Beef jerky", 15, 6, 2),
        ("Hard-boiled eggs", 12, 1, 10),
        ("Carrot sticks with guacamole", 3, 18, 14),
    ),
}


# =============================================================================
# Mediterranean
# =============================================================================

MEDITERRANEAN_OPTIONS = {
    "breakfast": _options(
        ("Greek yogurt with honey and walnuts", 20, 30, 12),
        ("Shakshuka with whole-grain pita", 20, 34, 14),
        ("Whole-grain toast with tomato and olive oil", 8, 36, 12),
        ("Fruit and oat bowl with figs", 8, 60, 6),
    ),
    "lunch": _options(
        ("Greek salad with chickpeas and feta", 20, 34, 20),
        ("Grilled chicken pita with tzatziki", 34, 40, 12),
        ("Lentil and vegetable soup", 20, 50, 4),
        ("Tuna and white bean salad", 30, 30, 12),
    ),
    "dinner": _options(
        ("Grilled fish with couscous and vegetables", 34, 44, 12),
        ("Chicken souvlaki with roasted vegetables", 38, 26, 14),
        ("Whole-wheat pasta with tomatoes and spinach", 18, 70, 10),
        ("Baked salmon with quinoa tabbouleh", 36, 40, 18),
    ),
    "snack": _options(
        ("Hummus with cucumber", 5, 12, 8),
        ("Olives and almonds", 4, 6, 20),
        ("Fresh fruit with Greek yogurt", 12, 24, 3),
        ("Roasted chickpeas", 8, 22, 4),
    ),
}


DIET_MEAL_OPTIONS: dict[str, dict[str, tuple[MealOption, ...]]] = {
    "omnivore": OMNIVORE_OPTIONS,
    "vegetarian": VEGETARIAN_OPTIONS,
    "vegan": VEGAN_OPTIONS,
    "pescatarian": PESCATARIAN_OPTIONS,
    "keto": KETO_OPTIONS,
    "paleo": PALEO_OPTIONS,
    "mediterranean": MEDITERRANEAN_OPTIONS,
}


# Allergy -> name keywords (naive substring match on lowercased names).
# This is a keyword heuristic, not an allergen database: "peanut butter"
# trips the dairy filter and "eggplant" trips the eggs filter.
ALLERGY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "nuts": (
        "nuts",
        "almond",
        "walnut",
        "peanut",
        "cashew",
        "pecan",
        "pistachio",
        "macadamia",
        "hazelnut",
        "trail mix",
    ),
    "dairy": (
        "yogurt",
        "cheese",
        "cottage",
        "milk",
        "cream",
        "butter",
        "feta",
        "mozzarella",
        "ricotta",
        "parmesan",
        "tzatziki",
    ),
    "eggs": (
        "egg",
        "omelette",
        "shakshuka",
        "frittata",
    ),
}


def list_diets() -> list[str]:
    """List all diets with a built-in catalog."""
    return list(DIET_MEAL_OPTIONS.keys())


def get_meal_options(diet: str) -> dict[str, tuple[MealOption, ...]]:
    """Get the option catalog for a diet.

    Args:
        diet: Dietary preference (e.g. "vegan")

    Returns:
        Dict mapping meal type to its ordered options

    Raises:
        KeyError: If no catalog exists for the diet
    """
    if diet not in DIET_MEAL_OPTIONS:
        raise KeyError(f"Unknown diet: {diet}")
    return DIET_MEAL_OPTIONS[diet]
