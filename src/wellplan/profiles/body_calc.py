"""Body composition estimator for calorie and macro targets.

Estimates BMI, body-fat percentage (circumference method), lean and fat
mass, BMR, TDEE, a recommended calorie target, daily water intake and a
macronutrient split from questionnaire answers.

Uses the Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate. All values are rounded half-up so they
agree with what the quiz UI displays.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from wellplan.errors import ValidationError
from wellplan.quiz.models import QuestionnaireResponse

logger = logging.getLogger(__name__)


class Sex(Enum):
    """Biological sex for BMR and body-fat calculation."""
    MALE = "male"
    FEMALE = "female"


# Activity multipliers keyed by self-reported fitness level.
# "athletic" has no training template bucket of its own (the training
# synthesizer falls back to "advanced"); kept as a separate key here.
ACTIVITY_MULTIPLIERS = {
    "beginner": 1.2,
    "intermediate": 1.375,
    "advanced": 1.55,
    "athletic": 1.725,
}

# Circumference body-fat coefficients (C0, C1, C2):
# 495 / (C0 - C1*log10(waist) + C2*log10(height)) - 450
# The female variant normally also takes hip circumference, which the quiz
# does not ask for.
BODY_FAT_COEFFICIENTS = {
    Sex.MALE: (1.0324, 0.19077, 0.15456),
    Sex.FEMALE: (1.29579, 0.35004, 0.22100),
}

BODY_FAT_MIN = 4.0
BODY_FAT_MAX = 40.0

# Target body-fat % by (sex, losing weight)
TARGET_BODY_FAT = {
    (Sex.MALE, True): 15.0,
    (Sex.MALE, False): 20.0,
    (Sex.FEMALE, True): 22.0,
    (Sex.FEMALE, False): 28.0,
}

DEFICIT_CALORIES = -500
SURPLUS_CALORIES = 300
MIN_CALORIES = 1200

WATER_ML_PER_KG = 30

# Healthy BMI band used for the ideal weight range
IDEAL_BMI_RANGE = (18.5, 24.9)

# Upper bounds on quiz measurements (years, cm, kg)
MEASUREMENT_LIMITS = {
    "age": 150,
    "height_cm": 300,
    "waist_cm": 300,
    "current_weight_kg": 500,
    "target_weight_kg": 500,
}

# Macro percentages (protein, carbs, fat)
BASE_MACRO_SPLIT = (30, 40, 30)

# Goal overrides, checked in this order; the first goal present wins
GOAL_MACRO_SPLITS: tuple[tuple[str, tuple[int, int, int]], ...] = (
    ("build-muscle", (35, 45, 20)),
    ("lose-weight", (40, 30, 30)),
    ("increase-endurance", (25, 55, 20)),
)

KETO_MACRO_SPLIT = (30, 5, 65)

# Plant-based diets move up to 5 points from protein to carbs
PLANT_BASED_DIETS = ("vegan", "vegetarian")
PLANT_PROTEIN_SHIFT = 5
PLANT_PROTEIN_FLOOR = 25
PLANT_CARB_CAP = 60

CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward (172.5 -> 173, 57.5 -> 58).

    Python's built-in round() uses banker's rounding, which disagrees with
    the values shown in the UI.

    Args:
        value: Value to round
        digits: Number of decimal places

    Returns:
        Rounded value (float; use int() for digits=0)
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class MacroTarget:
    """Daily target for one macronutrient."""

    percentage: int
    grams: int
    calories: int


@dataclass(frozen=True)
class MacroSplit:
    """Protein/carbs/fat allocation of the daily calorie target."""

    protein: MacroTarget
    carbs: MacroTarget
    fat: MacroTarget

    @property
    def total_percentage(self) -> int:
        return self.protein.percentage + self.carbs.percentage + self.fat.percentage


@dataclass(frozen=True)
class BodyCompositionEstimate:
    """Estimated body composition and energy targets."""

    bmi: float
    bmi_category: str
    body_fat_pct: float
    lean_mass_kg: float
    fat_mass_kg: float
    target_body_fat_pct: float
    target_lean_mass_kg: float
    target_fat_mass_kg: float
    bmr: int                    # Basal Metabolic Rate
    tdee: int                   # Total Daily Energy Expenditure
    calorie_adjustment: int     # Calories above/below TDEE
    recommended_calories: int
    water_intake_l: float
    ideal_weight_min_kg: float
    ideal_weight_max_kg: float
    macro_split: MacroSplit

    def summary(self) -> str:
        """Human-readable summary of the estimate."""
        lines = [
            f"BMI: {self.bmi:.1f} ({self.bmi_category})",
            f"Body fat: {self.body_fat_pct:.1f}%",
            f"BMR: {self.bmr} kcal/day",
            f"TDEE: {self.tdee} kcal/day",
            f"Target: {self.recommended_calories} kcal/day "
            f"({self.calorie_adjustment:+d} from TDEE)",
            f"Water: {self.water_intake_l:.1f} L/day",
        ]
        return "\n".join(lines)


def _require_finite(name: str, value: float, positive: bool = True) -> float:
    """Check a numeric input before it reaches the formulas.

    Values must be finite and lie within (0, limit], or [0, limit] when
    ``positive`` is False. Limits come from MEASUREMENT_LIMITS.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(name, f"'{name}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(name, f"'{name}' must be a finite number, got {value!r}")
    if positive and value <= 0:
        raise ValidationError(name, f"'{name}' must be positive, got {value!r}")
    if value < 0:
        raise ValidationError(name, f"'{name}' must not be negative, got {value!r}")
    limit = MEASUREMENT_LIMITS.get(name)
    if limit is not None and value > limit:
        raise ValidationError(name, f"'{name}' must be at most {limit}, got {value!r}")
    return float(value)


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Calculate Body Mass Index (kg/m²)."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def classify_bmi(bmi: float) -> str:
    """Map a BMI value to its category label."""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def estimate_body_fat(sex: Sex, waist_cm: float, height_cm: float) -> float:
    """Estimate body-fat percentage with the circumference method.

    Args:
        sex: Biological sex (selects the coefficient set)
        waist_cm: Waist circumference in cm
        height_cm: Height in cm

    Returns:
        Body-fat percentage clamped to [4, 40]
    """
    c0, c1, c2 = BODY_FAT_COEFFICIENTS[sex]
    denominator = c0 - c1 * math.log10(waist_cm) + c2 * math.log10(height_cm)

    # The formula diverges at a zero denominator; clamp to the nearest bound
    if denominator == 0:
        return BODY_FAT_MAX
    if denominator < 0:
        return BODY_FAT_MIN

    raw = 495 / denominator - 450
    return max(BODY_FAT_MIN, min(BODY_FAT_MAX, raw))


def calculate_bmr(
    age: float,
    sex: Sex,
    height_cm: float,
    weight_kg: float,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        age: Age in years
        sex: Biological sex
        height_cm: Height in cm
        weight_kg: Weight in kg

    Returns:
        BMR in calories per day
    """
    if sex == Sex.MALE:
        bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + 5
    else:
        bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age) - 161

    return bmr


def calculate_tdee(bmr: float, fitness_level: str) -> int:
    """Calculate Total Daily Energy Expenditure.

    Args:
        bmr: Basal Metabolic Rate
        fitness_level: One of the ACTIVITY_MULTIPLIERS keys

    Returns:
        TDEE in calories per day
    """
    try:
        multiplier = ACTIVITY_MULTIPLIERS[fitness_level]
    except KeyError:
        raise ValidationError(
            "fitness_level",
            f"'fitness_level' must be one of {tuple(ACTIVITY_MULTIPLIERS)}, "
            f"got {fitness_level!r}",
        )
    return int(round_half_up(bmr * multiplier))


def calorie_adjustment(current_weight_kg: float, target_weight_kg: float) -> int:
    """Deficit when losing, surplus when gaining, zero at target."""
    if target_weight_kg < current_weight_kg:
        return DEFICIT_CALORIES
    if target_weight_kg > current_weight_kg:
        return SURPLUS_CALORIES
    return 0


def select_macro_percentages(
    fitness_goals: tuple[str, ...] | list[str],
    dietary_preference: str,
) -> tuple[int, int, int]:
    """Pick the (protein, carbs, fat) percentages for goals and diet.

    Goal overrides are checked in a fixed priority order, so the order of
    ``fitness_goals`` does not matter. Diet rules are applied afterwards.
    """
    protein, carbs, fat = BASE_MACRO_SPLIT
    for goal, split in GOAL_MACRO_SPLITS:
        if goal in fitness_goals:
            protein, carbs, fat = split
            break

    if dietary_preference == "keto":
        protein, carbs, fat = KETO_MACRO_SPLIT
    elif dietary_preference in PLANT_BASED_DIETS:
        # Shift only as far as both bounds allow so the total stays at 100
        shift = min(
            PLANT_PROTEIN_SHIFT,
            protein - PLANT_PROTEIN_FLOOR,
            PLANT_CARB_CAP - carbs,
        )
        shift = max(0, shift)
        protein -= shift
        carbs += shift

    return protein, carbs, fat


def calculate_macro_split(
    calories: float,
    percentages: tuple[int, int, int],
) -> MacroSplit:
    """Convert macro percentages into grams and calories.

    Each value is rounded independently, so grams and calories may
    disagree by one unit.
    """
    targets = {}
    for name, pct in zip(("protein", "carbs", "fat"), percentages):
        macro_calories = calories * pct / 100
        targets[name] = MacroTarget(
            percentage=pct,
            grams=int(round_half_up(macro_calories / CALORIES_PER_GRAM[name])),
            calories=int(round_half_up(macro_calories)),
        )
    return MacroSplit(**targets)


def estimate_body_composition(
    response: Optional[QuestionnaireResponse],
) -> Optional[BodyCompositionEstimate]:
    """Estimate body composition and energy targets from quiz answers.

    Args:
        response: Questionnaire answers, or None if the quiz was not taken

    Returns:
        BodyCompositionEstimate, or None when no answers are available

    Raises:
        ValidationError: If a numeric field is not a finite number or is
            outside its plausible range
    """
    if response is None:
        return None

    age = _require_finite("age", response.age, positive=False)
    height_cm = _require_finite("height_cm", response.height_cm)
    weight_kg = _require_finite("current_weight_kg", response.current_weight_kg)
    target_kg = _require_finite("target_weight_kg", response.target_weight_kg)
    waist_cm = _require_finite("waist_cm", response.waist_cm)

    try:
        sex = Sex(response.gender)
    except ValueError:
        raise ValidationError(
            "gender", f"'gender' must be 'male' or 'female', got {response.gender!r}"
        )

    # BMI
    bmi = calculate_bmi(weight_kg, height_cm)

    # Current composition
    body_fat_pct = estimate_body_fat(sex, waist_cm, height_cm)
    fat_mass_kg = body_fat_pct / 100 * weight_kg
    lean_mass_kg = weight_kg - fat_mass_kg

    # Target composition
    losing = target_kg < weight_kg
    target_body_fat_pct = TARGET_BODY_FAT[(sex, losing)]
    target_fat_mass_kg = target_body_fat_pct / 100 * target_kg
    target_lean_mass_kg = target_kg - target_fat_mass_kg

    # Energy
    bmr = int(round_half_up(calculate_bmr(age, sex, height_cm, weight_kg)))
    tdee = calculate_tdee(bmr, response.fitness_level)
    adjustment = calorie_adjustment(weight_kg, target_kg)
    recommended = max(MIN_CALORIES, int(round_half_up(tdee + adjustment)))

    water_l = round_half_up(WATER_ML_PER_KG * weight_kg / 1000, 1)

    height_m = height_cm / 100
    ideal_min = round_half_up(IDEAL_BMI_RANGE[0] * height_m * height_m, 1)
    ideal_max = round_half_up(IDEAL_BMI_RANGE[1] * height_m * height_m, 1)

    percentages = select_macro_percentages(
        response.fitness_goals, response.dietary_preference
    )
    macro_split = calculate_macro_split(recommended, percentages)

    logger.debug(
        "Body composition: bmi=%.2f body_fat=%.1f bmr=%d tdee=%d recommended=%d",
        bmi, body_fat_pct, bmr, tdee, recommended,
    )

    return BodyCompositionEstimate(
        bmi=round_half_up(bmi, 2),
        bmi_category=classify_bmi(bmi),
        body_fat_pct=round_half_up(body_fat_pct, 1),
        lean_mass_kg=round_half_up(lean_mass_kg, 1),
        fat_mass_kg=round_half_up(fat_mass_kg, 1),
        target_body_fat_pct=target_body_fat_pct,
        target_lean_mass_kg=round_half_up(target_lean_mass_kg, 1),
        target_fat_mass_kg=round_half_up(target_fat_mass_kg, 1),
        bmr=bmr,
        tdee=tdee,
        calorie_adjustment=adjustment,
        recommended_calories=recommended,
        water_intake_l=water_l,
        ideal_weight_min_kg=ideal_min,
        ideal_weight_max_kg=ideal_max,
        macro_split=macro_split,
    )


def macro_split_to_dict(split: MacroSplit) -> dict:
    """Convert a MacroSplit to dict for JSON output."""
    return {
        name: {
            "percentage": target.percentage,
            "grams": target.grams,
            "calories": target.calories,
        }
        for name, target in (
            ("protein", split.protein),
            ("carbs", split.carbs),
            ("fat", split.fat),
        )
    }


def estimate_to_dict(estimate: BodyCompositionEstimate) -> dict:
    """Convert BodyCompositionEstimate to dict for JSON output."""
    return {
        "bmi": estimate.bmi,
        "bmi_category": estimate.bmi_category,
        "body_fat_pct": estimate.body_fat_pct,
        "lean_mass_kg": estimate.lean_mass_kg,
        "fat_mass_kg": estimate.fat_mass_kg,
        "target_body_fat_pct": estimate.target_body_fat_pct,
        "target_lean_mass_kg": estimate.target_lean_mass_kg,
        "target_fat_mass_kg": estimate.target_fat_mass_kg,
        "bmr": estimate.bmr,
        "tdee": estimate.tdee,
        "calorie_adjustment": estimate.calorie_adjustment,
        "recommended_calories": estimate.recommended_calories,
        "water_intake_l": estimate.water_intake_l,
        "ideal_weight_range_kg": {
            "min": estimate.ideal_weight_min_kg,
            "max": estimate.ideal_weight_max_kg,
        },
        "macro_split": macro_split_to_dict(estimate.macro_split),
    }
