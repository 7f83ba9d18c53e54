"""Questionnaire response model.

A ``QuestionnaireResponse`` is produced once by the quiz UI and is the only
input of the plan engine. It is built from a JSON/YAML mapping with
``QuestionnaireResponse.from_dict``, which parses string-typed numbers
defensively and raises ``ValidationError`` naming the first bad field.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from wellplan.errors import ValidationError


# Valid values for enumerated fields
VALID_GENDERS = ("male", "female")
VALID_FITNESS_LEVELS = ("beginner", "intermediate", "advanced", "athletic")
VALID_WORKOUT_FREQUENCIES = ("1-2", "3-4", "5+")
VALID_WORKOUT_TIMES = ("morning", "afternoon", "evening")
VALID_WORKOUT_DURATIONS = ("15-30min", "30-60min", "60+min")
VALID_EQUIPMENT_ACCESS = ("none", "minimal", "home-gym", "full-gym")
VALID_DIETARY_PREFERENCES = (
    "omnivore",
    "vegetarian",
    "vegan",
    "pescatarian",
    "keto",
    "paleo",
    "mediterranean",
)
VALID_MEAL_FREQUENCIES = ("1-2", "3", "4-5", "6+")

# Lifestyle facets (small ordinal scales, all optional)
LIFESTYLE_FACETS: dict[str, tuple[str, ...]] = {
    "sleep_quality": ("poor", "fair", "good", "excellent"),
    "stress_level": ("low", "moderate", "high"),
    "energy_level": ("low", "moderate", "high"),
    "focus_level": ("poor", "average", "good"),
    "immunity_strength": ("weak", "average", "strong"),
    "recovery_rate": ("slow", "average", "fast"),
}

NUMERIC_FIELDS = (
    "age",
    "height_cm",
    "current_weight_kg",
    "target_weight_kg",
    "waist_cm",
)


def parse_number(name: str, value: Any) -> float:
    """Parse a numeric questionnaire field.

    Accepts ints, floats and numeric strings (the quiz UI sends text
    inputs). Booleans, empty strings and non-finite values are rejected.

    Args:
        name: Field name, reported in the error
        value: Raw value

    Returns:
        The parsed finite float

    Raises:
        ValidationError: If the value is missing or not a finite number
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(name, f"'{name}' is required and must be a number")

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError(name, f"'{name}' is required and must be a number")
        try:
            number = float(text)
        except ValueError:
            raise ValidationError(name, f"'{name}' is not a number: {value!r}")
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        raise ValidationError(name, f"'{name}' is not a number: {value!r}")

    if not math.isfinite(number):
        raise ValidationError(name, f"'{name}' must be a finite number, got {value!r}")

    return number


def _parse_choice(
    name: str,
    value: Any,
    choices: tuple[str, ...],
    default: Optional[str] = None,
    required: bool = False,
) -> Optional[str]:
    """Normalize an enumerated field and check it against its choices."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(name, f"'{name}' is required")
        return default

    text = str(value).strip().lower()
    if text not in choices:
        raise ValidationError(
            name, f"'{name}' must be one of {choices}, got {value!r}"
        )
    return text


def _parse_string_list(name: str, value: Any) -> tuple[str, ...]:
    """Parse a list of strings, accepting a comma-separated string."""
    if value is None:
        return ()
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        raise ValidationError(name, f"'{name}' must be a list of strings")

    result: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ValidationError(name, f"'{name}' must contain only strings")
        text = item.strip()
        if text and text not in result:
            result.append(text)
    return tuple(result)


@dataclass(frozen=True)
class QuestionnaireResponse:
    """Self-reported health questionnaire, as answered in the quiz."""

    age: int
    gender: str
    height_cm: float
    current_weight_kg: float
    target_weight_kg: float
    waist_cm: float
    fitness_level: str
    fitness_goals: tuple[str, ...] = ()
    workout_frequency: str = "1-2"
    preferred_workout_time: Optional[str] = None
    workout_duration: Optional[str] = None
    equipment_access: str = "none"
    previous_injuries: str = "none"
    dietary_preference: str = "omnivore"
    meal_frequency: str = "3"
    food_allergies: frozenset[str] = field(default_factory=frozenset)
    sleep_quality: Optional[str] = None
    stress_level: Optional[str] = None
    energy_level: Optional[str] = None
    focus_level: Optional[str] = None
    immunity_strength: Optional[str] = None
    recovery_rate: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionnaireResponse":
        """Build a response from a JSON/YAML mapping.

        Args:
            data: Mapping with the snake_case field names of this class

        Returns:
            QuestionnaireResponse

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValidationError("questionnaire", "Questionnaire must be a mapping")

        numbers = {name: parse_number(name, data.get(name)) for name in NUMERIC_FIELDS}

        injuries = data.get("previous_injuries")
        if injuries is None or not str(injuries).strip():
            injuries = "none"

        allergies = _parse_string_list("food_allergies", data.get("food_allergies"))

        facets = {
            name: _parse_choice(name, data.get(name), choices)
            for name, choices in LIFESTYLE_FACETS.items()
        }

        return cls(
            age=int(numbers["age"]),
            gender=_parse_choice(
                "gender", data.get("gender"), VALID_GENDERS, required=True
            ),
            height_cm=numbers["height_cm"],
            current_weight_kg=numbers["current_weight_kg"],
            target_weight_kg=numbers["target_weight_kg"],
            waist_cm=numbers["waist_cm"],
            fitness_level=_parse_choice(
                "fitness_level",
                data.get("fitness_level"),
                VALID_FITNESS_LEVELS,
                required=True,
            ),
            fitness_goals=_parse_string_list("fitness_goals", data.get("fitness_goals")),
            workout_frequency=_parse_choice(
                "workout_frequency",
                data.get("workout_frequency"),
                VALID_WORKOUT_FREQUENCIES,
                default="1-2",
            ),
            preferred_workout_time=_parse_choice(
                "preferred_workout_time",
                data.get("preferred_workout_time"),
                VALID_WORKOUT_TIMES,
            ),
            workout_duration=_parse_choice(
                "workout_duration",
                data.get("workout_duration"),
                VALID_WORKOUT_DURATIONS,
            ),
            equipment_access=_parse_choice(
                "equipment_access",
                data.get("equipment_access"),
                VALID_EQUIPMENT_ACCESS,
                default="none",
            ),
            previous_injuries=str(injuries).strip().lower(),
            dietary_preference=_parse_choice(
                "dietary_preference",
                data.get("dietary_preference"),
                VALID_DIETARY_PREFERENCES,
                default="omnivore",
            ),
            meal_frequency=_parse_choice(
                "meal_frequency",
                data.get("meal_frequency"),
                VALID_MEAL_FREQUENCIES,
                default="3",
            ),
            food_allergies=frozenset(a.lower() for a in allergies),
            **facets,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict (inverse of ``from_dict``)."""
        data: dict[str, Any] = {
            "age": self.age,
            "gender": self.gender,
            "height_cm": self.height_cm,
            "current_weight_kg": self.current_weight_kg,
            "target_weight_kg": self.target_weight_kg,
            "waist_cm": self.waist_cm,
            "fitness_level": self.fitness_level,
            "fitness_goals": list(self.fitness_goals),
            "workout_frequency": self.workout_frequency,
            "preferred_workout_time": self.preferred_workout_time,
            "workout_duration": self.workout_duration,
            "equipment_access": self.equipment_access,
            "previous_injuries": self.previous_injuries,
            "dietary_preference": self.dietary_preference,
            "meal_frequency": self.meal_frequency,
            "food_allergies": sorted(self.food_allergies),
        }
        for name in LIFESTYLE_FACETS:
            data[name] = getattr(self, name)
        return data
