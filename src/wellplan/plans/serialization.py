"""Serialization of plan bundles and questionnaire files.

The aggregate written to the profile store (and printed by ``--json``)
has four camelCase top-level keys, matching what the app's screens read:
``bodyComposition``, ``mealPlan``, ``trainingPlan`` and
``supplementRecommendations``. Nested fields keep the snake_case names of
the dataclasses.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from wellplan.errors import UnavailableInputError, ValidationError
from wellplan.meals.allocator import meal_plan_to_dict
from wellplan.profiles.body_calc import estimate_to_dict
from wellplan.quiz.models import QuestionnaireResponse
from wellplan.supplements.recommender import recommendation_to_dict
from wellplan.training.selector import training_plan_to_dict

if TYPE_CHECKING:
    from wellplan.plans.orchestrator import PlanBundle


SECTION_KEYS = (
    "bodyComposition",
    "mealPlan",
    "trainingPlan",
    "supplementRecommendations",
)


def bundle_to_dict(bundle: "PlanBundle") -> dict[str, Any]:
    """Convert a PlanBundle to the JSON aggregate.

    Absent sections are None; recommendations are always a list.

    Args:
        bundle: Plans to serialize

    Returns:
        JSON-serializable dict keyed by SECTION_KEYS
    """
    body = bundle.body_composition
    meals = bundle.meal_plan
    training = bundle.training_plan

    return {
        "bodyComposition": estimate_to_dict(body) if body is not None else None,
        "mealPlan": meal_plan_to_dict(meals) if meals is not None else None,
        "trainingPlan": training_plan_to_dict(training) if training is not None else None,
        "supplementRecommendations": [
            recommendation_to_dict(r) for r in bundle.supplement_recommendations
        ],
    }


def load_questionnaire_file(path: Path) -> QuestionnaireResponse:
    """Load a questionnaire from a JSON or YAML file.

    JSON is valid YAML, so both go through ``yaml.safe_load``.

    Args:
        path: Path to the questionnaire file

    Returns:
        QuestionnaireResponse

    Raises:
        UnavailableInputError: If the file is missing or empty
        ValidationError: If the content is not a valid questionnaire
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise UnavailableInputError(f"Questionnaire file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError("questionnaire", f"Could not parse {path}: {e}")

    if not data:
        raise UnavailableInputError(f"Questionnaire file is empty: {path}")

    return QuestionnaireResponse.from_dict(data)
