"""Training-plan synthesis from the workout template matrix.

Picks one template by goal type and level, swaps equipment exercises for
bodyweight ones when the user trains without equipment, marks workouts
for users with injuries and keeps as many workouts as the requested
frequency allows.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from wellplan.errors import ValidationError
from wellplan.quiz.models import QuestionnaireResponse
from wellplan.training.definitions import get_template
from wellplan.training.models import TrainingPlan, Workout, WorkoutTemplate

logger = logging.getLogger(__name__)


# Goal priority, highest first; independent of the order the user picked
GOAL_PRIORITY = (
    "lose-weight",
    "build-muscle",
    "increase-endurance",
    "improve-flexibility",
)
DEFAULT_GOAL_TYPE = "general-fitness"

# "athletic" has an activity multiplier but no template bucket of its own
LEVEL_BUCKETS = {
    "beginner": "beginner",
    "intermediate": "intermediate",
    "advanced": "advanced",
    "athletic": "advanced",
}

FREQUENCY_DAYS = {
    "1-2": 2,
    "3-4": 4,
    "5+": 5,
}

TRAINING_TYPES = {
    "lose-weight": "cardio_strength",
    "build-muscle": "strength",
    "increase-endurance": "endurance",
    "improve-flexibility": "mobility",
    "general-fitness": "balanced",
}

# goal type -> (plan name, description)
PLAN_TITLES = {
    "lose-weight": (
        "Weight Loss Training Plan",
        "High-intensity cardio combined with strength training for weight loss",
    ),
    "build-muscle": (
        "Muscle Building Plan",
        "Progressive resistance training focused on muscle hypertrophy",
    ),
    "increase-endurance": (
        "Endurance Training Plan",
        "Steady-state and interval cardio to build aerobic capacity",
    ),
    "improve-flexibility": (
        "Flexibility & Mobility Plan",
        "Yoga, stretching and mobility work to improve range of motion",
    ),
    "general-fitness": (
        "Personalized Training Plan",
        "Training plan based on your Wellness Quiz answers",
    ),
}

# Equipment access levels that get bodyweight substitutions
NO_EQUIPMENT_ACCESS = frozenset({"none", "minimal"})

EQUIPMENT_KEYWORDS = ("barbell", "dumbbell", "kettlebell", "machine")

# (keyword, replacement), first match wins
SUBSTITUTION_RULES: tuple[tuple[str, str], ...] = (
    ("squat", "Bodyweight squats"),
    ("press", "Push-ups"),
    ("row", "Resistance band rows"),
    ("curl", "Bodyweight curls"),
    ("deadlift", "Glute bridges"),
)
FALLBACK_SUBSTITUTE = "Bodyweight alternative"

MODIFIED_SUFFIX = " (Modified)"
INJURY_NOTE = (
    "Reduce intensity and range of motion as needed and stop any exercise "
    "that causes pain."
)

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

DEFAULT_PREFERRED_TIME = "morning"


def resolve_goal_type(fitness_goals: Iterable[str]) -> str:
    """Resolve the template goal type from the user's goal list.

    Args:
        fitness_goals: Goal ids in any order

    Returns:
        Highest-priority known goal, or "general-fitness"
    """
    goals = set(fitness_goals)
    for goal in GOAL_PRIORITY:
        if goal in goals:
            return goal
    return DEFAULT_GOAL_TYPE


def resolve_level(fitness_level: str) -> str:
    """Map a fitness level to its template bucket."""
    try:
        return LEVEL_BUCKETS[fitness_level]
    except KeyError:
        raise ValidationError(
            "fitness_level",
            f"'fitness_level' must be one of {tuple(LEVEL_BUCKETS)}, "
            f"got {fitness_level!r}",
        )


def days_per_week_for(workout_frequency: str) -> int:
    """Map a workout frequency answer to requested training days."""
    try:
        return FREQUENCY_DAYS[workout_frequency]
    except KeyError:
        raise ValidationError(
            "workout_frequency",
            f"'workout_frequency' must be one of {tuple(FREQUENCY_DAYS)}, "
            f"got {workout_frequency!r}",
        )


def needs_equipment(exercise: str) -> bool:
    """Check whether an exercise mentions gym equipment."""
    text = exercise.lower()
    return any(keyword in text for keyword in EQUIPMENT_KEYWORDS)


def substitute_exercise(exercise: str) -> str:
    """Swap an equipment exercise for a bodyweight one.

    Exercises without equipment keywords are returned unchanged.

    Args:
        exercise: Exercise description

    Returns:
        Replacement from the first matching rule, or the exercise itself
    """
    if not needs_equipment(exercise):
        return exercise

    text = exercise.lower()
    for keyword, replacement in SUBSTITUTION_RULES:
        if keyword in text:
            return replacement
    return FALLBACK_SUBSTITUTE


def _schedule_workout(
    template: WorkoutTemplate,
    day: str,
    substitute: bool,
    injured: bool,
) -> Workout:
    exercises = template.exercises
    if substitute:
        exercises = tuple(substitute_exercise(e) for e in exercises)

    if injured:
        return Workout(
            day=day,
            name=template.name + MODIFIED_SUFFIX,
            exercises=exercises,
            note=INJURY_NOTE,
        )
    return Workout(day=day, name=template.name, exercises=exercises)


def has_injury(previous_injuries: Optional[str]) -> bool:
    """Anything but an empty answer or "none" counts as an injury."""
    if previous_injuries is None:
        return False
    text = previous_injuries.strip().lower()
    return bool(text) and text != "none"


def synthesize_training_plan(
    response: Optional[QuestionnaireResponse],
) -> Optional[TrainingPlan]:
    """Build the weekly training-plan skeleton for quiz answers.

    Args:
        response: Questionnaire answers, or None if the quiz was not taken

    Returns:
        TrainingPlan, or None when no answers are available

    Raises:
        ValidationError: If fitness level or workout frequency is unknown
    """
    if response is None:
        return None

    goal_type = resolve_goal_type(response.fitness_goals)
    level = resolve_level(response.fitness_level)
    requested_days = days_per_week_for(response.workout_frequency)
    template = get_template(goal_type, level)

    substitute = response.equipment_access in NO_EQUIPMENT_ACCESS
    injured = has_injury(response.previous_injuries)

    # Short templates are not repeated to fill the requested days
    kept = template[: min(requested_days, len(template))]
    workouts = tuple(
        _schedule_workout(workout, WEEKDAYS[i], substitute, injured)
        for i, workout in enumerate(kept)
    )

    name, description = PLAN_TITLES[goal_type]
    injury_note = None
    if injured:
        injury = response.previous_injuries.strip()
        description += f" (Modified for {injury} considerations)"
        injury_note = (
            f"Workouts are modified for your reported injury "
            f"({response.previous_injuries}). {INJURY_NOTE}"
        )

    logger.debug(
        "Training plan: goal=%s level=%s requested=%d scheduled=%d substitute=%s",
        goal_type, level, requested_days, len(workouts), substitute,
    )

    return TrainingPlan(
        goal=goal_type,
        name=name,
        description=description,
        level=level,
        days_per_week=len(workouts),
        training_type=TRAINING_TYPES[goal_type],
        location="gym" if response.equipment_access == "full-gym" else "home",
        equipment_level=response.equipment_access,
        preferred_time=response.preferred_workout_time or DEFAULT_PREFERRED_TIME,
        injury_note=injury_note,
        workouts=workouts,
    )


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    data: dict[str, Any] = {
        "day": workout.day,
        "name": workout.name,
        "exercises": list(workout.exercises),
    }
    if workout.note is not None:
        data["note"] = workout.note
    return data


def training_plan_to_dict(plan: TrainingPlan) -> dict[str, Any]:
    """Convert a TrainingPlan to dict for JSON output."""
    return {
        "goal": plan.goal,
        "name": plan.name,
        "description": plan.description,
        "level": plan.level,
        "days_per_week": plan.days_per_week,
        "training_type": plan.training_type,
        "location": plan.location,
        "equipment_level": plan.equipment_level,
        "preferred_time": plan.preferred_time,
        "injury_note": plan.injury_note,
        "workouts": [workout_to_dict(w) for w in plan.workouts],
    }

