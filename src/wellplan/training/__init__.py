"""Training-plan skeleton synthesis."""

from wellplan.training.models import TrainingPlan, Workout, WorkoutTemplate
from wellplan.training.selector import (
    resolve_goal_type,
    substitute_exercise,
    synthesize_training_plan,
    training_plan_to_dict,
)

__all__ = [
    "TrainingPlan",
    "Workout",
    "WorkoutTemplate",
    "resolve_goal_type",
    "substitute_exercise",
    "synthesize_training_plan",
    "training_plan_to_dict",
]
