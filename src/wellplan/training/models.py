"""Data models for training-plan synthesis.

A template is a fixed, ordered list of workouts for one goal type and
level. The selector copies the leading workouts of a template into a
``TrainingPlan``, applying equipment substitution and injury notes on the
way. Everything here is frozen so a plan can be shared safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WorkoutTemplate:
    """A workout as stored in the template matrix.

    Attributes:
        name: Workout name (e.g., "Push Day")
        exercises: Ordered exercise descriptions
    """

    name: str
    exercises: tuple[str, ...]


@dataclass(frozen=True)
class Workout:
    """A scheduled workout in a training plan.

    Attributes:
        day: Weekday label ("Monday", ...)
        name: Workout name, suffixed with " (Modified)" for injuries
        exercises: Ordered exercise descriptions after substitution
        note: Caution note when the user reported an injury
    """

    day: str
    name: str
    exercises: tuple[str, ...]
    note: Optional[str] = None


@dataclass(frozen=True)
class TrainingPlan:
    """Weekly training-plan skeleton.

    Attributes:
        goal: Resolved goal type (e.g., "build-muscle", "general-fitness")
        name: Plan title for the goal type (e.g., "Muscle Building Plan")
        description: One-line summary, noting injury modifications
        level: Template level bucket (beginner, intermediate, advanced)
        days_per_week: Number of workouts actually scheduled
        training_type: Training style for the goal type
        location: "gym" or "home"
        equipment_level: Equipment access answer
        preferred_time: Preferred workout time of day
        injury_note: Plan-level caution, None without injuries
        workouts: Scheduled workouts in weekday order
    """

    goal: str
    name: str
    description: str
    level: str
    days_per_week: int
    training_type: str
    location: str
    equipment_level: str
    preferred_time: str
    injury_note: Optional[str]
    workouts: tuple[Workout, ...]
