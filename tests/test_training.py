"""Tests for training-plan synthesis."""

from __future__ import annotations

import pytest

from conftest import make_response
from wellplan.errors import ValidationError
from wellplan.training.definitions import GOAL_TYPES, LEVELS, TEMPLATE_MATRIX, get_template
from wellplan.training.selector import (
    FALLBACK_SUBSTITUTE,
    FREQUENCY_DAYS,
    INJURY_NOTE,
    MODIFIED_SUFFIX,
    PLAN_TITLES,
    WEEKDAYS,
    has_injury,
    resolve_goal_type,
    resolve_level,
    substitute_exercise,
    synthesize_training_plan,
    training_plan_to_dict,
)

GOAL_ANSWERS = {
    "lose-weight": ["lose-weight"],
    "build-muscle": ["build-muscle"],
    "increase-endurance": ["increase-endurance"],
    "improve-flexibility": ["improve-flexibility"],
    "general-fitness": [],
}


class TestTemplateMatrix:
    """Tests for the built-in template matrix."""

    def test_every_goal_and_level_present(self):
        for goal in GOAL_TYPES:
            for level in LEVELS:
                assert len(TEMPLATE_MATRIX[(goal, level)]) >= 3

    def test_unknown_combination(self):
        with pytest.raises(KeyError):
            get_template("build-muscle", "athletic")

    def test_workouts_have_exercises(self):
        for templates in TEMPLATE_MATRIX.values():
            for workout in templates:
                assert workout.name
                assert workout.exercises


class TestResolution:
    """Tests for goal and level resolution."""

    def test_goal_priority(self):
        assert resolve_goal_type(["build-muscle", "lose-weight"]) == "lose-weight"
        assert resolve_goal_type(["improve-flexibility", "increase-endurance"]) == (
            "increase-endurance"
        )

    def test_goal_fallback(self):
        assert resolve_goal_type([]) == "general-fitness"
        assert resolve_goal_type(["better-posture"]) == "general-fitness"

    def test_athletic_uses_advanced_templates(self):
        # No template bucket exists for "athletic"; candidate for
        # product-level revision.
        assert resolve_level("athletic") == "advanced"
        plan = synthesize_training_plan(
            make_response(fitness_level="athletic", fitness_goals=["build-muscle"],
                          workout_frequency="5+")
        )
        assert plan.level == "advanced"
        assert plan.workouts[0].name == "Push Day"

    def test_unknown_level(self):
        with pytest.raises(ValidationError):
            resolve_level("elite")


class TestSubstitution:
    """Tests for equipment substitution."""

    @pytest.mark.parametrize(
        "exercise,replacement",
        [
            ("Barbell back squats", "Bodyweight squats"),
            ("Barbell bench press", "Push-ups"),
            ("Barbell bent-over rows", "Resistance band rows"),
            ("Dumbbell curls", "Bodyweight curls"),
            ("Barbell deadlifts", "Glute bridges"),
            ("Cable machine flyes", FALLBACK_SUBSTITUTE),
        ],
    )
    def test_rules(self, exercise, replacement):
        assert substitute_exercise(exercise) == replacement

    def test_first_rule_wins(self):
        # "squat" is checked before "press"
        assert substitute_exercise("Dumbbell squat to press") == "Bodyweight squats"

    def test_bodyweight_exercise_unchanged(self):
        assert substitute_exercise("Walking lunges") == "Walking lunges"
        assert substitute_exercise("Leg press") == "Leg press"


class TestInjury:
    """Tests for injury detection."""

    @pytest.mark.parametrize("answer", [None, "", "  ", "none", "None"])
    def test_no_injury(self, answer):
        assert not has_injury(answer)

    def test_injury(self):
        assert has_injury("lower back")


class TestSynthesizeTrainingPlan:
    """Tests for the full training-plan skeleton."""

    def test_no_answers(self):
        assert synthesize_training_plan(None) is None

    def test_base_answers(self, base_response):
        plan = synthesize_training_plan(base_response)

        assert plan.goal == "general-fitness"
        assert plan.level == "intermediate"
        assert plan.training_type == "balanced"
        assert plan.location == "gym"
        assert plan.equipment_level == "full-gym"
        assert plan.preferred_time == "evening"
        assert plan.name == "Personalized Training Plan"
        assert plan.description == "Training plan based on your Wellness Quiz answers"
        assert plan.injury_note is None
        assert plan.days_per_week == len(plan.workouts) == 4
        assert [w.day for w in plan.workouts] == list(WEEKDAYS[:4])

    @pytest.mark.parametrize("goal", GOAL_TYPES)
    @pytest.mark.parametrize("level", ["beginner", "intermediate", "advanced", "athletic"])
    @pytest.mark.parametrize("frequency", list(FREQUENCY_DAYS))
    def test_workouts_trimmed_to_frequency(self, goal, level, frequency):
        response = make_response(
            fitness_goals=GOAL_ANSWERS[goal],
            fitness_level=level,
            workout_frequency=frequency,
        )
        plan = synthesize_training_plan(response)
        template = get_template(goal, resolve_level(level))

        assert len(plan.workouts) == min(FREQUENCY_DAYS[frequency], len(template))
        assert plan.days_per_week == len(plan.workouts)

    def test_short_template_not_cycled(self):
        # Five days requested, three-workout template: three workouts are
        # scheduled and nothing repeats; candidate for product-level revision.
        response = make_response(
            fitness_goals=["improve-flexibility"],
            fitness_level="beginner",
            workout_frequency="5+",
        )
        plan = synthesize_training_plan(response)
        assert len(plan.workouts) == 3
        assert len({w.name for w in plan.workouts}) == 3

    def test_no_equipment_substitutes(self):
        response = make_response(
            fitness_goals=["build-muscle"],
            fitness_level="advanced",
            workout_frequency="5+",
            equipment_access="none",
        )
        plan = synthesize_training_plan(response)

        assert plan.location == "home"
        assert plan.workouts[0].exercises == (
            "Push-ups",
            "Push-ups",
            "Push-ups",
            FALLBACK_SUBSTITUTE,
            "Tricep dips",
        )
        assert plan.workouts[1].exercises[0] == "Glute bridges"

    def test_home_gym_keeps_equipment(self):
        response = make_response(
            fitness_goals=["build-muscle"], fitness_level="advanced", equipment_access="home-gym"
        )
        plan = synthesize_training_plan(response)
        assert plan.location == "home"
        assert plan.workouts[0].exercises[0] == "Barbell bench press"

    def test_injury_marks_every_workout(self):
        # Injury handling is the same for every exercise and body part;
        # candidate for product-level revision.
        response = make_response(previous_injuries="Left knee")
        plan = synthesize_training_plan(response)

        assert all(w.name.endswith(MODIFIED_SUFFIX) for w in plan.workouts)
        assert all(w.note == INJURY_NOTE for w in plan.workouts)
        assert "left knee" in plan.injury_note

    def test_plan_names_follow_goal(self):
        response = make_response(fitness_goals=["build-muscle", "lose-weight"])
        plan = synthesize_training_plan(response)
        assert plan.name == "Weight Loss Training Plan"
        assert plan.description == (
            "High-intensity cardio combined with strength training for weight loss"
        )

    @pytest.mark.parametrize("goal", GOAL_TYPES)
    def test_every_goal_has_title(self, goal):
        plan = synthesize_training_plan(make_response(fitness_goals=GOAL_ANSWERS[goal]))
        assert (plan.name, plan.description) == PLAN_TITLES[goal]

    def test_injury_extends_description(self):
        plan = synthesize_training_plan(
            make_response(fitness_goals=["build-muscle"], previous_injuries="lower back")
        )
        assert plan.name == "Muscle Building Plan"
        assert plan.description == (
            "Progressive resistance training focused on muscle hypertrophy "
            "(Modified for lower back considerations)"
        )

    def test_injury_keeps_exercises(self, base_response):
        healthy = synthesize_training_plan(base_response)
        injured = synthesize_training_plan(make_response(previous_injuries="shoulder"))
        assert [w.exercises for w in injured.workouts] == [
            w.exercises for w in healthy.workouts
        ]

    def test_default_preferred_time(self):
        plan = synthesize_training_plan(make_response(preferred_workout_time=None))
        assert plan.preferred_time == "morning"

    def test_to_dict(self):
        plan = synthesize_training_plan(make_response(previous_injuries="wrist"))
        data = training_plan_to_dict(plan)

        assert data["days_per_week"] == len(data["workouts"])
        assert data["workouts"][0]["day"] == "Monday"
        assert data["workouts"][0]["note"] == INJURY_NOTE
        assert data["name"] == plan.name
        assert data["description"].endswith("(Modified for wrist considerations)")

    def test_to_dict_omits_note_without_injury(self, base_response):
        data = training_plan_to_dict(synthesize_training_plan(base_response))
        assert "note" not in data["workouts"][0]
        assert data["injury_note"] is None
