"""Built-in workout templates for each goal type and level.

Templates are plain data: the selector never branches on a template's
contents beyond the keyword rules in ``selector``. Template lengths vary
on purpose; a plan is never longer than its template.
"""

from __future__ import annotations

from wellplan.training.models import WorkoutTemplate


LEVELS = ("beginner", "intermediate", "advanced")

GOAL_TYPES = (
    "lose-weight",
    "build-muscle",
    "increase-endurance",
    "improve-flexibility",
    "general-fitness",
)


def _workout(name: str, *exercises: str) -> WorkoutTemplate:
    """Create a workout template from its exercises."""
    return WorkoutTemplate(name=name, exercises=tuple(exercises))


# =============================================================================
# Reusable workouts
# =============================================================================

HIIT_CARDIO_CORE = _workout(
    "HIIT Cardio & Core",
    "Jumping jacks",
    "Mountain climbers",
    "Burpees",
    "Plank",
    "Russian twists",
)

LOWER_BODY_BASICS = _workout(
    "Lower Body Strength",
    "Bodyweight squats",
    "Walking lunges",
    "Glute bridges",
    "Calf raises",
    "Wall sit",
)

UPPER_BODY_CIRCUIT = _workout(
    "Upper Body Circuit",
    "Push-ups",
    "Tricep dips",
    "Superman back extensions",
    "Plank to push-up",
    "Arm circles",
)

CARDIO_ENDURANCE = _workout(
    "Cardio Endurance",
    "Jogging 20-30 minutes",
    "Jump rope",
    "High knees",
    "Butt kicks",
)

MORNING_FLOW = _workout(
    "Morning Flow",
    "Sun salutations",
    "Cat-cow stretch",
    "Downward dog",
    "Child's pose",
    "Seated forward fold",
)

MOBILITY_STRETCH = _workout(
    "Mobility & Stretch",
    "Hip circles",
    "World's greatest stretch",
    "Thoracic rotations",
    "Hamstring stretch",
    "Foam rolling",
)

ACTIVE_RECOVERY = _workout(
    "Active Recovery",
    "Brisk walk 30 minutes",
    "Foam rolling",
    "Light stretching",
)


# =============================================================================
# Lose weight (cardio + strength)
# =============================================================================

LOSE_WEIGHT_TEMPLATES = {
    "beginner": (
        HIIT_CARDIO_CORE,
        LOWER_BODY_BASICS,
        UPPER_BODY_CIRCUIT,
    ),
    "intermediate": (
        _workout(
            "Full Body Burn",
            "Kettlebell swings",
            "Dumbbell goblet squats",
            "Push-ups",
            "Mountain climbers",
        ),
        CARDIO_ENDURANCE,
        _workout(
            "Metabolic Circuit",
            "Dumbbell thrusters",
            "Dumbbell renegade rows",
            "Jump squats",
            "Burpees",
        ),
        HIIT_CARDIO_CORE,
    ),
    "advanced": (
        _workout(
            "Full Body HIIT",
            "Burpees",
            "Jump squats",
            "Kettlebell swings",
            "Push-ups",
            "Plank jacks",
        ),
        _workout(
            "Strength Circuit",
            "Barbell back squats",
            "Barbell bench press",
            "Barbell bent-over rows",
            "Barbell deadlifts",
        ),
        CARDIO_ENDURANCE,
        _workout(
            "Conditioning",
            "Rowing machine intervals",
            "Kettlebell clean and press",
            "Box jumps",
            "Battle ropes",
        ),
        HIIT_CARDIO_CORE,
    ),
}


# =============================================================================
# Build muscle (strength)
# =============================================================================

BUILD_MUSCLE_TEMPLATES = {
    "beginner": (
        _workout(
            "Full Body A",
            "Dumbbell goblet squats",
            "Dumbbell bench press",
            "Dumbbell rows",
            "Plank",
        ),
        _workout(
            "Full Body B",
            "Dumbbell Romanian deadlifts",
            "Dumbbell shoulder press",
            "Lat pulldown machine",
            "Dumbbell curls",
        ),
        LOWER_BODY_BASICS,
    ),
    "intermediate": (
        _workout(
            "Upper Body Push",
            "Barbell bench press",
            "Dumbbell shoulder press",
            "Push-ups",
            "Tricep dips",
        ),
        _workout(
            "Lower Body",
            "Barbell back squats",
            "Dumbbell walking lunges",
            "Leg press machine",
            "Calf raises",
        ),
        _workout(
            "Upper Body Pull",
            "Barbell bent-over rows",
            "Pull-ups",
            "Dumbbell curls",
            "Face pulls",
        ),
        _workout(
            "Posterior Chain",
            "Barbell deadlifts",
            "Glute bridges",
            "Leg curl machine",
            "Superman back extensions",
        ),
    ),
    "advanced": (
        _workout(
            "Push Day",
            "Barbell bench press",
            "Barbell overhead press",
            "Dumbbell incline press",
            "Cable machine flyes",
            "Tricep dips",
        ),
        _workout(
            "Pull Day",
            "Barbell deadlifts",
            "Weighted pull-ups",
            "Barbell bent-over rows",
            "Barbell curls",
        ),
        _workout(
            "Leg Day",
            "Barbell back squats",
            "Barbell front squats",
            "Dumbbell Bulgarian split squats",
            "Leg curl machine",
            "Calf raises",
        ),
        _workout(
            "Upper Hypertrophy",
            "Dumbbell bench press",
            "Dumbbell rows",
            "Dumbbell lateral raises",
            "Dumbbell hammer curls",
        ),
        _workout(
            "Lower Hypertrophy",
            "Barbell hip thrusts",
            "Dumbbell Romanian deadlifts",
            "Leg press machine",
            "Walking lunges",
        ),
        ACTIVE_RECOVERY,
    ),
}


# =============================================================================
# Increase endurance
# =============================================================================

ENDURANCE_TEMPLATES = {
    "beginner": (
        _workout(
            "Easy Cardio",
            "Brisk walk 20 minutes",
            "Step-ups",
            "High knees",
        ),
        LOWER_BODY_BASICS,
        CARDIO_ENDURANCE,
    ),
    "intermediate": (
        CARDIO_ENDURANCE,
        _workout(
            "Tempo Intervals",
            "Tempo run 20 minutes",
            "Jump rope",
            "Mountain climbers",
        ),
        _workout(
            "Muscular Endurance",
            "Kettlebell swings",
            "Bodyweight squats",
            "Push-ups",
            "Plank",
        ),
        ACTIVE_RECOVERY,
    ),
    "advanced": (
        _workout(
            "Long Run",
            "Steady run 45-60 minutes",
            "Cool-down walk",
        ),
        _workout(
            "Track Intervals",
            "400m repeats",
            "Jump rope",
            "High knees",
        ),
        _workout(
            "Strength Endurance",
            "Kettlebell swings",
            "Dumbbell step-ups",
            "Barbell front squats",
            "Push-ups",
        ),
        _workout(
            "Hill Session",
            "Hill sprints",
            "Walking lunges",
            "Plank",
        ),
        _workout(
            "Row & Core",
            "Rowing machine 20 minutes",
            "Russian twists",
            "Dead bugs",
        ),
    ),
}


# =============================================================================
# Improve flexibility (mobility)
# =============================================================================

FLEXIBILITY_TEMPLATES = {
    "beginner": (
        MORNING_FLOW,
        MOBILITY_STRETCH,
        _workout(
            "Gentle Stretch",
            "Neck rolls",
            "Shoulder stretch",
            "Hamstring stretch",
            "Butterfly stretch",
        ),
    ),
    "intermediate": (
        MORNING_FLOW,
        MOBILITY_STRETCH,
        _workout(
            "Yoga Strength",
            "Warrior sequence",
            "Chair pose",
            "Side plank",
            "Bridge pose",
        ),
    ),
    "advanced": (
        _workout(
            "Power Yoga",
            "Sun salutation B",
            "Crow pose",
            "Wheel pose",
            "Pigeon pose",
        ),
        MOBILITY_STRETCH,
        _workout(
            "Loaded Mobility",
            "Kettlebell windmills",
            "Cossack squats",
            "Jefferson curls",
            "Deep squat hold",
        ),
        MORNING_FLOW,
    ),
}


# =============================================================================
# General fitness (balanced)
# =============================================================================

GENERAL_FITNESS_TEMPLATES = {
    "beginner": (
        _workout(
            "Movement Foundations",
            "Bodyweight squats",
            "Incline push-ups",
            "Glute bridges",
            "Bird dogs",
        ),
        CARDIO_ENDURANCE,
        MOBILITY_STRETCH,
    ),
    "intermediate": (
        _workout(
            "Full Body Workout",
            "Dumbbell goblet squats",
            "Push-ups",
            "Dumbbell rows",
            "Plank",
        ),
        CARDIO_ENDURANCE,
        UPPER_BODY_CIRCUIT,
        MORNING_FLOW,
    ),
    "advanced": (
        _workout(
            "Strength",
            "Barbell back squats",
            "Barbell bench press",
            "Pull-ups",
            "Barbell deadlifts",
        ),
        HIIT_CARDIO_CORE,
        _workout(
            "Athletic Power",
            "Box jumps",
            "Kettlebell swings",
            "Medicine ball slams",
            "Sprint intervals",
        ),
        MOBILITY_STRETCH,
        CARDIO_ENDURANCE,
    ),
}


TEMPLATE_MATRIX: dict[tuple[str, str], tuple[WorkoutTemplate, ...]] = {
    (goal, level): templates[level]
    for goal, templates in (
        ("lose-weight", LOSE_WEIGHT_TEMPLATES),
        ("build-muscle", BUILD_MUSCLE_TEMPLATES),
        ("increase-endurance", ENDURANCE_TEMPLATES),
        ("improve-flexibility", FLEXIBILITY_TEMPLATES),
        ("general-fitness", GENERAL_FITNESS_TEMPLATES),
    )
    for level in LEVELS
}


def get_template(goal_type: str, level: str) -> tuple[WorkoutTemplate, ...]:
    """Get the workout template for a goal type and level bucket.

    Args:
        goal_type: One of GOAL_TYPES
        level: One of LEVELS

    Returns:
        Ordered workouts of the template

    Raises:
        KeyError: If the combination is not in the matrix
    """
    key = (goal_type, level)
    if key not in TEMPLATE_MATRIX:
        raise KeyError(f"No template for goal={goal_type!r} level={level!r}")
    return TEMPLATE_MATRIX[key]
