"""Pytest fixtures for wellplan tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from wellplan.db.connection import DatabaseConnection
from wellplan.db.store import SQLiteProfileStore
from wellplan.quiz.models import QuestionnaireResponse

# 30-year-old male, 170 cm, 70 kg aiming for 65 kg, no goals picked
BASE_ANSWERS: dict[str, Any] = {
    "age": 30,
    "gender": "male",
    "height_cm": 170,
    "current_weight_kg": 70,
    "target_weight_kg": 65,
    "waist_cm": 85,
    "fitness_level": "intermediate",
    "fitness_goals": [],
    "workout_frequency": "3-4",
    "preferred_workout_time": "evening",
    "equipment_access": "full-gym",
    "previous_injuries": "none",
    "dietary_preference": "omnivore",
    "meal_frequency": "3",
    "food_allergies": [],
}


def make_answers(**overrides: Any) -> dict[str, Any]:
    """Copy of the base answers with some fields replaced."""
    answers = dict(BASE_ANSWERS)
    answers.update(overrides)
    return answers


def make_response(**overrides: Any) -> QuestionnaireResponse:
    """Build a QuestionnaireResponse from the base answers plus overrides."""
    return QuestionnaireResponse.from_dict(make_answers(**overrides))


@pytest.fixture
def base_response() -> QuestionnaireResponse:
    return make_response()


@pytest.fixture
def quiz_file(tmp_path: Path) -> Path:
    """Base answers written to a JSON file."""
    path = tmp_path / "quiz.json"
    path.write_text(json.dumps(BASE_ANSWERS))
    return path


@pytest.fixture
def temp_db(tmp_path: Path) -> DatabaseConnection:
    """Create a temporary database with schema."""
    db = DatabaseConnection(tmp_path / "wellplan.db")
    db.initialize_schema()
    return db


@pytest.fixture
def store(temp_db: DatabaseConnection) -> SQLiteProfileStore:
    return SQLiteProfileStore(temp_db)
