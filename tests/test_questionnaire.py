"""Tests for questionnaire parsing and need-tag derivation."""

from __future__ import annotations

import pytest

from conftest import make_answers, make_response
from wellplan.errors import ValidationError
from wellplan.quiz.models import QuestionnaireResponse, parse_number
from wellplan.quiz.need_tags import FALLBACK_TAG, derive_need_tags


class TestParseNumber:
    """Tests for numeric field parsing."""

    def test_accepts_numbers_and_numeric_strings(self):
        assert parse_number("age", 30) == 30.0
        assert parse_number("height_cm", "172.5") == 172.5
        assert parse_number("waist_cm", " 85 ") == 85.0

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", True, [1], "nan", "inf"])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_number("height_cm", value)
        assert exc_info.value.field == "height_cm"


class TestQuestionnaireResponse:
    """Tests for building responses from mappings."""

    def test_from_dict_parses_base_answers(self, base_response):
        assert base_response.age == 30
        assert base_response.gender == "male"
        assert base_response.height_cm == 170.0
        assert base_response.fitness_goals == ()
        assert base_response.food_allergies == frozenset()

    def test_string_numbers_from_quiz_ui(self):
        response = make_response(height_cm="170", current_weight_kg="70.5", age="30")
        assert response.height_cm == 170.0
        assert response.current_weight_kg == 70.5
        assert response.age == 30

    def test_missing_numeric_field_names_field(self):
        answers = make_answers()
        del answers["waist_cm"]
        with pytest.raises(ValidationError) as exc_info:
            QuestionnaireResponse.from_dict(answers)
        assert exc_info.value.field == "waist_cm"

    def test_unknown_choice_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            make_response(dietary_preference="carnivore")
        assert exc_info.value.field == "dietary_preference"

    def test_choices_are_case_insensitive(self):
        response = make_response(gender="Female", fitness_level="ATHLETIC")
        assert response.gender == "female"
        assert response.fitness_level == "athletic"

    def test_defaults_for_optional_fields(self):
        answers = make_answers()
        for name in ("workout_frequency", "equipment_access", "meal_frequency",
                     "dietary_preference", "previous_injuries", "preferred_workout_time"):
            del answers[name]
        response = QuestionnaireResponse.from_dict(answers)
        assert response.workout_frequency == "1-2"
        assert response.equipment_access == "none"
        assert response.meal_frequency == "3"
        assert response.dietary_preference == "omnivore"
        assert response.previous_injuries == "none"
        assert response.preferred_workout_time is None

    def test_allergies_accept_comma_separated_string(self):
        response = make_response(food_allergies="Dairy, nuts")
        assert response.food_allergies == frozenset({"dairy", "nuts"})

    def test_goals_deduplicated_in_order(self):
        response = make_response(fitness_goals=["build-muscle", "lose-weight", "build-muscle"])
        assert response.fitness_goals == ("build-muscle", "lose-weight")

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError):
            QuestionnaireResponse.from_dict(["age", 30])  # type: ignore[arg-type]

    def test_to_dict_round_trips(self):
        response = make_response(
            fitness_goals=["lose-weight"], food_allergies=["eggs"], sleep_quality="poor"
        )
        assert QuestionnaireResponse.from_dict(response.to_dict()) == response


class TestNeedTags:
    """Tests for need-tag derivation."""

    def test_no_answers_gives_fallback(self):
        assert derive_need_tags(None) == frozenset({FALLBACK_TAG})

    def test_no_rule_fires_gives_fallback(self, base_response):
        assert derive_need_tags(base_response) == frozenset({"overall-health"})

    def test_lifestyle_rules(self):
        response = make_response(
            sleep_quality="fair",
            stress_level="moderate",
            energy_level="low",
            focus_level="poor",
            immunity_strength="average",
            recovery_rate="slow",
        )
        assert derive_need_tags(response) == frozenset({
            "poor-sleep",
            "high-stress",
            "low-energy",
            "brain-function",
            "weak-immunity",
            "slow-recovery",
        })

    def test_good_facets_add_nothing(self):
        response = make_response(
            sleep_quality="good",
            stress_level="low",
            energy_level="high",
            focus_level="good",
            immunity_strength="strong",
            recovery_rate="fast",
        )
        assert derive_need_tags(response) == frozenset({"overall-health"})

    def test_plant_diets_and_goals_pass_through(self):
        response = make_response(
            dietary_preference="vegan", fitness_goals=["build-muscle", "custom-goal"]
        )
        assert derive_need_tags(response) == frozenset({"vegan", "build-muscle", "custom-goal"})

    def test_fallback_not_added_when_other_tags_exist(self):
        response = make_response(fitness_goals=["lose-weight"])
        assert FALLBACK_TAG not in derive_need_tags(response)
