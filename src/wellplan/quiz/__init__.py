"""Questionnaire input model and need-tag derivation."""

from __future__ import annotations

from wellplan.quiz.models import QuestionnaireResponse, parse_number
from wellplan.quiz.need_tags import derive_need_tags

__all__ = [
    "QuestionnaireResponse",
    "derive_need_tags",
    "parse_number",
]
