"""Need-tag derivation from questionnaire facets.

Need tags are abstract labels ("poor-sleep", "build-muscle", ...) used to
match a user against the supplement catalog. Each lifestyle rule
contributes at most one tag; fitness goal ids are passed through verbatim.
"""

from __future__ import annotations

import logging
from typing import Optional

from wellplan.quiz.models import QuestionnaireResponse

logger = logging.getLogger(__name__)

FALLBACK_TAG = "overall-health"

# (facet attribute, triggering values, tag)
NEED_TAG_RULES: tuple[tuple[str, frozenset[str], str], ...] = (
    ("sleep_quality", frozenset({"poor", "fair"}), "poor-sleep"),
    ("stress_level", frozenset({"high", "moderate"}), "high-stress"),
    ("energy_level", frozenset({"low"}), "low-energy"),
    ("focus_level", frozenset({"poor"}), "brain-function"),
    ("immunity_strength", frozenset({"weak", "average"}), "weak-immunity"),
    ("recovery_rate", frozenset({"slow"}), "slow-recovery"),
)

# Dietary preferences that become tags as-is
DIET_TAGS = frozenset({"vegetarian", "vegan"})


def derive_need_tags(response: Optional[QuestionnaireResponse]) -> frozenset[str]:
    """Derive the need-tag set for a questionnaire response.

    Args:
        response: Questionnaire answers, or None if the quiz was not taken

    Returns:
        Frozen set of tags; {"overall-health"} when no rule fires
    """
    tags: set[str] = set()

    if response is not None:
        for facet, values, tag in NEED_TAG_RULES:
            if getattr(response, facet) in values:
                tags.add(tag)

        if response.dietary_preference in DIET_TAGS:
            tags.add(response.dietary_preference)

        tags.update(response.fitness_goals)

    if not tags:
        tags.add(FALLBACK_TAG)

    logger.debug("Derived need tags: %s", sorted(tags))
    return frozenset(tags)
