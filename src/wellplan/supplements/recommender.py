"""Supplement ranking by need-tag overlap.

Each catalog entry scores one point per tag it shares with the user's need
tags. Entries that share nothing are dropped; the rest are ranked by score
with ties kept in catalog order, and the top few are returned with a short
rationale built from the shared tags.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from wellplan.supplements.catalog import (
    DEFAULT_CATALOG,
    SupplementCatalogEntry,
    entry_to_dict,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
RATIONALE_TAGS = 2
FALLBACK_RATIONALE = "overall wellness goals"

TAG_PHRASES = {
    "poor-sleep": "better sleep",
    "high-stress": "stress management",
    "low-energy": "energy support",
    "brain-function": "focus and brain function",
    "weak-immunity": "immune support",
    "slow-recovery": "faster recovery",
    "vegetarian": "vegetarian nutrition gaps",
    "vegan": "vegan nutrition gaps",
    "overall-health": "overall health",
    "lose-weight": "weight management",
    "build-muscle": "muscle growth",
    "increase-endurance": "endurance",
    "improve-flexibility": "joint and mobility support",
    "strength-training": "strength training",
    "overall-fitness": "overall fitness",
}


@dataclass(frozen=True)
class SupplementRecommendation:
    """A ranked catalog entry with the reason it was picked."""

    entry: SupplementCatalogEntry
    match_score: int
    rationale: str


def match_score(entry: SupplementCatalogEntry, need_tags: Iterable[str]) -> int:
    """Count the tags an entry shares with the user's need tags."""
    return len(entry.tag_set & frozenset(need_tags))


def build_rationale(entry: SupplementCatalogEntry, need_tags: Iterable[str]) -> str:
    """Describe why an entry matched, from its first shared tags.

    Shared tags are taken in the entry's own tag order; tags without a
    phrase are skipped.
    """
    tags = frozenset(need_tags)
    shared = [t for t in entry.tags if t in tags][:RATIONALE_TAGS]
    phrases = [TAG_PHRASES[t] for t in shared if t in TAG_PHRASES]
    if not phrases:
        return FALLBACK_RATIONALE
    return " and ".join(phrases)


def recommend_supplements(
    need_tags: Iterable[str],
    catalog: Optional[Sequence[SupplementCatalogEntry]] = None,
    limit: int = DEFAULT_LIMIT,
) -> tuple[SupplementRecommendation, ...]:
    """Rank catalog entries against the user's need tags.

    Args:
        need_tags: Tags from ``derive_need_tags``
        catalog: Entries to rank (defaults to the built-in catalog)
        limit: Maximum number of recommendations

    Returns:
        Recommendations, best first; empty when nothing matches
    """
    if catalog is None:
        catalog = DEFAULT_CATALOG
    tags = frozenset(need_tags)

    scored = []
    for entry in catalog:
        score = match_score(entry, tags)
        if score > 0:
            scored.append((entry, score))

    # sorted() is stable, so equal scores keep catalog order
    ranked = sorted(scored, key=lambda item: -item[1])[: max(0, limit)]

    recommendations = tuple(
        SupplementRecommendation(
            entry=entry,
            match_score=score,
            rationale=build_rationale(entry, tags),
        )
        for entry, score in ranked
    )

    logger.debug(
        "Supplements: %d of %d entries matched, returning %s",
        len(scored), len(catalog), [r.entry.id for r in recommendations],
    )
    return recommendations


def recommendation_to_dict(recommendation: SupplementRecommendation) -> dict[str, Any]:
    """Convert a SupplementRecommendation to dict for JSON output."""
    return {
        "entry": entry_to_dict(recommendation.entry),
        "match_score": recommendation.match_score,
        "rationale": recommendation.rationale,
    }
