"""Body composition and energy target estimation."""

from __future__ import annotations

from wellplan.profiles.body_calc import (
    BodyCompositionEstimate,
    MacroSplit,
    MacroTarget,
    estimate_body_composition,
    round_half_up,
)

__all__ = [
    "BodyCompositionEstimate",
    "MacroSplit",
    "MacroTarget",
    "estimate_body_composition",
    "round_half_up",
]
