"""Supplement catalog: built-in seed data and YAML loading.

The catalog is static configuration. Entry order is significant because
the recommender breaks score ties by catalog position. A replacement
catalog can be supplied as a YAML list of entries with the same fields as
``SupplementCatalogEntry``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import yaml

from wellplan.errors import UnavailableInputError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SupplementCatalogEntry:
    """A supplement product in the catalog.

    Attributes:
        id: Stable identifier (e.g., "whey-protein")
        name: Product name
        url: Product page
        description: One-sentence description
        benefits: Short benefit labels
        tags: Need tags the product addresses, most relevant first
    """

    id: str
    name: str
    url: str
    description: str
    benefits: tuple[str, ...]
    tags: tuple[str, ...]

    @property
    def tag_set(self) -> frozenset[str]:
        return frozenset(self.tags)


PRODUCT_BASE_URL = "https://wellurausa.com/products"


def _entry(
    entry_id: str,
    name: str,
    slug: str,
    description: str,
    benefits: Iterable[str],
    tags: Iterable[str],
) -> SupplementCatalogEntry:
    return SupplementCatalogEntry(
        id=entry_id,
        name=name,
        url=f"{PRODUCT_BASE_URL}/{slug}",
        description=description,
        benefits=tuple(benefits),
        tags=tuple(tags),
    )


# =============================================================================
# Built-in catalog
# =============================================================================

DEFAULT_CATALOG: tuple[SupplementCatalogEntry, ...] = (
    _entry(
        "whey-protein",
        "Whey Protein Isolate",
        "whey-chocopro-100-isolate",
        "High-quality protein for muscle recovery and growth",
        ["Muscle Recovery", "Lean Muscle Growth", "Convenient Nutrition"],
        ["build-muscle", "strength-training", "slow-recovery", "lose-weight"],
    ),
    _entry(
        "creatine",
        "MuscleΠrime Creatine Monohydrate",
        "muscleprime-creatine-monohydrate",
        "Supports strength, power and muscle recovery",
        ["Increased Strength", "Improved Power Output", "Enhanced Recovery"],
        ["build-muscle", "strength-training", "vegan", "vegetarian"],
    ),
    _entry(
        "pre-workout",
        "Ignite 8™",
        "ignite-8™",
        "Pre-workout formula for energy, focus and performance",
        ["Enhanced Energy", "Improved Focus", "Better Workout Performance"],
        ["low-energy", "increase-endurance", "build-muscle"],
    ),
    _entry(
        "vitamin-d",
        "Sunburst Vitamin D3 2,000 IU",
        "sunburst-vitamin-d3-2-000-iu",
        "Essential vitamin for immune function and bone health",
        ["Immune Support", "Bone Health", "Mood Support"],
        ["weak-immunity", "low-energy", "vegan", "overall-health"],
    ),
    _entry(
        "magnesium",
        "Magnesium Glycinate 2500",
        "magnesium-glycinate-2500",
        "Supports muscle function, sleep and stress management",
        ["Muscle Recovery", "Better Sleep", "Stress Management"],
        ["poor-sleep", "high-stress", "slow-recovery"],
    ),
    _entry(
        "collagen",
        "PureVital Collagen Powder",
        "purevital-collagen-powder",
        "Supports joint health, skin elasticity and recovery",
        ["Joint Support", "Skin Health", "Recovery Support"],
        ["slow-recovery", "improve-flexibility"],
    ),
    _entry(
        "omega-3",
        "OceanPower",
        "oceanpower",
        "Essential fatty acids for heart health, brain function and inflammation",
        ["Heart Health", "Brain Function", "Joint Support"],
        ["brain-function", "slow-recovery", "vegetarian", "overall-health"],
    ),
    _entry(
        "ashwagandha",
        "Stress Shield Ashwagandha",
        "stress-shield-ashwagandha",
        "Adaptogen for stress management and hormonal balance",
        ["Stress Management", "Mood Support", "Hormonal Balance"],
        ["high-stress", "poor-sleep"],
    ),
    _entry(
        "probiotics",
        "FloraMax 40B",
        "floramax-40b",
        "Supports gut health and immune function",
        ["Digestive Health", "Immune Support", "Nutrient Absorption"],
        ["weak-immunity", "overall-health"],
    ),
    _entry(
        "multivitamin",
        "VitaBites Gummies Adult",
        "vitabites-gummies-adult",
        "Comprehensive vitamin and mineral support",
        ["Overall Health", "Nutrient Gaps", "Immune Support"],
        ["overall-health", "overall-fitness", "weak-immunity", "vegan", "vegetarian"],
    ),
    _entry(
        "sleep-aid",
        "SereniSleep Caps",
        "serenisleep-caps",
        "Natural sleep support for better rest and recovery",
        ["Better Sleep", "Faster Sleep Onset", "Mental Recovery"],
        ["poor-sleep", "slow-recovery"],
    ),
    _entry(
        "fat-burner",
        "Ultra Burner with MCT",
        "ultra-burner-with-mct",
        "Supports metabolism and fat loss goals",
        ["Metabolic Support", "Fat Utilization", "Energy Support"],
        ["lose-weight", "low-energy"],
    ),
    _entry(
        "keto-support",
        "KetoMax Turbo5",
        "ketomax-turbo5",
        "Supports ketogenic diet and metabolism",
        ["Keto Support", "Metabolic Flexibility", "Energy Support"],
        ["lose-weight"],
    ),
    _entry(
        "digestive-enzymes",
        "Natural Digest Capsules",
        "natural-digest-capsules",
        "Supports digestion and nutrient absorption",
        ["Digestive Support", "Reduced Bloating", "Nutrient Absorption"],
        ["overall-health", "vegan"],
    ),
    _entry(
        "joint-support",
        "TurmaFlex Gummies",
        "turmaflex-gummies",
        "Supports joint health and mobility",
        ["Joint Comfort", "Mobility Support", "Anti-inflammatory Support"],
        ["improve-flexibility", "slow-recovery", "increase-endurance"],
    ),
    _entry(
        "focus-support",
        "NeuroPrime",
        "neuroprime",
        "Supports cognitive function and mental clarity",
        ["Mental Clarity", "Focus Support", "Cognitive Function"],
        ["brain-function", "high-stress"],
    ),
    _entry(
        "energy-drink",
        "FloWTide Peach Mango",
        "flowtide-peach-mango",
        "Natural energy drink for sustained energy without crashes",
        ["Clean Energy", "Mental Focus", "Hydration Support"],
        ["low-energy", "increase-endurance", "overall-fitness"],
    ),
    _entry(
        "skin-support",
        "GlowRenew Serum",
        "glowrenew-serum-for-normal-skin",
        "Supports skin health and appearance",
        ["Skin Hydration", "Anti-Aging Support", "Skin Tone"],
        ["overall-health"],
    ),
)


# =============================================================================
# YAML loading
# =============================================================================

REQUIRED_ENTRY_FIELDS = ("id", "name", "url", "tags")


def _string_tuple(entry_id: str, field: str, value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(
            field, f"Catalog entry {entry_id!r}: '{field}' must be a list of strings"
        )
    return tuple(v.strip() for v in value if v.strip())


def entry_from_dict(data: dict[str, Any]) -> SupplementCatalogEntry:
    """Create a catalog entry from a YAML/JSON mapping.

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("catalog", "Catalog entries must be mappings")

    for name in REQUIRED_ENTRY_FIELDS:
        if not data.get(name):
            raise ValidationError(
                name, f"Catalog entry is missing required field '{name}'"
            )

    entry_id = str(data["id"])
    tags = _string_tuple(entry_id, "tags", data["tags"])
    if not tags:
        raise ValidationError("tags", f"Catalog entry {entry_id!r} has no tags")

    return SupplementCatalogEntry(
        id=entry_id,
        name=str(data["name"]),
        url=str(data["url"]),
        description=str(data.get("description") or ""),
        benefits=_string_tuple(entry_id, "benefits", data.get("benefits")),
        tags=tags,
    )


def entry_to_dict(entry: SupplementCatalogEntry) -> dict[str, Any]:
    """Convert a catalog entry to a YAML/JSON-friendly dict."""
    return {
        "id": entry.id,
        "name": entry.name,
        "url": entry.url,
        "description": entry.description,
        "benefits": list(entry.benefits),
        "tags": list(entry.tags),
    }


def load_catalog(path: Path) -> tuple[SupplementCatalogEntry, ...]:
    """Load a supplement catalog from a YAML file.

    The file holds either a list of entries or a mapping with a
    ``supplements`` key holding that list.

    Args:
        path: Path to the YAML file

    Returns:
        Entries in file order

    Raises:
        UnavailableInputError: If the file does not exist or is empty
        ValidationError: If the content is not a valid catalog
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise UnavailableInputError(f"Supplement catalog not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise UnavailableInputError(f"Supplement catalog is empty: {path}")
    if isinstance(data, dict):
        data = data.get("supplements")
    if not isinstance(data, list):
        raise ValidationError(
            "catalog", "Catalog must be a list of entries or have a 'supplements' list"
        )

    entries = tuple(entry_from_dict(item) for item in data)

    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            raise ValidationError("id", f"Duplicate catalog entry id: {entry.id!r}")
        seen.add(entry.id)

    logger.debug("Loaded %d supplement entries from %s", len(entries), path)
    return entries


def dump_catalog(catalog: Iterable[SupplementCatalogEntry], path: Path) -> None:
    """Write a catalog to a YAML file (loadable with ``load_catalog``)."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {"supplements": [entry_to_dict(e) for e in catalog]}
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
