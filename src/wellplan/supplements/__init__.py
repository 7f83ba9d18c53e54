"""Supplement catalog and recommendations."""

from wellplan.supplements.catalog import (
    DEFAULT_CATALOG,
    SupplementCatalogEntry,
    dump_catalog,
    load_catalog,
)
from wellplan.supplements.recommender import (
    SupplementRecommendation,
    recommend_supplements,
    recommendation_to_dict,
)

__all__ = [
    "DEFAULT_CATALOG",
    "SupplementCatalogEntry",
    "SupplementRecommendation",
    "dump_catalog",
    "load_catalog",
    "recommend_supplements",
    "recommendation_to_dict",
]
