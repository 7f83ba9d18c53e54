"""Plan orchestration: questionnaire in, complete plan bundle out.

Runs the estimator, both synthesizers and the supplement recommender for
one questionnaire. The meal plan is the only step that depends on another
(the body-composition estimate); everything else only reads the
questionnaire. Persisting the result is a separate, optional step that
never discards the computed bundle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from wellplan.db.store import ProfileStore
from wellplan.errors import PersistenceError
from wellplan.meals.allocator import MealPlan, synthesize_meal_plan
from wellplan.plans.serialization import bundle_to_dict
from wellplan.profiles.body_calc import BodyCompositionEstimate, estimate_body_composition
from wellplan.quiz.models import QuestionnaireResponse
from wellplan.quiz.need_tags import derive_need_tags
from wellplan.supplements.catalog import SupplementCatalogEntry
from wellplan.supplements.recommender import (
    DEFAULT_LIMIT,
    SupplementRecommendation,
    recommend_supplements,
)
from wellplan.training.models import TrainingPlan
from wellplan.training.selector import synthesize_training_plan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanBundle:
    """All plan sections derived from one questionnaire.

    Sections are None when they could not be derived (no questionnaire).
    """

    body_composition: Optional[BodyCompositionEstimate]
    meal_plan: Optional[MealPlan]
    training_plan: Optional[TrainingPlan]
    supplement_recommendations: tuple[SupplementRecommendation, ...]
    need_tags: frozenset[str]

    @property
    def is_empty(self) -> bool:
        return (
            self.body_composition is None
            and self.meal_plan is None
            and self.training_plan is None
            and not self.supplement_recommendations
        )


@dataclass(frozen=True)
class SaveOutcome:
    """Result of generating and persisting plans.

    Attributes:
        bundle: The computed plans, always present
        persisted: Whether the store accepted the write
        error: The store failure, if any
    """

    bundle: PlanBundle
    persisted: bool
    error: Optional[PersistenceError] = None


def generate_plans(
    response: Optional[QuestionnaireResponse],
    catalog: Optional[Sequence[SupplementCatalogEntry]] = None,
    max_recommendations: int = DEFAULT_LIMIT,
) -> PlanBundle:
    """Derive every plan section from a questionnaire.

    Args:
        response: Questionnaire answers, or None if the quiz was not taken
        catalog: Supplement catalog (defaults to the built-in one)
        max_recommendations: Maximum number of supplement recommendations

    Returns:
        PlanBundle; sections that need answers are None without them

    Raises:
        ValidationError: If the answers contain a malformed field
    """
    estimate = estimate_body_composition(response)

    meal_plan = None
    if response is not None:
        meal_plan = synthesize_meal_plan(
            estimate,
            response.dietary_preference,
            response.meal_frequency,
            response.food_allergies,
        )

    training_plan = synthesize_training_plan(response)

    need_tags = derive_need_tags(response)
    recommendations = recommend_supplements(
        need_tags, catalog=catalog, limit=max_recommendations
    )

    logger.debug(
        "Generated plans: body=%s meals=%s training=%s supplements=%d",
        estimate is not None,
        meal_plan is not None,
        training_plan is not None,
        len(recommendations),
    )

    return PlanBundle(
        body_composition=estimate,
        meal_plan=meal_plan,
        training_plan=training_plan,
        supplement_recommendations=recommendations,
        need_tags=need_tags,
    )


async def generate_and_save(
    response: Optional[QuestionnaireResponse],
    user_id: str,
    store: ProfileStore,
    catalog: Optional[Sequence[SupplementCatalogEntry]] = None,
    max_recommendations: int = DEFAULT_LIMIT,
) -> SaveOutcome:
    """Generate plans and hand them to the profile store.

    A failed write is reported in the outcome instead of raised, so the
    caller still gets the computed plans for display or a retry. Stores
    should raise PersistenceError; an OSError (ConnectionError,
    TimeoutError, ...) is wrapped in one with the original as ``cause``.
    Anything else is a bug in the store and propagates.

    Args:
        response: Questionnaire answers, or None
        user_id: Store key for the user
        store: Profile store to write to
        catalog: Supplement catalog (defaults to the built-in one)
        max_recommendations: Maximum number of supplement recommendations

    Returns:
        SaveOutcome with the bundle and the persistence status
    """
    bundle = generate_plans(response, catalog, max_recommendations)

    if response is None:
        logger.debug("No questionnaire for user %s; nothing to save", user_id)
        return SaveOutcome(bundle=bundle, persisted=False)

    try:
        await store.save_plans(user_id, response.to_dict(), bundle_to_dict(bundle))
    except PersistenceError as e:
        logger.warning("Could not save plans for user %s: %s", user_id, e)
        return SaveOutcome(bundle=bundle, persisted=False, error=e)
    except OSError as e:
        # ConnectionError and TimeoutError are OSError subclasses
        error = PersistenceError(f"Could not save plans for {user_id!r}: {e}", cause=e)
        logger.warning("Could not save plans for user %s: %s", user_id, e)
        return SaveOutcome(bundle=bundle, persisted=False, error=error)

    return SaveOutcome(bundle=bundle, persisted=True)
