"""Plan orchestration and the JSON plan aggregate."""

from wellplan.plans.orchestrator import (
    PlanBundle,
    SaveOutcome,
    generate_and_save,
    generate_plans,
)
from wellplan.plans.serialization import bundle_to_dict, load_questionnaire_file

__all__ = [
    "PlanBundle",
    "SaveOutcome",
    "bundle_to_dict",
    "generate_and_save",
    "generate_plans",
    "load_questionnaire_file",
]
