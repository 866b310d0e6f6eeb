from .engine import (
    HybridWithSimilarity,
    LocalOnly,
    ScoringPolicy,
    assess_resume,
    compute_raw_score,
    get_scoring_policy,
    normalize_score,
    round_half_up,
)
from .features import FeatureFlags, build_feature_flags
from .jobs import match_jobs
from .rules import RuleEvaluation, RuleOutcome, evaluate_rules
from .suggestions import generate_general_suggestions, generate_project_suggestions, generate_suggestions

__all__ = [
    "FeatureFlags",
    "build_feature_flags",
    "RuleOutcome",
    "RuleEvaluation",
    "evaluate_rules",
    "generate_general_suggestions",
    "generate_project_suggestions",
    "generate_suggestions",
    "match_jobs",
    "ScoringPolicy",
    "HybridWithSimilarity",
    "LocalOnly",
    "assess_resume",
    "compute_raw_score",
    "get_scoring_policy",
    "normalize_score",
    "round_half_up",
]
