from __future__ import annotations

import math
from typing import Protocol

from app.core.config.scoring import get_scoring_value
from app.schemas.analysis import ResumeAssessment, ScoringPolicyName
from app.scoring.features import FeatureFlags, build_feature_flags
from app.scoring.jobs import match_jobs
from app.scoring.rules import RuleEvaluation, evaluate_rules
from app.scoring.suggestions import generate_suggestions

DEFAULT_PRO = "Basic structure present"
DEFAULT_CON = "No major issues detected"
DEFAULT_RECOMMENDATION = "Improve formatting and add more quantified achievements"

HYBRID_SUMMARY = "Advanced ATS + Quality + AI Hybrid Analysis"
LOCAL_SUMMARY = "Local ATS Heuristic Analysis"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def _or_default(items: list[str], default: str) -> list[str]:
    return list(items) if items else [default]


def compute_raw_score(evaluation: RuleEvaluation, similarity_score: float) -> int:
    weight = float(get_scoring_value("normalization.similarity_weight", 0.35))
    return (
        evaluation.structure_score
        + evaluation.quality_score
        + round_half_up(similarity_score * weight)
        + evaluation.bonus
        - evaluation.penalty
    )


def normalize_score(raw_score: int) -> int:
    """Compress the raw sum into the visible band and clamp it.

    Stacked bonuses approach the ceiling gradually instead of saturating,
    and every resume gets at least the floor.
    """
    pivot = int(get_scoring_value("normalization.pivot", 20))
    compression = float(get_scoring_value("normalization.compression", 0.65))
    floor = int(get_scoring_value("normalization.floor", 20))
    ceiling = int(get_scoring_value("normalization.ceiling", 85))
    compressed = round_half_up(pivot + (raw_score - pivot) * compression)
    return _clamp(compressed, floor, ceiling)


class ScoringPolicy(Protocol):
    name: ScoringPolicyName
    requires_similarity: bool

    def assess(self, text: str, similarity_score: float | None = None) -> ResumeAssessment:
        """Score normalized resume text and build the full assessment."""


class HybridWithSimilarity:
    name: ScoringPolicyName = "hybrid"
    requires_similarity = True

    def evaluate(self, flags: FeatureFlags) -> RuleEvaluation:
        return evaluate_rules(flags)

    def assess(self, text: str, similarity_score: float | None = None) -> ResumeAssessment:
        if similarity_score is None:
            raise ValueError("The hybrid scoring policy requires a similarity score.")

        flags = build_feature_flags(text)
        evaluation = self.evaluate(flags)
        score = normalize_score(compute_raw_score(evaluation, similarity_score))

        recommendations = [
            *_or_default(evaluation.recommendations, DEFAULT_RECOMMENDATION),
            *generate_suggestions(flags),
        ]
        return ResumeAssessment(
            score=score,
            summary=HYBRID_SUMMARY,
            pros=_or_default(evaluation.pros, DEFAULT_PRO),
            cons=_or_default(evaluation.cons, DEFAULT_CON),
            recommendations=recommendations,
            jobs=match_jobs(text),
        )


class LocalOnly:
    """Legacy heuristic: a flat base plus points per detected section, no similarity input."""

    name: ScoringPolicyName = "local"
    requires_similarity = False

    def assess(self, text: str, similarity_score: float | None = None) -> ResumeAssessment:
        flags = build_feature_flags(text)
        score = int(get_scoring_value("local_policy.base", 50))
        score += len(flags.local_sections) * int(get_scoring_value("local_policy.per_section", 8))

        pros: list[str] = []
        cons: list[str] = []
        recommendations: list[str] = []

        if "experience" in flags.local_sections:
            pros.append("Professional experience section detected")
        else:
            cons.append("Missing clear work experience section")
            recommendations.append("Add a dedicated 'Experience' section to showcase your career history.")

        if "skills" in flags.local_sections:
            pros.append("Technical skills are clearly listed")
        else:
            cons.append("Skills section is missing or poorly defined")
            recommendations.append("Create a 'Skills' section with keywords relevant to your target roles.")

        if flags.length > int(get_scoring_value("local_policy.long_threshold", 1500)):
            pros.append("Comprehensive content length")
        elif flags.length < int(get_scoring_value("local_policy.short_threshold", 500)):
            score -= int(get_scoring_value("local_policy.short_penalty", 15))
            cons.append("Resume is too short")
            recommendations.append("Expand on your achievements and responsibilities to provide more context.")

        score = _clamp(
            score,
            int(get_scoring_value("local_policy.floor", 0)),
            int(get_scoring_value("local_policy.ceiling", 99)),
        )
        return ResumeAssessment(
            score=score,
            summary=LOCAL_SUMMARY,
            pros=_or_default(pros, DEFAULT_PRO),
            cons=_or_default(cons, DEFAULT_CON),
            recommendations=[
                *_or_default(recommendations, DEFAULT_RECOMMENDATION),
                *generate_suggestions(flags),
            ],
            jobs=match_jobs(text),
        )


_POLICIES: dict[str, ScoringPolicy] = {
    "hybrid": HybridWithSimilarity(),
    "local": LocalOnly(),
}


def get_scoring_policy(name: str) -> ScoringPolicy:
    key = (name or "").strip().lower()
    if key not in _POLICIES:
        raise ValueError(f"Unsupported scoring policy '{name}'. Use one of: {', '.join(sorted(_POLICIES))}.")
    return _POLICIES[key]


def assess_resume(
    text: str,
    similarity_score: float | None = None,
    *,
    policy: str = "hybrid",
) -> ResumeAssessment:
    return get_scoring_policy(policy).assess(text, similarity_score)
