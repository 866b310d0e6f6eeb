from __future__ import annotations

from dataclasses import dataclass, field

from app.core.config.scoring import get_scoring_value
from app.schemas.analysis import RuleGroup
from app.scoring.features import FeatureFlags


@dataclass(frozen=True)
class RuleOutcome:
    group: RuleGroup
    points: int = 0
    bonus: int = 0
    penalty: int = 0
    pro: str | None = None
    con: str | None = None
    recommendation: str | None = None


@dataclass(frozen=True)
class RuleEvaluation:
    structure_score: int
    quality_score: int
    bonus: int
    penalty: int
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


def _weight(path: str, default: int) -> int:
    return int(get_scoring_value(path, default))


def check_structure(flags: FeatureFlags) -> list[RuleOutcome]:
    outcomes: list[RuleOutcome] = []
    if flags.has_experience:
        outcomes.append(RuleOutcome(group="structure", points=_weight("structure.points.experience", 18)))
    if flags.has_projects:
        outcomes.append(RuleOutcome(group="structure", points=_weight("structure.points.projects", 18)))
    if flags.has_skills:
        outcomes.append(RuleOutcome(group="structure", points=_weight("structure.points.skills", 12)))
    if flags.has_education:
        outcomes.append(RuleOutcome(group="structure", points=_weight("structure.points.education", 12)))

    if flags.has_experience:
        outcomes.append(RuleOutcome(group="structure", pro="Experience section detected"))
    else:
        outcomes.append(
            RuleOutcome(
                group="structure",
                penalty=_weight("structure.penalties.missing_experience", 18),
                con="No experience/internship section found",
                recommendation=(
                    "Add an Experience or Internship section even for academic, freelance, or training work."
                ),
            )
        )

    if flags.has_projects:
        outcomes.append(RuleOutcome(group="structure", pro="Projects section present"))
    else:
        outcomes.append(
            RuleOutcome(
                group="structure",
                penalty=_weight("structure.penalties.missing_projects", 10),
                con="Projects section missing",
                recommendation="Add a Projects section to showcase hands-on work.",
            )
        )
    return outcomes


def check_quality(flags: FeatureFlags) -> list[RuleOutcome]:
    outcomes: list[RuleOutcome] = []

    if flags.bullet_count >= _weight("quality.bullets.min_count", 4):
        outcomes.append(
            RuleOutcome(
                group="quality",
                points=_weight("quality.bullets.points", 14),
                pro="Good use of bullet points",
            )
        )
    else:
        outcomes.append(
            RuleOutcome(
                group="quality",
                penalty=_weight("quality.bullets.penalty", 10),
                con="Poor or missing bullet points",
                recommendation="Use bullet points to describe responsibilities and achievements.",
            )
        )

    if flags.is_quantified:
        outcomes.append(
            RuleOutcome(
                group="quality",
                points=_weight("quality.quantification.points", 16),
                pro="Quantified achievements found",
            )
        )
    else:
        outcomes.append(
            RuleOutcome(
                group="quality",
                penalty=_weight("quality.quantification.penalty", 12),
                con="Lacks quantified impact",
                recommendation="Add numbers (e.g. 'improved performance by 30%', 'served 500+ users').",
            )
        )

    # Missing action verbs costs points and adds advice but never a con.
    if flags.has_action_verb:
        outcomes.append(RuleOutcome(group="quality", points=_weight("quality.action_verbs.points", 8)))
    else:
        outcomes.append(
            RuleOutcome(
                group="quality",
                penalty=_weight("quality.action_verbs.penalty", 6),
                recommendation="Start bullet points with action verbs like built, optimized, led, designed.",
            )
        )
    return outcomes


def check_length(flags: FeatureFlags) -> list[RuleOutcome]:
    outcomes: list[RuleOutcome] = []
    if flags.length > _weight("length.long_threshold", 800):
        outcomes.append(RuleOutcome(group="length", bonus=_weight("length.long_bonus", 6)))
    if flags.length < _weight("length.short_threshold", 400):
        outcomes.append(
            RuleOutcome(
                group="length",
                penalty=_weight("length.short_penalty", 8),
                con="Resume too short",
                recommendation="Expand your content with more details about projects, skills, and learning.",
            )
        )
    return outcomes


def check_composite(flags: FeatureFlags) -> list[RuleOutcome]:
    well_rounded = (
        flags.has_projects
        and flags.has_skills
        and flags.has_education
        and flags.bullet_count >= _weight("quality.bullets.min_count", 4)
    )
    if not well_rounded:
        return []
    return [RuleOutcome(group="composite", bonus=_weight("composite.well_rounded_bonus", 8))]


def fold_outcomes(outcomes: list[RuleOutcome]) -> RuleEvaluation:
    structure_score = 0
    quality_score = 0
    bonus = 0
    penalty = 0
    pros: list[str] = []
    cons: list[str] = []
    recommendations: list[str] = []

    for outcome in outcomes:
        if outcome.group == "structure":
            structure_score += outcome.points
        elif outcome.group == "quality":
            quality_score += outcome.points
        bonus += outcome.bonus
        penalty += outcome.penalty
        if outcome.pro:
            pros.append(outcome.pro)
        if outcome.con:
            cons.append(outcome.con)
        if outcome.recommendation:
            recommendations.append(outcome.recommendation)

    return RuleEvaluation(
        structure_score=structure_score,
        quality_score=quality_score,
        bonus=bonus,
        penalty=penalty,
        pros=pros,
        cons=cons,
        recommendations=recommendations,
    )


def evaluate_rules(flags: FeatureFlags) -> RuleEvaluation:
    outcomes = [
        *check_structure(flags),
        *check_quality(flags),
        *check_length(flags),
        *check_composite(flags),
    ]
    return fold_outcomes(outcomes)
