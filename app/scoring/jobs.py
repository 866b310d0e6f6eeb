from __future__ import annotations

from dataclasses import dataclass

from app.core.config.scoring import get_scoring_value
from app.normalize.utils import contains_any
from app.schemas.analysis import JobMatch


@dataclass(frozen=True)
class JobProfile:
    title: str
    match_percentage: int
    reason: str
    keywords: tuple[str, ...]


JOB_PROFILES: tuple[JobProfile, ...] = (
    JobProfile(
        title="Frontend Developer",
        match_percentage=92,
        reason="Strong match for modern web technologies found in your profile.",
        keywords=("react", "javascript", "frontend"),
    ),
    JobProfile(
        title="Data Analyst",
        match_percentage=88,
        reason="Your experience with data processing and databases aligns well.",
        keywords=("python", "data", "sql"),
    ),
    JobProfile(
        title="Project Manager",
        match_percentage=85,
        reason="Leadership and methodology keywords detected.",
        keywords=("manager", "lead", "agile"),
    ),
)

FALLBACK_PROFILE = JobProfile(
    title="General Associate",
    match_percentage=70,
    reason="Based on your general professional profile.",
    keywords=(),
)


def _to_match(profile: JobProfile) -> JobMatch:
    return JobMatch(
        title=profile.title,
        match_percentage=f"{profile.match_percentage}%",
        reason=profile.reason,
    )


def match_jobs(text: str) -> list[JobMatch]:
    lowered = (text or "").lower()
    matches = [_to_match(profile) for profile in JOB_PROFILES if contains_any(lowered, profile.keywords)]
    if not matches:
        matches.append(_to_match(FALLBACK_PROFILE))
    limit = int(get_scoring_value("jobs.max_matches", 3))
    return matches[:limit]
