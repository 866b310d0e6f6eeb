from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from app.normalize.utils import contains_any

_BULLET_PATTERN = re.compile(r"•|-|\*")
_METRIC_PATTERN = re.compile(r"\d+%|\d+\+|\d+\s?(users|clients|projects|months|years|apps)", re.IGNORECASE)
# Looser metric test used by the suggestion generators; runs on lowercased text.
_SUGGESTION_METRIC_PATTERN = re.compile(r"\d+%|\d+\+|\d+ users|\d+ clients|\d+ projects|\d+ ms|\d+ sec")

EXPERIENCE_MARKERS = ("experience", "intern")
PROJECT_MARKERS = ("projects",)
SKILL_MARKERS = ("skills",)
EDUCATION_MARKERS = ("education", "university", "college")

ACTION_VERBS = ("built", "developed", "designed", "implemented", "optimized", "led", "created")
SUGGESTION_ACTION_VERBS = (
    "built",
    "developed",
    "designed",
    "implemented",
    "optimized",
    "led",
    "created",
    "improved",
    "engineered",
)
PROJECT_ACTION_VERBS = ("built", "developed", "designed", "implemented", "engineered", "optimized", "created")
GENERIC_PHRASES = ("responsible for", "worked on", "helped in", "involved in", "participated in")
PROJECT_WORDS = ("project", "application", "system", "platform", "app")
PROJECT_INDICATORS = PROJECT_WORDS + ("website", "dashboard", "portal")
DEPLOYMENT_MENTIONS = ("deployed", "production")
DEPLOYMENT_PLATFORMS = ("vercel", "render", "aws", "firebase", "netlify", "railway", "heroku")
CORE_STACK_KEYWORDS = ("react", "node", "python")
TECH_STACK_KEYWORDS = ("react", "node", "express", "mongodb", "sql", "python", "django", "flask", "next", "tailwind")
TEAMWORK_MARKERS = ("team", "collaborat")

# Broader section vocabulary used by the local-only scoring policy.
LOCAL_SECTION_MARKERS: dict[str, tuple[str, ...]] = {
    "experience": ("experience", "work history", "employment"),
    "education": ("education", "academic", "university", "college"),
    "skills": ("skills", "technologies", "technical proficiencies"),
    "projects": ("projects", "personal work", "portfolio"),
    "contact": ("email", "phone", "linkedin", "github"),
}


class FeatureFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_experience: bool
    has_projects: bool
    has_skills: bool
    has_education: bool
    has_contact: bool
    bullet_count: int = Field(ge=0)
    is_quantified: bool
    has_action_verb: bool
    length: int = Field(ge=0)

    mentions_metrics: bool
    mentions_suggestion_verb: bool
    mentions_project_verb: bool
    has_generic_phrase: bool
    mentions_project_work: bool
    has_project_indicator: bool
    mentions_deployment: bool
    names_deployment_platform: bool
    names_core_stack: bool
    names_tech_stack: bool
    mentions_teamwork: bool

    local_sections: tuple[str, ...] = ()


def count_bullets(text: str) -> int:
    return len(_BULLET_PATTERN.findall(text))


def is_quantified(text: str) -> bool:
    return bool(_METRIC_PATTERN.search(text))


def build_feature_flags(text: str) -> FeatureFlags:
    """Scan normalized resume text once and collect every signal the rules read.

    Section and vocabulary checks are plain lowercase substring tests, so
    "led" also fires inside "enrolled" and "app" inside "happy". The rule
    weights were tuned against that behaviour.
    """
    content = text or ""
    lowered = content.lower()
    local_sections = tuple(
        name for name, markers in LOCAL_SECTION_MARKERS.items() if contains_any(lowered, markers)
    )

    return FeatureFlags(
        has_experience=contains_any(lowered, EXPERIENCE_MARKERS),
        has_projects=contains_any(lowered, PROJECT_MARKERS),
        has_skills=contains_any(lowered, SKILL_MARKERS),
        has_education=contains_any(lowered, EDUCATION_MARKERS),
        has_contact="contact" in local_sections,
        bullet_count=count_bullets(content),
        is_quantified=is_quantified(content),
        has_action_verb=contains_any(lowered, ACTION_VERBS),
        length=len(content),
        mentions_metrics=bool(_SUGGESTION_METRIC_PATTERN.search(lowered)),
        mentions_suggestion_verb=contains_any(lowered, SUGGESTION_ACTION_VERBS),
        mentions_project_verb=contains_any(lowered, PROJECT_ACTION_VERBS),
        has_generic_phrase=contains_any(lowered, GENERIC_PHRASES),
        mentions_project_work=contains_any(lowered, PROJECT_WORDS),
        has_project_indicator=contains_any(lowered, PROJECT_INDICATORS),
        mentions_deployment=contains_any(lowered, DEPLOYMENT_MENTIONS),
        names_deployment_platform=contains_any(lowered, DEPLOYMENT_PLATFORMS),
        names_core_stack=contains_any(lowered, CORE_STACK_KEYWORDS),
        names_tech_stack=contains_any(lowered, TECH_STACK_KEYWORDS),
        mentions_teamwork=contains_any(lowered, TEAMWORK_MARKERS),
        local_sections=local_sections,
    )
