from __future__ import annotations

from app.scoring.features import FeatureFlags


def generate_general_suggestions(flags: FeatureFlags) -> list[str]:
    suggestions: list[str] = []

    if not flags.mentions_metrics:
        suggestions.append(
            "Add quantified achievements to your experience and projects "
            "(e.g. 'improved performance by 30%', 'served 500+ users')."
        )

    if not flags.mentions_suggestion_verb:
        suggestions.append(
            "Use strong action verbs like 'built', 'optimized', 'implemented', 'engineered' "
            "to start your bullet points."
        )

    if flags.has_generic_phrase:
        suggestions.append(
            "Replace generic phrases like 'worked on' or 'helped in' with specific technical contributions."
        )

    if flags.mentions_project_work and not flags.mentions_deployment:
        suggestions.append(
            "Mention deployment details of your projects (e.g. hosted on Vercel, Render, AWS, Firebase)."
        )

    if not flags.names_core_stack:
        suggestions.append(
            "Clearly list the technologies used in each project (e.g. React, Node.js, MongoDB, Python, SQL)."
        )

    if not flags.mentions_teamwork:
        suggestions.append("Highlight collaboration or teamwork experience to show real-world working ability.")

    return suggestions


def generate_project_suggestions(flags: FeatureFlags) -> list[str]:
    """Project-level advice, only for resumes that describe some kind of project."""
    suggestions: list[str] = []
    if not flags.has_project_indicator:
        return suggestions

    if not flags.mentions_metrics:
        suggestions.append(
            "For each project, add measurable impact "
            "(e.g. 'served 500+ users', 'reduced load time by 40%', 'handled 1000+ records')."
        )

    if not flags.names_deployment_platform:
        suggestions.append(
            "Mention where your projects are deployed (e.g. Vercel, AWS, Firebase) to show production readiness."
        )

    if not flags.names_tech_stack:
        suggestions.append(
            "Clearly specify the technology stack used in each project (e.g. React, Node.js, MongoDB, Python, SQL)."
        )

    if not flags.mentions_project_verb:
        suggestions.append(
            "Start project bullet points with strong action verbs like 'Built', 'Designed', 'Implemented', 'Optimized'."
        )

    return suggestions


def generate_suggestions(flags: FeatureFlags) -> list[str]:
    return [*generate_general_suggestions(flags), *generate_project_suggestions(flags)]
