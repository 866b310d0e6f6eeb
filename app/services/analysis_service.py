from __future__ import annotations

import logging
import time
import uuid

from app.analytics.db import log_analysis_run
from app.core.config import settings
from app.core.errors import ContentTooShortError, ResumeAnalyzerError, SimilarityServiceError
from app.core.resume_store import save_resume_analysis
from app.core.security import AuthenticatedUser
from app.normalize.utils import normalize_resume_text
from app.parsing.parse import extract_resume_text
from app.schemas.analysis import AnalyzeResponse
from app.scoring.engine import ScoringPolicy, get_scoring_policy
from app.semantic.similarity import SimilarityClient, score_against_ideal_profile

logger = logging.getLogger(__name__)

MIN_RESUME_CHARS = 50


def _log_run(
    *,
    run_id: str,
    owner_id: str,
    policy: str,
    source_type: str | None,
    similarity_status: str,
    status: str,
    started: float,
    error_code: str | None = None,
    score: int | None = None,
) -> None:
    try:
        log_analysis_run(
            run_id=run_id,
            owner_id=owner_id,
            policy=policy,
            source_type=source_type,
            similarity_status=similarity_status,
            status=status,
            error_code=error_code,
            score=score,
            latency_ms=int((time.perf_counter() - started) * 1000),
        )
    except Exception:  # pragma: no cover
        logger.debug("analysis_run_logging_failed", exc_info=True)


def _resolve_similarity(
    text: str,
    policy: ScoringPolicy,
    client: SimilarityClient | None,
) -> tuple[ScoringPolicy, int | None, str]:
    if not policy.requires_similarity:
        return policy, None, "skipped"
    try:
        return policy, score_against_ideal_profile(text, client=client), "ok"
    except SimilarityServiceError as exc:
        if settings.similarity_failure_mode != "local":
            raise
        logger.warning("similarity_fallback_to_local reason=%s", exc)
        return get_scoring_policy("local"), None, "fallback"


def analyze_resume(
    *,
    user: AuthenticatedUser,
    file_name: str,
    content_type: str | None,
    content: bytes,
    policy: str | None = None,
    similarity_client: SimilarityClient | None = None,
) -> AnalyzeResponse:
    """Extract, score and persist one uploaded resume for the given user."""
    run_id = uuid.uuid4().hex
    started = time.perf_counter()
    active_policy = get_scoring_policy(policy or settings.scoring_policy)
    source_type: str | None = None
    similarity_status = "pending"

    try:
        parsed = extract_resume_text(file_name, content_type, content)
        source_type = parsed.source_type
        text = normalize_resume_text(parsed.text)
        logger.info(
            "resume_extracted run=%s type=%s bytes=%s chars=%s warnings=%s",
            run_id,
            source_type,
            parsed.byte_size,
            parsed.char_count,
            len(parsed.parsing_warnings),
        )
        if len(text) < MIN_RESUME_CHARS:
            raise ContentTooShortError(
                "Resume content is too short or unreadable. If you uploaded a scanned PDF, "
                "please convert it to text using Google Docs or upload DOCX."
            )

        active_policy, similarity_score, similarity_status = _resolve_similarity(
            text, active_policy, similarity_client
        )
        assessment = active_policy.assess(text, similarity_score)
        record_id = save_resume_analysis(
            owner_id=user.id,
            file_name=file_name,
            score=assessment.score,
            assessment=assessment,
        )
    except ResumeAnalyzerError as exc:
        if isinstance(exc, SimilarityServiceError):
            similarity_status = "failed"
        _log_run(
            run_id=run_id,
            owner_id=user.id,
            policy=active_policy.name,
            source_type=source_type,
            similarity_status=similarity_status,
            status="error",
            started=started,
            error_code=exc.code,
        )
        raise

    logger.info(
        "analysis_completed id=%s owner=%s policy=%s similarity=%s score=%s",
        record_id,
        user.id,
        active_policy.name,
        similarity_status,
        assessment.score,
    )
    _log_run(
        run_id=run_id,
        owner_id=user.id,
        policy=active_policy.name,
        source_type=source_type,
        similarity_status=similarity_status,
        status="success",
        started=started,
        score=assessment.score,
    )
    return AnalyzeResponse(**assessment.model_dump(), id=record_id)
