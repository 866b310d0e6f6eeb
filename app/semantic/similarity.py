from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Protocol

from app.core.config import settings
from app.core.errors import SimilarityServiceError
from app.scoring.engine import round_half_up
from app.semantic.embeddings import HashingEmbeddingProvider, cosine_similarity

logger = logging.getLogger(__name__)

IDEAL_PROFILE = (
    "Strong resume with clear experience, skills, projects, education, "
    "quantified achievements and action verbs."
)


class SimilarityClient(Protocol):
    provider: str

    def similarity(self, text: str, reference: str) -> float:
        """Return semantic closeness of text to reference in [0, 1]."""


class HashingSimilarityClient:
    provider = "hashing"

    def __init__(self, dimension: int = 256) -> None:
        self._embedder = HashingEmbeddingProvider(dimension=dimension)

    def similarity(self, text: str, reference: str) -> float:
        reference_vector, text_vector = self._embedder.embed([reference, text])
        return cosine_similarity(reference_vector, text_vector)


def clamp_similarity(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@lru_cache(maxsize=1)
def get_similarity_client() -> SimilarityClient:
    provider = settings.similarity_provider

    if provider == "huggingface":
        from app.semantic.providers.huggingface_provider import HuggingFaceSimilarityClient

        return HuggingFaceSimilarityClient(
            endpoint=settings.similarity_endpoint,
            api_token=settings.hf_api_token,
            timeout_s=settings.similarity_timeout_s,
        )

    if provider == "sentence-transformers":
        from app.semantic.providers.sentence_transformers_provider import SentenceTransformerSimilarityClient

        return SentenceTransformerSimilarityClient(model_name=settings.similarity_model)

    if provider == "openai":
        from app.semantic.providers.openai_provider import OpenAIEmbeddingSimilarityClient

        return OpenAIEmbeddingSimilarityClient(model=settings.openai_embedding_model)

    if provider == "hashing":
        return HashingSimilarityClient()

    raise ValueError(f"Unsupported SIMILARITY_PROVIDER='{provider}'")


def score_against_ideal_profile(text: str, client: SimilarityClient | None = None) -> int:
    """Similarity of the resume to the ideal profile, scaled to 0-100."""
    started = time.perf_counter()
    active: SimilarityClient | None = client
    try:
        if active is None:
            active = get_similarity_client()
        raw = active.similarity(text, IDEAL_PROFILE)
    except SimilarityServiceError:
        raise
    except Exception as exc:
        logger.warning("similarity_failed provider=%s: %s", getattr(active, "provider", "unknown"), exc)
        raise SimilarityServiceError(f"Semantic similarity service failed: {exc}") from exc

    score = round_half_up(clamp_similarity(raw) * 100)
    logger.info(
        "similarity_scored provider=%s score=%s latency_ms=%s",
        getattr(active, "provider", "unknown"),
        score,
        int((time.perf_counter() - started) * 1000),
    )
    return score
