from __future__ import annotations

import os
from typing import Optional

from openai import OpenAI

from app.semantic.embeddings import cosine_similarity


class OpenAIEmbeddingSimilarityClient:
    provider = "openai"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 20.0,
        max_retries: int = 2,
    ):
        self._model = model
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = OpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=float(os.getenv("OPENAI_TIMEOUT_S", str(timeout_s))),
            max_retries=int(os.getenv("OPENAI_MAX_RETRIES", str(max_retries))),
        )

    def similarity(self, text: str, reference: str) -> float:
        response = self._client.embeddings.create(model=self._model, input=[reference, text])
        vectors = [item.embedding for item in sorted(response.data, key=lambda item: item.index)]
        return cosine_similarity(vectors[0], vectors[1])
