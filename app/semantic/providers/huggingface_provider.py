from __future__ import annotations

from typing import Any

import httpx

from app.core.errors import SimilarityServiceError


class HuggingFaceSimilarityClient:
    """Sentence-similarity call against the Hugging Face inference router."""

    provider = "huggingface"

    def __init__(
        self,
        endpoint: str,
        api_token: str | None,
        timeout_s: float = 20.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_token = (api_token or "").strip()
        self._timeout_s = timeout_s
        self._transport = transport

    def similarity(self, text: str, reference: str) -> float:
        if not self._api_token:
            raise SimilarityServiceError("HF_API_TOKEN is missing")

        headers = {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }
        body = {"inputs": {"source_sentence": reference, "sentences": [text]}}

        try:
            with httpx.Client(timeout=self._timeout_s, transport=self._transport) as client:
                response = client.post(self._endpoint, json=body, headers=headers)
                response.raise_for_status()
                payload: Any = response.json()
        except httpx.HTTPStatusError as exc:
            raise SimilarityServiceError(
                f"Similarity API returned HTTP {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise SimilarityServiceError(f"Similarity API request failed: {exc}") from exc

        if not isinstance(payload, list) or not payload:
            raise SimilarityServiceError("Similarity API returned an unexpected payload.")
        try:
            return float(payload[0])
        except (TypeError, ValueError) as exc:
            raise SimilarityServiceError("Similarity API returned a non-numeric score.") from exc
