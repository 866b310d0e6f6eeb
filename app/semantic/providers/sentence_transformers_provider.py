from __future__ import annotations

import threading

import numpy as np
from sentence_transformers import SentenceTransformer


class SentenceTransformerSimilarityClient:
    provider = "sentence-transformers"
    _model_cache: dict[str, SentenceTransformer] = {}
    _model_lock = threading.Lock()

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name

    @classmethod
    def _get_model(cls, model_name: str) -> SentenceTransformer:
        model = cls._model_cache.get(model_name)
        if model is not None:
            return model
        with cls._model_lock:
            if model_name not in cls._model_cache:
                cls._model_cache[model_name] = SentenceTransformer(model_name)
            return cls._model_cache[model_name]

    def similarity(self, text: str, reference: str) -> float:
        model = self._get_model(self.model_name)
        vectors = model.encode([reference, text], normalize_embeddings=True)
        return float(np.dot(vectors[0], vectors[1]))
