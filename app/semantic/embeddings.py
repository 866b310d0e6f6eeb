from __future__ import annotations

import hashlib
import math
import re
from collections import Counter
from typing import Protocol, Sequence

_WORD_PATTERN = re.compile(r"[a-z0-9\+#]+")
_STOPWORDS = frozenset(
    {"a", "an", "and", "as", "at", "by", "for", "in", "is", "of", "on", "or", "the", "to", "with"}
)


class EmbeddingProvider(Protocol):
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Return one vector per input text."""


def _bucket(token: str, dimension: int) -> tuple[int, float]:
    digest = hashlib.sha256(token.encode("utf-8")).digest()
    index = int.from_bytes(digest[:4], "big") % dimension
    sign = 1.0 if digest[4] & 1 else -1.0
    return index, sign


class HashingEmbeddingProvider:
    """Signed feature hashing over resume words with sublinear term weights.

    Needs no model download or network, so it backs offline scoring and tests.
    """

    def __init__(self, dimension: int = 256) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be greater than 0")
        self.dimension = dimension

    def embed(self, texts: list[str]) -> list[list[float]]:
        return [self.vectorize(text) for text in texts]

    def vectorize(self, text: str) -> list[float]:
        counts = Counter(
            word for word in _WORD_PATTERN.findall((text or "").lower()) if word not in _STOPWORDS
        )
        vector = [0.0] * self.dimension
        for word, count in counts.items():
            index, sign = _bucket(word, self.dimension)
            vector[index] += sign * (1.0 + math.log(count))

        length = math.sqrt(sum(value * value for value in vector))
        if length == 0:
            return vector
        return [value / length for value in vector]


def cosine_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    if not left or len(left) != len(right):
        return 0.0
    dot = left_sq = right_sq = 0.0
    for a, b in zip(left, right):
        dot += a * b
        left_sq += a * a
        right_sq += b * b
    if left_sq == 0 or right_sq == 0:
        return 0.0
    return dot / math.sqrt(left_sq * right_sq)
