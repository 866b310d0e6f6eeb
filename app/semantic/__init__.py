from .embeddings import EmbeddingProvider, HashingEmbeddingProvider, cosine_similarity
from .similarity import IDEAL_PROFILE, SimilarityClient, get_similarity_client, score_against_ideal_profile

__all__ = [
    "EmbeddingProvider",
    "HashingEmbeddingProvider",
    "cosine_similarity",
    "IDEAL_PROFILE",
    "SimilarityClient",
    "get_similarity_client",
    "score_against_ideal_profile",
]
