"""Vector similarity calculation utilities."""

import math

from docchat.entities.document import Embedded, EmbeddingState
from docchat.errors import DimensionMismatchError


def cosine_similarity(vec1: list[float] | None, vec2: list[float] | None) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity score in [-1, 1]. Absent or empty vectors, and zero
        vectors, score 0.

    Raises:
        DimensionMismatchError: If vectors have different dimensions
    """
    if not vec1 or not vec2:
        return 0.0

    if len(vec1) != len(vec2):
        raise DimensionMismatchError(len(vec1), len(vec2))

    dot_product = 0.0
    norm1 = 0.0
    norm2 = 0.0
    for a, b in zip(vec1, vec2):
        dot_product += a * b
        norm1 += a * a
        norm2 += b * b

    if norm1 == 0 or norm2 == 0:
        return 0.0

    similarity = dot_product / (math.sqrt(norm1) * math.sqrt(norm2))

    # Clamp to [-1, 1] to handle floating point errors
    return max(-1.0, min(1.0, similarity))


def embedding_similarity(query_vector: list[float], embedding: EmbeddingState) -> float:
    """Score a chunk embedding against a query vector.

    Unembedded chunks score 0. Dimension mismatches between a stored
    embedding and the query (e.g. after a model change) also score 0
    rather than failing the whole retrieval.

    Args:
        query_vector: Embedding of the query
        embedding: Embedding state of a chunk

    Returns:
        Similarity score in [-1, 1]
    """
    if not isinstance(embedding, Embedded):
        return 0.0
    if len(embedding.vector) != len(query_vector):
        return 0.0
    return cosine_similarity(query_vector, embedding.vector)
