"""
Vector similarity utilities for boundary detection.

Cosine similarity measures directional closeness independent of
magnitude, so embeddings do not need to be normalized beforehand.
"""

import logging
import math
from typing import List, Sequence

import numpy as np

logger = logging.getLogger(__name__)


class SimilarityError(ValueError):
    """Base error for similarity calculations."""


class DimensionMismatch(SimilarityError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Vector dimension mismatch: expected {expected}, got {actual}"
        )


class ZeroVector(SimilarityError):
    def __init__(self):
        super().__init__("Cannot calculate similarity for zero vector")


class InvalidSimilarityValue(SimilarityError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid value in similarity calculation: {value}")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two equal-length vectors.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Similarity in [-1.0, 1.0]

    Raises:
        DimensionMismatch: Lengths differ or vectors are empty
        ZeroVector: Either vector has zero magnitude
        InvalidSimilarityValue: Inputs contain NaN or infinity
    """
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))
    if len(a) == 0:
        raise DimensionMismatch(0, 0)

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        raise ZeroVector()

    similarity = float(np.dot(va, vb)) / (norm_a * norm_b)
    if math.isnan(similarity):
        raise InvalidSimilarityValue("NaN")
    if math.isinf(similarity):
        raise InvalidSimilarityValue("Infinite")

    # Floating point drift can push identical vectors just past 1.0
    return max(-1.0, min(1.0, similarity))


def pairwise_similarities(embeddings: Sequence[Sequence[float]]) -> List[float]:
    """
    Similarity between each pair of consecutive embeddings.

    Returns n-1 values for n embeddings, or an empty list when n < 2.
    """
    if len(embeddings) < 2:
        return []

    return [
        cosine_similarity(embeddings[i], embeddings[i + 1])
        for i in range(len(embeddings) - 1)
    ]


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Nearest-rank percentile of an ascending list.

    Picks the value at index round(p / 100 * (len - 1)), rounding half up.
    Returns 0.0 for an empty list.
    """
    if not sorted_values:
        return 0.0

    position = p / 100.0 * (len(sorted_values) - 1)
    index = int(math.floor(position + 0.5))
    index = max(0, min(len(sorted_values) - 1, index))
    return float(sorted_values[index])


def mean_similarity(embeddings: Sequence[Sequence[float]]) -> float:
    """Average consecutive similarity; 1.0 for fewer than two vectors."""
    similarities = pairwise_similarities(embeddings)
    if not similarities:
        return 1.0
    return float(np.mean(similarities))
