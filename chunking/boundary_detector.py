"""
Semantic boundary detection.

A boundary is placed wherever adjacent-sentence similarity drops below
an effective threshold. The effective threshold is the lower of the
configured fixed threshold and a percentile of the document's own
similarity distribution.
"""

import logging
from typing import TYPE_CHECKING, List, Sequence

from .similarity import percentile

if TYPE_CHECKING:
    from .semantic_chunker import ChunkerConfig

logger = logging.getLogger(__name__)


def effective_threshold(similarities: Sequence[float], config: "ChunkerConfig") -> float:
    """Lower of the fixed threshold and the adaptive percentile threshold."""
    adaptive = percentile(sorted(similarities), config.similarity_percentile)
    return min(config.similarity_threshold, adaptive)


def detect_boundaries(similarities: Sequence[float], config: "ChunkerConfig") -> List[int]:
    """
    Find sentence positions where a new chunk should start.

    Args:
        similarities: Consecutive-pair similarities (n-1 values for n sentences)
        config: Chunker configuration

    Returns:
        Ascending sentence indices; position i + 1 for each dissimilar pair i
    """
    if not similarities:
        return []

    threshold = effective_threshold(similarities, config)
    logger.debug(
        f"Using similarity threshold {threshold:.3f} "
        f"(fixed: {config.similarity_threshold:.3f}, "
        f"percentile: {config.similarity_percentile})"
    )

    return [i + 1 for i, sim in enumerate(similarities) if sim < threshold]


class BoundaryDetector:
    """
    Boundary detection bound to one configuration.

    Usage:
        detector = BoundaryDetector(config)
        boundaries = detector.detect(similarities)
    """

    def __init__(self, config: "ChunkerConfig"):
        self.config = config

    def threshold(self, similarities: Sequence[float]) -> float:
        return effective_threshold(similarities, self.config)

    def detect(self, similarities: Sequence[float]) -> List[int]:
        return detect_boundaries(similarities, self.config)
