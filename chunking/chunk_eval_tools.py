"""
Chunk quality evaluation tools.

Helps tune chunker parameters by measuring:
- Size distribution (tokens and sentences)
- Chunk coherence (average internal similarity)
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Sequence

import numpy as np
import tiktoken

from .types import SemanticChunk

logger = logging.getLogger(__name__)


@lru_cache()
def _encoding() -> tiktoken.Encoding:
    """Load the tokenizer on first use."""
    return tiktoken.get_encoding("cl100k_base")


def num_tokens(text: str) -> int:
    """Count tokens using cl100k_base encoding."""
    return len(_encoding().encode(text))


@dataclass
class ChunkQualityReport:
    """Report on chunk quality metrics."""

    total_chunks: int
    avg_tokens: float
    min_tokens: int
    max_tokens: int
    std_tokens: float
    avg_sentences: float
    avg_coherence: float
    min_coherence: float
    chunks_too_small: int  # Below min token threshold
    chunks_too_large: int  # Above max token threshold
    recommendations: List[str] = field(default_factory=list)


def evaluate_chunk_quality(
    chunks: Sequence[SemanticChunk],
    min_tokens: int = 50,
    max_tokens: int = 1500,
    target_tokens: int = 800,
    low_coherence: float = 0.5,
) -> ChunkQualityReport:
    """
    Evaluate overall chunking quality for one document.

    Args:
        chunks: Chunker output
        min_tokens: Minimum acceptable tokens
        max_tokens: Maximum acceptable tokens
        target_tokens: Target token count
        low_coherence: Coherence below this triggers a recommendation

    Returns:
        ChunkQualityReport with metrics and recommendations
    """
    if not chunks:
        return ChunkQualityReport(
            total_chunks=0,
            avg_tokens=0,
            min_tokens=0,
            max_tokens=0,
            std_tokens=0,
            avg_sentences=0,
            avg_coherence=0,
            min_coherence=0,
            chunks_too_small=0,
            chunks_too_large=0,
            recommendations=["No chunks to evaluate"],
        )

    token_counts = [num_tokens(c.content) for c in chunks]
    sentence_counts = [c.sentence_count for c in chunks]
    coherence = [c.avg_similarity for c in chunks]

    avg_tokens = float(np.mean(token_counts))
    std_tokens = float(np.std(token_counts))
    avg_coherence = float(np.mean(coherence))

    too_small = sum(1 for t in token_counts if t < min_tokens)
    too_large = sum(1 for t in token_counts if t > max_tokens)

    recommendations = []

    if too_small > len(chunks) * 0.1:
        recommendations.append(
            f"Consider raising min_chunk_sentences. {too_small} chunks "
            f"({too_small/len(chunks)*100:.0f}%) are below {min_tokens} tokens."
        )

    if too_large > len(chunks) * 0.1:
        recommendations.append(
            f"Consider lowering max_chunk_sentences. {too_large} chunks "
            f"({too_large/len(chunks)*100:.0f}%) exceed {max_tokens} tokens."
        )

    if std_tokens > target_tokens * 0.5:
        recommendations.append(
            f"High variance in chunk sizes (std={std_tokens:.0f}). "
            "Consider a narrower min/max sentence range."
        )

    if avg_coherence < low_coherence:
        recommendations.append(
            f"Low coherence score ({avg_coherence:.2f}). "
            "Chunks may span unrelated topics. Consider raising similarity_threshold."
        )

    if not recommendations:
        recommendations.append("Chunking quality looks good!")

    report = ChunkQualityReport(
        total_chunks=len(chunks),
        avg_tokens=avg_tokens,
        min_tokens=int(np.min(token_counts)),
        max_tokens=int(np.max(token_counts)),
        std_tokens=std_tokens,
        avg_sentences=float(np.mean(sentence_counts)),
        avg_coherence=avg_coherence,
        min_coherence=float(np.min(coherence)),
        chunks_too_small=too_small,
        chunks_too_large=too_large,
        recommendations=recommendations,
    )
    logger.debug(
        f"Evaluated {report.total_chunks} chunks: avg {avg_tokens:.0f} tokens, "
        f"coherence {avg_coherence:.2f}"
    )
    return report
