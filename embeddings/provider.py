"""
Embedding provider interface and batched generation.

The chunker never talks to a model directly. It depends on an
EmbeddingProvider, which lets tests substitute fixed vectors and lets
deployments point at whichever model server they run.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

Vector = List[float]


class EmbeddingError(Exception):
    """Base error for embedding generation."""


class EmptyText(EmbeddingError):
    def __init__(self):
        super().__init__("Cannot generate embedding for empty text")


class EmbeddingDimensionMismatch(EmbeddingError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}"
        )


class EmbeddingCountMismatch(EmbeddingError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Provider returned {actual} embeddings for a batch of {expected} texts"
        )


class EmbeddingProviderError(EmbeddingError):
    """Unexpected failure inside a provider."""


class EmbeddingProvider(ABC):
    """
    Capability interface for embedding generation.

    Implementations must return one vector per input text, in input
    order, all with the same dimension. Failures are raised as
    EmbeddingError; the chunker treats them as fatal for the document.
    """

    @abstractmethod
    async def embed_batch(self, model_name: str, texts: List[str]) -> List[Vector]:
        """Embed texts with the named model."""


def iter_batches(texts: Sequence[str], batch_size: int) -> List[List[str]]:
    """Split texts into consecutive batches of at most batch_size."""
    return [
        list(texts[i : i + batch_size]) for i in range(0, len(texts), batch_size)
    ]


async def _embed_one_batch(
    provider: EmbeddingProvider,
    model_name: str,
    batch: List[str],
    batch_idx: int,
    total_batches: int,
) -> List[Vector]:
    logger.debug(f"Processing batch {batch_idx + 1}/{total_batches} ({len(batch)} texts)")

    if any(not text.strip() for text in batch):
        raise EmptyText()

    try:
        vectors = await provider.embed_batch(model_name, batch)
    except EmbeddingError:
        raise
    except Exception as e:
        raise EmbeddingProviderError(f"Failed to generate embeddings: {e}") from e

    if len(vectors) != len(batch):
        raise EmbeddingCountMismatch(len(batch), len(vectors))

    return [list(v) for v in vectors]


async def generate_embeddings_batch(
    provider: EmbeddingProvider,
    model_name: str,
    texts: Sequence[str],
    batch_size: int,
) -> List[Vector]:
    """
    Embed texts in batches, issuing all batches concurrently.

    Args:
        provider: Embedding capability
        model_name: Opaque model identifier passed to the provider
        texts: Texts to embed
        batch_size: Maximum texts per provider call

    Returns:
        Vectors index-aligned with texts

    Raises:
        EmbeddingError: Any batch failed or returned inconsistent vectors
    """
    if not texts:
        return []
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    batches = iter_batches(texts, batch_size)
    logger.debug(
        f"Generating embeddings for {len(texts)} texts in {len(batches)} "
        f"batches of up to {batch_size}"
    )

    # gather preserves argument order, so sentence alignment survives
    tasks = [
        asyncio.ensure_future(
            _embed_one_batch(provider, model_name, batch, idx, len(batches))
        )
        for idx, batch in enumerate(batches)
    ]
    try:
        results = await asyncio.gather(*tasks)
    except Exception:
        # One failed batch fails the document; stop the rest
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if pending:
            logger.debug(f"Cancelled {len(pending)} in-flight embedding batches")
        raise

    embeddings: List[Vector] = []
    expected_dimension: Optional[int] = None
    for vectors in results:
        for vector in vectors:
            if expected_dimension is None:
                expected_dimension = len(vector)
            elif len(vector) != expected_dimension:
                raise EmbeddingDimensionMismatch(expected_dimension, len(vector))
            embeddings.append(vector)

    logger.debug(
        f"Generated {len(embeddings)} embeddings with dimension {expected_dimension or 0}"
    )
    return embeddings
