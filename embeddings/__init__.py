"""
Embeddings Module.

CRITICAL: Never mix vectors from different models in the same document.

This module handles:
- The EmbeddingProvider capability used by the chunker
- Concurrent, order-preserving batch generation
- A local sentence-transformers provider

The local provider pulls in torch, so it is imported explicitly:

    from embeddings.embedder import SentenceTransformerProvider

Usage:
    from embeddings import generate_embeddings_batch

    vectors = await generate_embeddings_batch(provider, "all-MiniLM-L6-v2", texts, 32)
"""

from .provider import (
    EmbeddingCountMismatch,
    EmbeddingDimensionMismatch,
    EmbeddingError,
    EmbeddingProvider,
    EmbeddingProviderError,
    EmptyText,
    generate_embeddings_batch,
    iter_batches,
)

__all__ = [
    "EmbeddingProvider",
    "EmbeddingError",
    "EmptyText",
    "EmbeddingDimensionMismatch",
    "EmbeddingCountMismatch",
    "EmbeddingProviderError",
    "generate_embeddings_batch",
    "iter_batches",
]
