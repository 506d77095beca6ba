"""
Semantic Chunking Module.

Chunking determines what the retriever can find.
This module splits documents where meaning shifts:
- Sentence splitting that keeps code blocks and abbreviations intact
- Cosine similarity between adjacent sentence embeddings
- Adaptive, percentile-based boundary detection
- Chunk assembly within min/max sentence bounds

Usage:
    from chunking import ChunkerConfig, SemanticChunker

    chunker = SemanticChunker(ChunkerConfig(), provider)
    chunks = await chunker.chunk_document(text, metadata)
"""

from .boundary_detector import BoundaryDetector, detect_boundaries, effective_threshold
from .chunk_eval_tools import ChunkQualityReport, evaluate_chunk_quality, num_tokens
from .errors import (
    AssemblyError,
    ChunkingError,
    ChunkingStage,
    EmbeddingGenerationError,
    InvalidConfiguration,
    SentenceSplittingError,
    SimilarityCalculationError,
)
from .semantic_chunker import ChunkAssembler, ChunkerConfig, SemanticChunker, chunk_document
from .sentence_splitter import SentenceSplitter, split_into_sentences
from .similarity import (
    DimensionMismatch,
    InvalidSimilarityValue,
    SimilarityError,
    ZeroVector,
    cosine_similarity,
    mean_similarity,
    pairwise_similarities,
    percentile,
)
from .types import ChunkMetadata, SemanticChunk

__all__ = [
    "SemanticChunker",
    "ChunkerConfig",
    "ChunkAssembler",
    "chunk_document",
    "SemanticChunk",
    "ChunkMetadata",
    "SentenceSplitter",
    "split_into_sentences",
    "BoundaryDetector",
    "detect_boundaries",
    "effective_threshold",
    "cosine_similarity",
    "pairwise_similarities",
    "percentile",
    "mean_similarity",
    "SimilarityError",
    "DimensionMismatch",
    "ZeroVector",
    "InvalidSimilarityValue",
    "ChunkingError",
    "ChunkingStage",
    "InvalidConfiguration",
    "SentenceSplittingError",
    "EmbeddingGenerationError",
    "SimilarityCalculationError",
    "AssemblyError",
    "evaluate_chunk_quality",
    "ChunkQualityReport",
    "num_tokens",
]
