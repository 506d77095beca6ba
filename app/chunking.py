"""
Service-level entry point for semantic chunking.

Wires environment settings, the embedding provider and the chunker
together, and returns records ready for the persistence layer.
"""

import logging
from typing import List, Optional

from chunking.semantic_chunker import SemanticChunker
from chunking.types import ChunkMetadata
from embeddings.provider import EmbeddingProvider
from shared.schemas import ChunkedDocument, chunks_to_records

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


def default_provider(settings: Settings) -> EmbeddingProvider:
    """Local sentence-transformers provider configured from settings."""
    # Imported here: the local provider pulls in torch
    from embeddings.embedder import EmbedderSettings, SentenceTransformerProvider

    return SentenceTransformerProvider(
        EmbedderSettings(normalize=settings.EMBEDDING_NORMALIZE)
    )


def build_chunker(
    settings: Optional[Settings] = None,
    provider: Optional[EmbeddingProvider] = None,
) -> SemanticChunker:
    """
    Create a chunker from settings.

    Raises:
        InvalidConfiguration: Settings describe an invalid chunker
    """
    settings = settings or get_settings()
    provider = provider or default_provider(settings)
    config = settings.chunker_config()
    logger.info(
        f"Building chunker: model={config.model_name}, "
        f"threshold={config.similarity_threshold}, "
        f"percentile={config.similarity_percentile}, "
        f"sentences={config.min_chunk_sentences}-{config.max_chunk_sentences}"
    )
    return SemanticChunker(config, provider)


async def chunk_text(
    chunker: SemanticChunker,
    text: str,
    source_file: str,
    title: Optional[str] = None,
    category: Optional[str] = None,
    keywords: Optional[List[str]] = None,
) -> ChunkedDocument:
    """
    Chunk one document and package the result for storage.

    Example:
        >>> chunker = build_chunker()
        >>> doc = await chunk_text(chunker, text, "docs/guide.md", title="Guide")
        >>> print(f"{doc.source_file}: {doc.total_chunks} chunks")
    """
    metadata = ChunkMetadata.for_content(
        source_file, text, title=title, category=category, keywords=keywords
    )
    chunks = await chunker.chunk_document(text, metadata)
    return ChunkedDocument(
        source_file=source_file,
        model_name=chunker.config.model_name,
        chunks=chunks_to_records(chunks),
    )
