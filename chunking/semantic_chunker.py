"""
Semantic chunking driven by sentence-embedding similarity.

Chunking determines what the retriever can find. Rather than cutting
fixed windows, this module cuts where meaning shifts:

1. Split the document into sentences (code blocks preserved)
2. Embed every sentence through an EmbeddingProvider
3. Compute similarity between consecutive sentences
4. Place boundaries where similarity drops below an adaptive threshold
5. Assemble chunks within min/max sentence-count bounds

Steps 1, 3, 4 and 5 are pure. Only step 2 awaits.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from embeddings.provider import EmbeddingError, EmbeddingProvider, generate_embeddings_batch

from .boundary_detector import BoundaryDetector
from .errors import (
    AssemblyError,
    EmbeddingGenerationError,
    InvalidConfiguration,
    SentenceSplittingError,
    SimilarityCalculationError,
)
from .sentence_splitter import SentenceSplitter
from .similarity import SimilarityError, mean_similarity, pairwise_similarities
from .types import ChunkMetadata, SemanticChunk

logger = logging.getLogger(__name__)

# Reported when a chunk's internal similarity cannot be computed
FALLBACK_SIMILARITY = 0.5


@dataclass(frozen=True)
class ChunkerConfig:
    """Configuration for semantic chunking."""

    similarity_threshold: float = 0.7
    min_chunk_sentences: int = 3
    max_chunk_sentences: int = 30
    similarity_percentile: int = 50
    min_sentence_length: int = 10
    embedding_batch_size: int = 32
    model_name: str = "all-MiniLM-L6-v2"

    @classmethod
    def technical_docs(cls) -> "ChunkerConfig":
        """Higher threshold and larger chunks for API docs and guides."""
        return cls(similarity_threshold=0.75, max_chunk_sentences=40)

    @classmethod
    def narrative(cls) -> "ChunkerConfig":
        """Looser threshold and smaller chunks for prose."""
        return cls(
            similarity_threshold=0.65,
            max_chunk_sentences=20,
            similarity_percentile=40,
        )

    def validate(self) -> None:
        """
        Check configuration invariants.

        Raises:
            InvalidConfiguration: On the first violated invariant
        """
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise InvalidConfiguration(
                f"similarity_threshold must be between 0.0 and 1.0, "
                f"got {self.similarity_threshold}"
            )
        if self.min_chunk_sentences > self.max_chunk_sentences:
            raise InvalidConfiguration(
                f"max_chunk_sentences ({self.max_chunk_sentences}) must be >= "
                f"min_chunk_sentences ({self.min_chunk_sentences})"
            )
        if not 0 <= self.similarity_percentile <= 100:
            raise InvalidConfiguration(
                f"similarity_percentile must be between 0 and 100, "
                f"got {self.similarity_percentile}"
            )
        if self.min_chunk_sentences < 1:
            raise InvalidConfiguration("min_chunk_sentences must be at least 1")
        if self.min_sentence_length < 0:
            raise InvalidConfiguration("min_sentence_length cannot be negative")
        if self.embedding_batch_size < 1:
            raise InvalidConfiguration("embedding_batch_size must be at least 1")
        if not self.model_name:
            raise InvalidConfiguration("model_name cannot be empty")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except InvalidConfiguration:
            return False
        return True


class ChunkAssembler:
    """
    Turns sentences and detected boundaries into SemanticChunks.

    Size policy:
    - No chunk is larger than max_chunk_sentences.
    - A segment tail smaller than min_chunk_sentences borrows sentences
      from the preceding slice of its own segment when that slice can
      spare them; otherwise it is carried into the next segment.
    - At the end of the document an undersized tail joins the previous
      chunk if that stays within max_chunk_sentences, else it stands alone.
    """

    def __init__(self, config: ChunkerConfig):
        self.config = config

    def plan_ranges(self, n_sentences: int, boundaries: Sequence[int]) -> List[Tuple[int, int]]:
        """
        Compute half-open sentence ranges that partition [0, n_sentences).
        """
        if n_sentences == 0:
            return []

        min_size = self.config.min_chunk_sentences
        max_size = self.config.max_chunk_sentences

        edges = sorted({b for b in boundaries if 0 < b < n_sentences})
        edges.append(n_sentences)

        ranges: List[Tuple[int, int]] = []
        start = 0

        for end in edges:
            is_last = end == n_sentences
            segment_first_range = len(ranges)

            while end - start > max_size:
                ranges.append((start, start + max_size))
                start += max_size

            remaining = end - start
            if remaining >= min_size:
                ranges.append((start, end))
                start = end
                continue

            # Undersized tail: borrow from the previous slice of this segment
            if len(ranges) > segment_first_range:
                prev_start, prev_end = ranges[-1]
                need = min_size - remaining
                if (prev_end - prev_start) - need >= min_size:
                    ranges[-1] = (prev_start, prev_end - need)
                    ranges.append((prev_end - need, end))
                    start = end
                    continue

            if not is_last:
                # Carry forward: start stays put and the next segment absorbs it
                logger.debug(
                    f"Carrying {remaining} sentences at {start} into the next segment"
                )
                continue

            if ranges and end - ranges[-1][0] <= max_size:
                logger.warning(
                    f"Merging {remaining} remaining sentences with last chunk"
                )
                ranges[-1] = (ranges[-1][0], end)
            else:
                ranges.append((start, end))
            start = end

        return ranges

    def chunk_similarity(self, embeddings: Sequence[Sequence[float]], start: int, end: int) -> float:
        """Average similarity inside one chunk."""
        if end - start <= 1:
            return 1.0

        try:
            return mean_similarity(embeddings[start:end])
        except SimilarityError as e:
            logger.warning(
                f"Similarity for sentences [{start}, {end}) failed, "
                f"using {FALLBACK_SIMILARITY}: {e}"
            )
            return FALLBACK_SIMILARITY

    def assemble(
        self,
        sentences: Sequence[str],
        boundaries: Sequence[int],
        embeddings: Sequence[Sequence[float]],
        base_metadata: ChunkMetadata,
    ) -> List[SemanticChunk]:
        """
        Build the ordered chunk list for one document.

        Args:
            sentences: Document sentences
            boundaries: Sentence indices where a new chunk may start
            embeddings: One vector per sentence
            base_metadata: Document metadata copied onto every chunk

        Returns:
            Chunks partitioning the sentence list, in order

        Raises:
            AssemblyError: Sentences and embeddings are not aligned
        """
        if len(embeddings) != len(sentences):
            raise AssemblyError(
                f"Got {len(embeddings)} embeddings for {len(sentences)} sentences"
            )

        ranges = self.plan_ranges(len(sentences), boundaries)
        total_chunks = len(ranges)

        chunks = []
        for index, (start, end) in enumerate(ranges):
            content = " ".join(sentences[start:end])
            chunks.append(
                SemanticChunk(
                    content=content,
                    chunk_index=index,
                    total_chunks=total_chunks,
                    start_sentence=start,
                    end_sentence=end,
                    avg_similarity=self.chunk_similarity(embeddings, start, end),
                    metadata=base_metadata.with_content(content),
                )
            )

        return chunks

    def single_chunk(
        self,
        sentences: Sequence[str],
        document: str,
        base_metadata: ChunkMetadata,
    ) -> List[SemanticChunk]:
        """Whole document as one chunk, for documents below min_chunk_sentences."""
        content = " ".join(sentences) if sentences else document.strip()
        return [
            SemanticChunk(
                content=content,
                chunk_index=0,
                total_chunks=1,
                start_sentence=0,
                end_sentence=len(sentences),
                avg_similarity=1.0,
                metadata=base_metadata.with_content(content),
            )
        ]


class SemanticChunker:
    """
    Embedding-driven semantic chunker.

    Usage:
        chunker = SemanticChunker(ChunkerConfig.technical_docs(), provider)
        chunks = await chunker.chunk_document(text, metadata)

    Construction validates the configuration and raises
    InvalidConfiguration before any document is processed.
    """

    def __init__(self, config: ChunkerConfig, provider: EmbeddingProvider):
        config.validate()
        self.config = config
        self.provider = provider
        self.splitter = SentenceSplitter(config.min_sentence_length)
        self.detector = BoundaryDetector(config)
        self.assembler = ChunkAssembler(config)

    def split(self, content: str) -> List[str]:
        if not isinstance(content, str):
            raise SentenceSplittingError(
                f"Expected document text, got {type(content).__name__}"
            )
        return self.splitter.split(content)

    def chunk_sentences(
        self,
        sentences: Sequence[str],
        embeddings: Sequence[Sequence[float]],
        metadata: Optional[ChunkMetadata] = None,
    ) -> List[SemanticChunk]:
        """
        Chunk pre-split sentences with pre-computed embeddings.

        This is the synchronous core of chunk_document and makes no calls
        to the embedding provider.
        """
        base_metadata = metadata or ChunkMetadata(source_file="unknown")

        if len(sentences) < self.config.min_chunk_sentences:
            return self.assembler.single_chunk(sentences, "", base_metadata)

        try:
            similarities = pairwise_similarities(embeddings)
        except SimilarityError as e:
            raise SimilarityCalculationError(str(e), cause=e) from e

        boundaries = self.detector.detect(similarities)
        logger.debug(f"Detected {len(boundaries)} chunk boundaries")

        return self.assembler.assemble(sentences, boundaries, embeddings, base_metadata)

    async def chunk_document(
        self,
        content: str,
        metadata: Optional[ChunkMetadata] = None,
    ) -> List[SemanticChunk]:
        """
        Chunk a document.

        Args:
            content: Document text
            metadata: Document metadata copied onto every chunk

        Returns:
            Ordered chunks whose sentence ranges partition the document

        Raises:
            ChunkingError: Tagged with the failing stage
        """
        base_metadata = metadata or ChunkMetadata(source_file="unknown")
        sentences = self.split(content)

        logger.info(
            f"Split {base_metadata.source_file} into {len(sentences)} sentences for chunking"
        )

        if len(sentences) < self.config.min_chunk_sentences:
            logger.info(
                f"{base_metadata.source_file} has fewer than "
                f"{self.config.min_chunk_sentences} sentences, keeping it whole"
            )
            return self.assembler.single_chunk(sentences, content, base_metadata)

        try:
            embeddings = await generate_embeddings_batch(
                self.provider,
                self.config.model_name,
                sentences,
                self.config.embedding_batch_size,
            )
        except EmbeddingError as e:
            raise EmbeddingGenerationError(str(e), cause=e) from e

        chunks = self.chunk_sentences(sentences, embeddings, base_metadata)

        logger.info(
            f"Document {base_metadata.source_file} chunked into {len(chunks)} chunks"
        )
        return chunks


async def chunk_document(
    content: str,
    metadata: Optional[ChunkMetadata],
    config: ChunkerConfig,
    provider: EmbeddingProvider,
) -> List[SemanticChunk]:
    """
    Chunk a document in one call.

    Example:
        >>> chunks = await chunk_document(text, ChunkMetadata("guide.md"), ChunkerConfig(), provider)
        >>> for chunk in chunks:
        ...     print(f"Chunk {chunk.chunk_index}: {chunk.sentence_count} sentences")
    """
    return await SemanticChunker(config, provider).chunk_document(content, metadata)
