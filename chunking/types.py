"""
Core value types produced by semantic chunking.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional


def count_words(text: str) -> int:
    return len(text.split())


@dataclass(frozen=True)
class ChunkMetadata:
    """
    Source-document metadata attached to every chunk.

    word_count and char_count describe the chunk they are attached to,
    not the whole source document.
    """

    source_file: str
    title: Optional[str] = None
    category: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    word_count: int = 0
    char_count: int = 0

    @classmethod
    def for_content(
        cls,
        source_file: str,
        content: str,
        title: Optional[str] = None,
        category: Optional[str] = None,
        keywords: Optional[List[str]] = None,
    ) -> "ChunkMetadata":
        """Build metadata with counts computed from content."""
        return cls(
            source_file=source_file,
            title=title,
            category=category,
            keywords=list(keywords or []),
            word_count=count_words(content),
            char_count=len(content),
        )

    def with_content(self, content: str) -> "ChunkMetadata":
        """Copy of this metadata with counts recomputed for content."""
        return replace(
            self,
            keywords=list(self.keywords),
            word_count=count_words(content),
            char_count=len(content),
        )


@dataclass(frozen=True)
class SemanticChunk:
    """
    A contiguous run of sentences that stays on one topic.

    start_sentence and end_sentence form a half-open range [start, end)
    into the document's sentence list.
    """

    content: str
    chunk_index: int
    total_chunks: int
    start_sentence: int
    end_sentence: int
    avg_similarity: float
    metadata: ChunkMetadata

    @property
    def sentence_count(self) -> int:
        return self.end_sentence - self.start_sentence

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
