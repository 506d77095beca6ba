"""
Pydantic schemas for handing chunks to the persistence layer.
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, model_validator

from chunking.types import ChunkMetadata, SemanticChunk


class ChunkMetadataRecord(BaseModel):
    """Serialized chunk metadata."""

    source_file: str
    title: Optional[str] = None
    category: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    word_count: int = Field(default=0, ge=0)
    char_count: int = Field(default=0, ge=0)

    @classmethod
    def from_metadata(cls, metadata: ChunkMetadata) -> "ChunkMetadataRecord":
        return cls(
            source_file=metadata.source_file,
            title=metadata.title,
            category=metadata.category,
            keywords=list(metadata.keywords),
            word_count=metadata.word_count,
            char_count=metadata.char_count,
        )

    def to_metadata(self) -> ChunkMetadata:
        return ChunkMetadata(
            source_file=self.source_file,
            title=self.title,
            category=self.category,
            keywords=list(self.keywords),
            word_count=self.word_count,
            char_count=self.char_count,
        )


class SemanticChunkRecord(BaseModel):
    """One chunk as stored by the persistence collaborator."""

    content: str
    chunk_index: int = Field(..., ge=0)
    total_chunks: int = Field(..., ge=1)
    start_sentence: int = Field(..., ge=0, description="Inclusive start index")
    end_sentence: int = Field(..., ge=0, description="Exclusive end index")
    avg_similarity: float = Field(..., ge=-1.0, le=1.0)
    metadata: ChunkMetadataRecord

    @model_validator(mode="after")
    def check_ranges(self) -> "SemanticChunkRecord":
        if self.end_sentence < self.start_sentence:
            raise ValueError("end_sentence must not precede start_sentence")
        if self.chunk_index >= self.total_chunks:
            raise ValueError("chunk_index must be less than total_chunks")
        return self

    @classmethod
    def from_chunk(cls, chunk: SemanticChunk) -> "SemanticChunkRecord":
        return cls(
            content=chunk.content,
            chunk_index=chunk.chunk_index,
            total_chunks=chunk.total_chunks,
            start_sentence=chunk.start_sentence,
            end_sentence=chunk.end_sentence,
            avg_similarity=chunk.avg_similarity,
            metadata=ChunkMetadataRecord.from_metadata(chunk.metadata),
        )

    def to_chunk(self) -> SemanticChunk:
        return SemanticChunk(
            content=self.content,
            chunk_index=self.chunk_index,
            total_chunks=self.total_chunks,
            start_sentence=self.start_sentence,
            end_sentence=self.end_sentence,
            avg_similarity=self.avg_similarity,
            metadata=self.metadata.to_metadata(),
        )


class ChunkedDocument(BaseModel):
    """All chunks produced for one document."""

    source_file: str
    model_name: str
    chunks: List[SemanticChunkRecord]

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


def chunks_to_records(chunks: Sequence[SemanticChunk]) -> List[SemanticChunkRecord]:
    return [SemanticChunkRecord.from_chunk(c) for c in chunks]
