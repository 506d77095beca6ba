"""
Error taxonomy for the semantic chunking pipeline.

Every error raised out of a chunking run names the stage that failed,
so callers can tell a bad configuration from a flaky embedding service.
Retry policy is the caller's business; nothing here retries.
"""

from enum import Enum
from typing import Optional


class ChunkingStage(str, Enum):
    CONFIGURATION = "configuration"
    SPLITTING = "splitting"
    EMBEDDING = "embedding"
    SIMILARITY = "similarity"
    ASSEMBLY = "assembly"


class ChunkingError(Exception):
    """Base error for a failed chunking run."""

    stage: ChunkingStage = ChunkingStage.ASSEMBLY

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(f"[{self.stage.value}] {message}")


class InvalidConfiguration(ChunkingError):
    """Raised before any document is touched."""

    stage = ChunkingStage.CONFIGURATION


class SentenceSplittingError(ChunkingError):
    stage = ChunkingStage.SPLITTING


class EmbeddingGenerationError(ChunkingError):
    stage = ChunkingStage.EMBEDDING


class SimilarityCalculationError(ChunkingError):
    stage = ChunkingStage.SIMILARITY


class AssemblyError(ChunkingError):
    stage = ChunkingStage.ASSEMBLY
