"""
Configuration module for the chunking service.
Reads settings from environment variables; there are no config files.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from chunking.semantic_chunker import ChunkerConfig

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    """Main application settings loaded from environment."""

    # Application settings
    DEBUG: bool = field(default_factory=lambda: _env_bool("DEBUG", "false"))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Embedding settings
    EMBEDDING_MODEL: str = field(
        default_factory=lambda: os.getenv("EMBEDDING_MODEL", "all-MiniLM-L6-v2")
    )
    EMBEDDING_NORMALIZE: bool = field(
        default_factory=lambda: _env_bool("EMBEDDING_NORMALIZE", "true")
    )
    EMBEDDING_BATCH_SIZE: int = field(
        default_factory=lambda: int(os.getenv("EMBEDDING_BATCH_SIZE", "32"))
    )

    # Chunking settings
    CHUNK_SIMILARITY_THRESHOLD: float = field(
        default_factory=lambda: float(os.getenv("CHUNK_SIMILARITY_THRESHOLD", "0.7"))
    )
    CHUNK_SIMILARITY_PERCENTILE: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_SIMILARITY_PERCENTILE", "50"))
    )
    CHUNK_MIN_SENTENCES: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_MIN_SENTENCES", "3"))
    )
    CHUNK_MAX_SENTENCES: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_MAX_SENTENCES", "30"))
    )
    CHUNK_MIN_SENTENCE_LENGTH: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_MIN_SENTENCE_LENGTH", "10"))
    )

    def chunker_config(self) -> ChunkerConfig:
        """Build a ChunkerConfig; validation happens when a chunker is created."""
        return ChunkerConfig(
            similarity_threshold=self.CHUNK_SIMILARITY_THRESHOLD,
            min_chunk_sentences=self.CHUNK_MIN_SENTENCES,
            max_chunk_sentences=self.CHUNK_MAX_SENTENCES,
            similarity_percentile=self.CHUNK_SIMILARITY_PERCENTILE,
            min_sentence_length=self.CHUNK_MIN_SENTENCE_LENGTH,
            embedding_batch_size=self.EMBEDDING_BATCH_SIZE,
            model_name=self.EMBEDDING_MODEL,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from LOG_LEVEL (DEBUG forces debug output)."""
    settings = get_settings()
    if level is None:
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
