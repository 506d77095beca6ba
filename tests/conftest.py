"""
Shared pytest fixtures for the chunking tests.

Fixture Organization
--------------------
- **topic_***: a three-topic document with a keyword provider whose vectors
  make every topic shift an exact cosine-0 boundary
- **config**: baseline chunker configuration
- **metadata**: document metadata with deliberately wrong counts, so tests
  can check counts are recomputed per chunk
"""

from typing import List

import pytest

from chunking.semantic_chunker import ChunkerConfig
from chunking.types import ChunkMetadata
from tests.helpers import BREAD_SENTENCES, CAT_SENTENCES, ROCKET_SENTENCES, KeywordProvider


@pytest.fixture
def topic_sentences() -> List[str]:
    return CAT_SENTENCES + ROCKET_SENTENCES + BREAD_SENTENCES


@pytest.fixture
def topic_document() -> str:
    return (
        " ".join(CAT_SENTENCES)
        + "\n\n"
        + " ".join(ROCKET_SENTENCES)
        + "\n"
        + " ".join(BREAD_SENTENCES)
    )


@pytest.fixture
def topic_provider() -> KeywordProvider:
    return KeywordProvider(["cat", "rocket", "bread"])


@pytest.fixture
def config() -> ChunkerConfig:
    return ChunkerConfig(
        similarity_threshold=0.7,
        min_chunk_sentences=3,
        max_chunk_sentences=30,
        similarity_percentile=50,
        min_sentence_length=10,
        embedding_batch_size=5,
        model_name="test-model",
    )


@pytest.fixture
def metadata() -> ChunkMetadata:
    return ChunkMetadata(
        source_file="docs/topics.md",
        title="Topics",
        category="tutorial",
        keywords=["cats", "rockets", "bread"],
        word_count=999,
        char_count=9999,
    )
