"""
Test doubles and builders shared by the test modules.
"""

from typing import Callable, List, Optional, Sequence

from embeddings.provider import EmbeddingProvider


class FunctionProvider(EmbeddingProvider):
    """Embeds each text with a plain function and records every call."""

    def __init__(self, embed_fn: Callable[[str], List[float]]):
        self.embed_fn = embed_fn
        self.calls: List[List[str]] = []

    async def embed_batch(self, model_name: str, texts: List[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        return [self.embed_fn(t) for t in texts]


class KeywordProvider(FunctionProvider):
    """One axis per topic keyword; sentences on the same topic are identical."""

    def __init__(self, topics: Sequence[str]):
        self.topics = [t.lower() for t in topics]
        super().__init__(self._embed)

    def _embed(self, text: str) -> List[float]:
        lowered = text.lower()
        for axis, topic in enumerate(self.topics):
            if topic in lowered:
                vector = [0.0] * len(self.topics)
                vector[axis] = 1.0
                return vector
        raise AssertionError(f"No topic keyword in: {text}")


class ErrorProvider(EmbeddingProvider):
    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    async def embed_batch(self, model_name: str, texts: List[str]) -> List[List[float]]:
        self.calls += 1
        raise self.error


CAT_SENTENCES = [
    "Cats sleep for most of the day.",
    "A cat grooms its fur with a rough tongue.",
    "Many cats enjoy chasing small toys.",
    "Every cat has a unique set of whiskers.",
]

ROCKET_SENTENCES = [
    "Rockets burn fuel to produce thrust.",
    "A rocket must reach orbital velocity to stay in orbit.",
    "Rocket engines are tested on large stands.",
    "Each rocket stage falls away when empty.",
]

BREAD_SENTENCES = [
    "Bread dough needs time to rise.",
    "Sourdough bread relies on wild yeast.",
    "Bakers score bread before baking it.",
    "Fresh bread tastes best on the first day.",
]


def make_sentences(count: int) -> List[str]:
    return [f"Sentence number {i} is right here." for i in range(count)]


def constant_embeddings(count: int, dim: int = 4) -> List[List[float]]:
    return [[1.0] * dim for _ in range(count)]


def chunk_ranges(chunks) -> List[tuple]:
    return [(c.start_sentence, c.end_sentence) for c in chunks]


def assert_partition(chunks, n_sentences: int, max_size: Optional[int] = None) -> None:
    """Ranges are contiguous, ordered and cover [0, n_sentences)."""
    position = 0
    for index, chunk in enumerate(chunks):
        assert chunk.chunk_index == index
        assert chunk.total_chunks == len(chunks)
        assert chunk.start_sentence == position
        assert chunk.end_sentence > chunk.start_sentence
        if max_size is not None:
            assert chunk.sentence_count <= max_size
        position = chunk.end_sentence
    assert position == n_sentences
