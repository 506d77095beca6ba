"""
Local embedding provider backed by sentence-transformers.

CRITICAL: Never mix vectors from different models in one document.
The chunker passes the same model_name for every batch of a run.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
from sentence_transformers import SentenceTransformer

from .provider import EmbeddingProvider, EmbeddingProviderError, Vector

logger = logging.getLogger(__name__)


@dataclass
class EmbedderSettings:
    """Preprocessing and output options for the local provider."""

    normalize: bool = True
    max_seq_length: int = 512
    device: Optional[str] = None


class SentenceTransformerProvider(EmbeddingProvider):
    """
    EmbeddingProvider running sentence-transformers models in-process.

    Encoding is CPU/GPU bound, so it runs in a worker thread to keep the
    event loop free while other batches are in flight.

    Usage:
        provider = SentenceTransformerProvider()
        vectors = await provider.embed_batch("all-MiniLM-L6-v2", ["text1", "text2"])
    """

    def __init__(self, settings: Optional[EmbedderSettings] = None):
        self.settings = settings or EmbedderSettings()
        self._models: Dict[str, SentenceTransformer] = {}

    def model(self, model_name: str) -> SentenceTransformer:
        """Lazy load a model by name."""
        if model_name not in self._models:
            logger.info(f"Loading embedding model: {model_name}")
            self._models[model_name] = SentenceTransformer(
                model_name, device=self.settings.device
            )
        return self._models[model_name]

    def preprocess_text(self, text: str) -> str:
        """
        Deterministic text preprocessing.

        Keep this stable: changing it changes every vector.
        """
        text = " ".join(text.split())

        max_chars = self.settings.max_seq_length * 4  # Approximate
        if len(text) > max_chars:
            text = text[:max_chars]

        return text

    def encode(self, model_name: str, texts: List[str]) -> np.ndarray:
        processed = [self.preprocess_text(t) for t in texts]
        try:
            vectors = self.model(model_name).encode(
                processed, show_progress_bar=False, convert_to_numpy=True
            )
        except Exception as e:
            raise EmbeddingProviderError(
                f"Model {model_name} failed to encode {len(texts)} texts: {e}"
            ) from e

        # Normalize to unit length for cosine similarity
        if self.settings.normalize:
            norms = np.linalg.norm(vectors, axis=1, keepdims=True)
            vectors = vectors / (norms + 1e-10)

        return vectors

    async def embed_batch(self, model_name: str, texts: List[str]) -> List[Vector]:
        vectors = await asyncio.to_thread(self.encode, model_name, texts)
        return vectors.tolist()
