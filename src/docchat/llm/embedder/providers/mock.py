"""Mock embedder for local runs and tests (no external API)."""

import hashlib
import random

from loguru import logger

from ..base import BaseEmbedder


class MockEmbedder(BaseEmbedder):
    """Generates deterministic pseudo-random embeddings.

    WARNING: This embedder is NOT suitable for production use.
    Vectors carry no semantic meaning; identical texts map to identical
    vectors across processes.

    Attributes:
        dimension: Embedding vector dimension
        seed: Seed mixed into every text digest
    """

    def __init__(self, dimension: int = 384, seed: int = 42):
        """Initialize the mock embedder.

        Args:
            dimension: Size of embedding vectors
            seed: Seed for deterministic output
        """
        self._dimension = dimension
        self.seed = seed
        logger.warning(
            "Using MockEmbedder - NOT for production use! "
            "Replace with real embedder for actual applications."
        )

    async def embed(self, texts: list[str]) -> list[list[float]]:
        logger.debug(f"Generating {len(texts)} mock embeddings")
        return [self._vector(text) for text in texts]

    def _vector(self, text: str) -> list[float]:
        digest = hashlib.sha256(f"{self.seed}:{text}".encode("utf-8")).digest()
        rng = random.Random(int.from_bytes(digest[:8], "big"))

        vec = [rng.gauss(0, 1) for _ in range(self._dimension)]

        # Normalize to unit length
        magnitude = sum(x**2 for x in vec) ** 0.5
        if magnitude > 0:
            return [x / magnitude for x in vec]
        return [0.0] * self._dimension

    @property
    def dimension(self) -> int:
        return self._dimension
