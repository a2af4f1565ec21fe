"""Base embedder interface."""

from abc import ABC, abstractmethod


class BaseEmbedder(ABC):
    """Abstract base class for the external embedding service.

    Embedders convert a batch of text strings into vector representations
    with a single request.
    """

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a batch of texts.

        Args:
            texts: Text strings to embed

        Returns:
            Embedding vectors in the same order as the input

        Raises:
            DocChatError: Classified service or request failure
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Size of embedding vectors produced by this embedder."""
        pass

    async def aclose(self) -> None:
        """Release network resources held by the embedder."""
        return None
