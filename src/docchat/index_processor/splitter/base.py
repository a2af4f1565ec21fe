"""Base splitter interface."""

from abc import ABC, abstractmethod


class BaseSplitter(ABC):
    """Abstract base class for text segmentation.

    Splitters turn the plain text of one document into an ordered list of
    chunk strings suitable for embedding and retrieval.
    """

    @abstractmethod
    def split_text(self, text: str | None) -> list[str]:
        """Split text into chunks.

        Args:
            text: Extracted document text

        Returns:
            Chunk strings in reading order
        """
        pass
