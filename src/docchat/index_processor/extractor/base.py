"""Base extractor interface."""

from abc import ABC, abstractmethod

from docchat.entities.document import ExtractionResult


class BaseExtractor(ABC):
    """Abstract base class for text extraction.

    Extractors turn the raw bytes of an uploaded file into plain text plus
    page count and format-specific document info.
    """

    #: MIME types this extractor handles
    mime_types: tuple[str, ...] = ()

    @abstractmethod
    def extract(self, data: bytes) -> ExtractionResult:
        """Extract text from file content.

        Args:
            data: Raw file bytes

        Returns:
            Extracted text, page count and document info

        Raises:
            ExtractionError: If the content is corrupt or unparseable
        """
        pass
