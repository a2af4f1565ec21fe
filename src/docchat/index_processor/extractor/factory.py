"""Extractor factory: dispatches uploads to an extractor by MIME type."""

from loguru import logger

from docchat.errors import UnsupportedFileTypeError
from .base import BaseExtractor
from .providers.pdf import PdfExtractor
from .providers.plain_text import PlainTextExtractor


class ExtractorFactory:
    """Extractor registry keyed by MIME type.

    Built-in support:
    - text/plain: PlainTextExtractor
    - application/pdf: PdfExtractor
    """

    def __init__(self, extractors: list[BaseExtractor] | None = None):
        self._registry: dict[str, BaseExtractor] = {}
        for extractor in extractors or [PlainTextExtractor(), PdfExtractor()]:
            self.register(extractor)

    def register(self, extractor: BaseExtractor) -> None:
        """Register an extractor for every MIME type it declares.

        Raises:
            TypeError: If extractor is not a BaseExtractor
        """
        if not isinstance(extractor, BaseExtractor):
            raise TypeError(f"{type(extractor).__name__} must be a subclass of BaseExtractor")

        for mime_type in extractor.mime_types:
            self._registry[mime_type.lower()] = extractor
            logger.debug(f"Registered extractor for '{mime_type}': {type(extractor).__name__}")

    def for_mime_type(self, mime_type: str) -> BaseExtractor:
        """Look up the extractor for a MIME type.

        Parameters such as ``; charset=utf-8`` are ignored.

        Raises:
            UnsupportedFileTypeError: If no extractor handles the type
        """
        key = (mime_type or "").split(";", 1)[0].strip().lower()
        extractor = self._registry.get(key)
        if extractor is None:
            raise UnsupportedFileTypeError(mime_type, supported=self.list_types())
        return extractor

    def list_types(self) -> list[str]:
        return sorted(self._registry)
