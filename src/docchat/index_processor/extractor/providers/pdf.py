"""PDF extractor."""

from __future__ import annotations

import io
from typing import Any

from loguru import logger
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from docchat.entities.document import ExtractionResult
from docchat.errors import ExtractionError
from ..base import BaseExtractor


class PdfExtractor(BaseExtractor):
    """Extracts text from ``application/pdf`` uploads with pypdf.

    Pages are joined with a blank line so page boundaries become paragraph
    boundaries for the splitter. Pages that fail to extract are skipped with
    a warning; a file that cannot be opened at all raises ExtractionError.

    Attributes:
        pages: Optional (start, end) page range, None means all pages
    """

    mime_types = ("application/pdf",)

    def __init__(self, pages: tuple[int, int] | None = None):
        self.pages = pages

    def extract(self, data: bytes) -> ExtractionResult:
        try:
            reader = PdfReader(io.BytesIO(data))
            total_pages = len(reader.pages)
        except (PdfReadError, ValueError, OSError) as e:
            logger.error(f"Failed to open PDF ({len(data)} bytes): {e}")
            raise ExtractionError(
                f"Invalid PDF file: {e}",
                details={"size": len(data)},
                original_error=e,
            ) from e

        if self.pages:
            start, end = self.pages
            start = max(0, start)
            end = min(total_pages, end)
        else:
            start, end = 0, total_pages

        text_content = []
        for page_num in range(start, end):
            try:
                text = reader.pages[page_num].extract_text()
            except Exception as e:
                logger.warning(f"Failed to extract page {page_num}: {e}")
                continue
            if text and text.strip():
                text_content.append(text.strip())

        content = "\n\n".join(text_content)
        if not content:
            logger.warning(f"No text content extracted from {total_pages}-page PDF")

        logger.info(f"Parsed PDF: {total_pages} pages, {len(content)} characters extracted")
        return ExtractionResult(text=content, page_count=total_pages, info=self._document_info(reader))

    @staticmethod
    def _document_info(reader: PdfReader) -> dict[str, Any] | None:
        try:
            metadata = reader.metadata
        except (PdfReadError, ValueError) as e:
            logger.debug(f"PDF metadata unreadable: {e}")
            return None
        if not metadata:
            return None
        return {key.lstrip("/"): str(value) for key, value in metadata.items()}
