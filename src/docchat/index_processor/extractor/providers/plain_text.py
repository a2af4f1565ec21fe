"""Plain text extractor."""

from loguru import logger

from docchat.entities.document import ExtractionResult
from ..base import BaseExtractor


class PlainTextExtractor(BaseExtractor):
    """Decodes ``text/plain`` uploads.

    Invalid byte sequences are replaced rather than rejected so a single
    stray byte does not fail the whole upload.

    Attributes:
        encoding: Character encoding to decode with (default: utf-8)
    """

    mime_types = ("text/plain",)

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def extract(self, data: bytes) -> ExtractionResult:
        text = data.decode(self.encoding, errors="replace")
        logger.debug(f"Decoded {len(data)} bytes into {len(text)} characters ({self.encoding})")
        return ExtractionResult(text=text, page_count=1, info=None)
