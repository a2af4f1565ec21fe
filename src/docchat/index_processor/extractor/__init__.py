"""Text extraction from uploaded files."""

from .base import BaseExtractor
from .factory import ExtractorFactory
from .providers.pdf import PdfExtractor
from .providers.plain_text import PlainTextExtractor

__all__ = ["BaseExtractor", "ExtractorFactory", "PdfExtractor", "PlainTextExtractor"]
