"""Text segmentation."""

from .base import BaseSplitter
from .providers.paragraph_sentence import (
    PARAGRAPH_BREAK,
    ParagraphSentenceSplitter,
    segment,
)

__all__ = ["BaseSplitter", "PARAGRAPH_BREAK", "ParagraphSentenceSplitter", "segment"]
