"""Paragraph and sentence aware text splitter.

Text is packed greedily into chunks while respecting semantic boundaries in
order of preference:
1. Blank lines (paragraphs)
2. Sentence terminators (".", "!", "?" followed by whitespace)
3. Whitespace (words), only for sentences longer than the chunk size

Chunks never overlap, so joining them in order gives back the source text up
to whitespace normalization.
"""

import re

from loguru import logger

from ..base import BaseSplitter

PARAGRAPH_BREAK = "\n\n"

_PARAGRAPH_PATTERN = re.compile(r"\n\s*\n")
_SENTENCE_PATTERN = re.compile(r"(?<=[.!?])\s+")


class ParagraphSentenceSplitter(BaseSplitter):
    """Greedy hierarchical splitter that keeps reading order.

    Sentences are accumulated into a buffer until the next one would push it
    past ``max_chunk_size``. A sentence that alone exceeds the limit is split
    into words and packed the same way; a single word longer than the limit
    is kept whole. Between paragraphs a ``PARAGRAPH_BREAK`` is appended to
    the buffer when it fits, otherwise the buffer is flushed.

    Attributes:
        max_chunk_size: Maximum characters per chunk
    """

    def __init__(self, max_chunk_size: int = 1000):
        """Initialize the splitter.

        Args:
            max_chunk_size: Maximum characters per chunk

        Raises:
            ValueError: If max_chunk_size <= 0
        """
        if max_chunk_size <= 0:
            raise ValueError("max_chunk_size must be positive")

        self.max_chunk_size = max_chunk_size

    def split_text(self, text: str | None) -> list[str]:
        """Split text into chunks.

        Args:
            text: Extracted document text. ``None`` or empty input yields no chunks.

        Returns:
            Non-empty, trimmed chunk strings in reading order
        """
        if not text or not text.strip():
            return []

        chunks: list[str] = []
        buffer = ""

        for paragraph in _PARAGRAPH_PATTERN.split(text):
            paragraph = paragraph.strip()
            if not paragraph:
                continue

            for sentence in _SENTENCE_PATTERN.split(paragraph):
                sentence = sentence.strip()
                if not sentence:
                    continue

                if len(sentence) > self.max_chunk_size:
                    buffer = self._flush(buffer, chunks)
                    chunks.extend(self._split_words(sentence))
                    continue

                candidate = self._join(buffer, sentence)
                if buffer and len(candidate) > self.max_chunk_size:
                    buffer = self._flush(buffer, chunks)
                    candidate = sentence
                buffer = candidate

            if buffer:
                if len(buffer) + len(PARAGRAPH_BREAK) <= self.max_chunk_size:
                    buffer += PARAGRAPH_BREAK
                else:
                    buffer = self._flush(buffer, chunks)

        self._flush(buffer, chunks)

        logger.debug(
            f"Split {len(text)} characters into {len(chunks)} chunks "
            f"(max_chunk_size={self.max_chunk_size})"
        )
        return chunks

    def _split_words(self, sentence: str) -> list[str]:
        """Pack the words of an oversized sentence into chunks."""
        pieces: list[str] = []
        buffer = ""

        for word in sentence.split():
            candidate = f"{buffer} {word}" if buffer else word
            if buffer and len(candidate) > self.max_chunk_size:
                pieces.append(buffer)
                candidate = word
            buffer = candidate

        if buffer:
            pieces.append(buffer)
        return pieces

    @staticmethod
    def _join(buffer: str, sentence: str) -> str:
        if not buffer:
            return sentence
        if buffer.endswith(PARAGRAPH_BREAK):
            return buffer + sentence
        return f"{buffer} {sentence}"

    @staticmethod
    def _flush(buffer: str, chunks: list[str]) -> str:
        chunk = buffer.strip()
        if chunk:
            chunks.append(chunk)
        return ""


def segment(text: str | None, max_chunk_size: int = 1000) -> list[str]:
    """Split text into bounded-size chunks in reading order.

    Args:
        text: Text to segment
        max_chunk_size: Maximum characters per chunk

    Returns:
        Ordered chunk strings (empty for empty input)
    """
    return ParagraphSentenceSplitter(max_chunk_size=max_chunk_size).split_text(text)
