"""Test builders - Use builder pattern to create test objects."""

import math

from docchat.entities.document import Chunk, Embedded, Unembedded


def vector_with_similarity(similarity: float) -> list[float]:
    """2-d unit vector whose cosine similarity to [1, 0] is ``similarity``."""
    return [similarity, math.sqrt(max(0.0, 1.0 - similarity * similarity))]


class ChunkBuilder:
    """Builder for Chunk entity."""

    def __init__(self):
        self._content = "Sample chunk content"
        self._index = 0
        self._embedding = Unembedded()
        self._document_id = "doc-1"
        self._page_number = None

    def with_content(self, content: str):
        self._content = content
        return self

    def with_index(self, index: int):
        self._index = index
        return self

    def with_vector(self, vector: list[float]):
        self._embedding = Embedded(vector=vector)
        return self

    def with_similarity(self, similarity: float):
        """Embed so that the chunk scores ``similarity`` against [1, 0]."""
        return self.with_vector(vector_with_similarity(similarity))

    def unembedded(self, reason: str | None = None):
        self._embedding = Unembedded(reason=reason)
        return self

    def with_document(self, document_id: str):
        self._document_id = document_id
        return self

    def with_page(self, page_number: int):
        self._page_number = page_number
        return self

    def build(self) -> Chunk:
        return Chunk(
            content=self._content,
            index=self._index,
            embedding=self._embedding,
            document_id=self._document_id,
            page_number=self._page_number,
        )
