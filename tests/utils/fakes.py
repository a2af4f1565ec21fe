"""Test utilities - Fake collaborators injected through constructors."""

import asyncio

from docchat.datasource.store.in_memory import InMemoryDocumentStore
from docchat.entities.document import Chunk
from docchat.entities.query import GenerationRequest, GenerationResult
from docchat.errors import InvalidRequestError, ServiceConnectionError
from docchat.llm.base import BaseLLM
from docchat.llm.embedder.base import BaseEmbedder
from docchat.llm.tokenizer import BaseTokenizer

DEFAULT_VECTOR = [1.0, 1.0, 1.0]


class FakeEmbedder(BaseEmbedder):
    """
    Keyword driven embedder.

    A text gets the vector of the first keyword it contains, otherwise
    ``DEFAULT_VECTOR``. Faults can be injected per text (``poison``), for the
    first N calls (``fail_times``/``fail_with``) or for every call
    (``unreachable``).
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        poison: tuple[str, ...] = (),
        unreachable: bool = False,
        fail_times: int = 0,
        fail_with: type[Exception] = ServiceConnectionError,
        delays: dict[str, float] | None = None,
    ):
        self.vectors = vectors or {}
        self.poison = poison
        self.unreachable = unreachable
        self.fail_times = fail_times
        self.fail_with = fail_with
        self.delays = delays or {}
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))

        if self.unreachable:
            raise ServiceConnectionError("Embedding service unreachable")
        if self.fail_times > 0:
            self.fail_times -= 1
            raise self.fail_with("Injected failure")
        for text in texts:
            if any(marker in text for marker in self.poison):
                raise InvalidRequestError("Input rejected", details={"text": text[:20]})

        for text in texts:
            for marker, delay in self.delays.items():
                if marker in text:
                    await asyncio.sleep(delay)

        return [self.vector_for(text) for text in texts]

    def vector_for(self, text: str) -> list[float]:
        for keyword, vector in self.vectors.items():
            if keyword in text:
                return list(vector)
        return list(DEFAULT_VECTOR)

    @property
    def dimension(self) -> int:
        return len(DEFAULT_VECTOR)


class WordTokenizer(BaseTokenizer):
    """One token per whitespace separated word."""

    def count_tokens(self, text: str) -> int:
        return len(text.split())


class FakeLLM(BaseLLM):
    """Returns a canned answer and records every request."""

    def __init__(self, content: str = "Generated answer."):
        self.content = content
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        return GenerationResult(content=self.content)


class FlakyDocumentStore(InMemoryDocumentStore):
    """In-memory store whose chunk writes or reads can be made to fail."""

    def __init__(self, fail_chunk_writes_after: int | None = None, unreadable: tuple[str, ...] = ()):
        super().__init__()
        self.fail_chunk_writes_after = fail_chunk_writes_after
        self.unreadable = unreadable
        self.chunk_writes = 0

    async def save_chunks(self, chunks: list[Chunk]) -> None:
        if self.fail_chunk_writes_after is not None and self.chunk_writes >= self.fail_chunk_writes_after:
            raise ConnectionResetError("store connection lost")
        self.chunk_writes += 1
        await super().save_chunks(chunks)

    async def find_chunks_by_document(self, document_id: str) -> list[Chunk]:
        if document_id in self.unreadable:
            raise ConnectionResetError("store connection lost")
        return await super().find_chunks_by_document(document_id)
