"""Test utilities - Test assertions helpers."""

from docchat.entities.document import Chunk
from docchat.entities.query import AssembledContext


def assert_chunks_in_order(chunks: list[Chunk]):
    assert [c.index for c in chunks] == list(range(len(chunks)))


def assert_chunk_sizes(chunks: list[str], max_chunk_size: int):
    """Every chunk is non-empty and within the limit unless it is a single word."""
    for chunk in chunks:
        assert chunk.strip() == chunk
        assert chunk
        if len(chunk) > max_chunk_size:
            assert len(chunk.split()) == 1, f"oversized multi-word chunk: {chunk[:40]!r}"


def assert_similarities_descending(context: AssembledContext):
    scores = [s.similarity for s in context.chunks]
    assert scores == sorted(scores, reverse=True)
