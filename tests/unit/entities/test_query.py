"""Tests for request-scoped query entities."""

from docchat.entities.document import Chunk
from docchat.entities.query import (
    AssembledContext,
    ChatAnswer,
    ChatOutcome,
    ContextOutcome,
    QueryContext,
    ScoredChunk,
)


def test_empty_context():
    context = AssembledContext.empty()
    assert context.is_empty
    assert context.outcome == ContextOutcome.NO_RELEVANT_CONTENT
    assert context.text == ""
    assert context.tokens_used == 0


def test_found_context_not_empty():
    scored = ScoredChunk(chunk=Chunk(content="hello", index=0), similarity=0.9, token_count=1)
    context = AssembledContext(text="hello", tokens_used=1, outcome=ContextOutcome.FOUND, chunks=[scored])
    assert not context.is_empty


def test_query_context_defaults():
    query = QueryContext(query="what?")
    assert query.document_ids == []
    assert query.query_vector is None
    assert query.context is None


def test_chat_answer_outcome():
    assert ChatAnswer(outcome=ChatOutcome.ANSWERED, content="yes").answered
    assert not ChatAnswer(outcome=ChatOutcome.NO_RELEVANT_CONTENT).answered
