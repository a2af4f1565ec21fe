"""Request-scoped entities for context assembly and chat."""

from enum import StrEnum

from pydantic import BaseModel, Field

from .document import Chunk


class ContextOutcome(StrEnum):
    FOUND = "found"
    NO_RELEVANT_CONTENT = "no_relevant_content"


class ScoredChunk(BaseModel):
    """A candidate chunk selected into a context, with its relevance score."""

    chunk: Chunk
    similarity: float
    token_count: int = 0


class AssembledContext(BaseModel):
    """
    Bounded context text built from the most relevant chunks.

    An empty context is reported through ``outcome`` so callers never send
    an empty prompt to the generation step.
    """

    text: str = ""
    tokens_used: int = 0
    outcome: ContextOutcome = ContextOutcome.NO_RELEVANT_CONTENT
    chunks: list[ScoredChunk] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.outcome == ContextOutcome.NO_RELEVANT_CONTENT

    @classmethod
    def empty(cls) -> "AssembledContext":
        return cls()


class QueryContext(BaseModel):
    """Everything produced while answering one chat request. Never persisted."""

    query: str
    document_ids: list[str] = Field(default_factory=list)
    query_vector: list[float] | None = None
    context: AssembledContext | None = None


class ChatOutcome(StrEnum):
    ANSWERED = "answered"
    NO_CONTENT = "no_content"
    NO_RELEVANT_CONTENT = "no_relevant_content"


class ChatAnswer(BaseModel):
    outcome: ChatOutcome
    content: str = ""
    context: AssembledContext | None = None

    @property
    def answered(self) -> bool:
        return self.outcome == ChatOutcome.ANSWERED


class GenerationRequest(BaseModel):
    """Input handed to the answer generation service."""

    system_prompt: str
    context_text: str
    question: str


class GenerationResult(BaseModel):
    content: str
