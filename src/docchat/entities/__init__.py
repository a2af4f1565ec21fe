"""Entities shared across the ingestion and retrieval pipeline."""

from .document import (
    Chunk,
    Document,
    DocumentMetadata,
    Embedded,
    EmbeddingState,
    ExtractionResult,
    ProcessedDocument,
    ProcessingStage,
    Unembedded,
)
from .query import (
    AssembledContext,
    ChatAnswer,
    ChatOutcome,
    ContextOutcome,
    GenerationRequest,
    GenerationResult,
    QueryContext,
    ScoredChunk,
)

__all__ = [
    "AssembledContext",
    "ChatAnswer",
    "ChatOutcome",
    "Chunk",
    "ContextOutcome",
    "Document",
    "DocumentMetadata",
    "Embedded",
    "EmbeddingState",
    "ExtractionResult",
    "GenerationRequest",
    "GenerationResult",
    "ProcessedDocument",
    "ProcessingStage",
    "QueryContext",
    "ScoredChunk",
    "Unembedded",
]
