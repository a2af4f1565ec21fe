"""Document and chunk entities produced by ingestion."""

from datetime import datetime, timezone
from enum import StrEnum
from pathlib import PurePath
from typing import Annotated, Any, Literal
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Embedded(BaseModel):
    """A chunk whose embedding was generated."""

    kind: Literal["embedded"] = "embedded"
    vector: list[float] = Field(..., min_length=1)

    model_config = {"frozen": True}


class Unembedded(BaseModel):
    """A chunk whose embedding could not be generated after retry."""

    kind: Literal["unembedded"] = "unembedded"
    reason: str | None = None

    model_config = {"frozen": True}


EmbeddingState = Annotated[Embedded | Unembedded, Field(discriminator="kind")]


class Chunk(BaseModel):
    """
    A bounded-size segment of a document's text.

    ``index`` is the zero-based position within the source document and
    orders chunks back into reading order.
    """

    content: str = Field(..., min_length=1)
    index: int = Field(..., ge=0)
    embedding: EmbeddingState = Field(default_factory=Unembedded)
    page_number: int | None = None
    document_id: str | None = None

    @property
    def is_embedded(self) -> bool:
        return isinstance(self.embedding, Embedded)

    @property
    def vector(self) -> list[float] | None:
        if isinstance(self.embedding, Embedded):
            return self.embedding.vector
        return None


class DocumentMetadata(BaseModel):
    """Summary metadata aggregated during ingestion."""

    pages: int = 0
    info: dict[str, Any] | None = None
    total_chunks: int = 0


class ExtractionResult(BaseModel):
    """Plain text pulled out of an uploaded file."""

    text: str
    page_count: int = 1
    info: dict[str, Any] | None = None


class ProcessedDocument(BaseModel):
    """Output of one ingestion pass, ready to be persisted."""

    text: str
    chunks: list[Chunk] = Field(default_factory=list)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)


class ProcessingStage(StrEnum):
    RECEIVED = "received"
    EXTRACTED = "extracted"
    SEGMENTED = "segmented"
    EMBEDDED = "embedded"
    DONE = "done"
    FAILED = "failed"


class Document(BaseModel):
    """
    One uploaded artifact. Owns the chunks created from it.

    Chunks are stored separately by the persistence store and reference the
    document through ``Chunk.document_id``.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    title: str
    file_name: str
    mime_type: str
    file_size: int = Field(..., ge=0)
    text: str = ""
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @staticmethod
    def title_from_file_name(file_name: str) -> str:
        """Strip the final extension: ``report.v2.pdf`` -> ``report.v2``."""
        name = PurePath(file_name).name
        stem, dot, _ = name.rpartition(".")
        return stem if dot and stem else name
