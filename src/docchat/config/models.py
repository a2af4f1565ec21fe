"""Configuration models for pipeline components.

Each component receives its own pydantic model so that defaults live in one
place and callers override only what they need.
"""

from pydantic import BaseModel, Field

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant that answers questions based on the provided context. "
    "Always be accurate and concise."
)

DEFAULT_USER_PROMPT_TEMPLATE = """Use the following context to answer the question. If you cannot answer the question based on the context, say so.

Context:
{context}

Question: {question}

Answer:"""


class SegmenterConfig(BaseModel):
    """Segmentation settings used at ingestion time.

    Attributes:
        max_chunk_size: Maximum characters per chunk
    """

    max_chunk_size: int = Field(default=1000, gt=0)


class RetrievalConfig(BaseModel):
    """Context assembly settings.

    Attributes:
        similarity_threshold: Minimum cosine similarity for a chunk to be used
        max_chunks: Maximum number of chunks considered after ranking
        max_context_tokens: Token ceiling for the assembled context
    """

    similarity_threshold: float = Field(default=0.7, ge=-1.0, le=1.0)
    max_chunks: int = Field(default=15, ge=1)
    max_context_tokens: int = Field(default=50000, ge=0)


class GenerationConfig(BaseModel):
    """Answer generation settings."""

    model: str = "gpt-4-1106-preview"
    temperature: float = Field(default=0.5, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4000, ge=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    user_prompt_template: str = DEFAULT_USER_PROMPT_TEMPLATE
    fallback_answer: str = "Sorry, I couldn't generate a response."


class IngestionConfig(BaseModel):
    """Upload handling settings.

    Attributes:
        max_file_size: Largest accepted upload in bytes
        storage_batch_size: Chunks written per persistence call
        compensate_on_chunk_failure: Delete the document record again when
            its chunks cannot be written
    """

    max_file_size: int = Field(default=10 * 1024 * 1024, gt=0)
    storage_batch_size: int = Field(default=100, ge=1)
    compensate_on_chunk_failure: bool = True
