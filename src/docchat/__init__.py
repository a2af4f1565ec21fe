"""
DocChat - document ingestion and grounded question answering.

Uploaded documents are extracted, segmented into chunks and embedded; at
question time the most relevant chunks are packed into a bounded context for
an answer generation model.
"""

__version__ = "0.1.0"

# Entities
from .entities import (
    AssembledContext,
    ChatAnswer,
    ChatOutcome,
    Chunk,
    ContextOutcome,
    Document,
    DocumentMetadata,
    Embedded,
    EmbeddingState,
    ProcessedDocument,
    ProcessingStage,
    QueryContext,
    ScoredChunk,
    Unembedded,
)

# Configuration
from .config import (
    GenerationConfig,
    IngestionConfig,
    RetrievalConfig,
    SegmenterConfig,
    Settings,
    load_settings,
)

# Components
from .batch import BatchConfig, EmbeddingGenerator
from .datasource import BaseDocumentStore, InMemoryDocumentStore
from .index_processor.extractor import BaseExtractor, ExtractorFactory, PdfExtractor, PlainTextExtractor
from .index_processor.splitter import BaseSplitter, ParagraphSentenceSplitter, segment
from .llm import (
    BaseEmbedder,
    BaseLLM,
    BaseTokenizer,
    MockEmbedder,
    OpenAIChatLLM,
    OpenAIEmbedder,
    TiktokenTokenizer,
)
from .retrieval import ContextAssembler
from .config.factory import ComponentFactory

# Pipelines
from .pipeline import ChatPipeline, DocumentProcessor, IngestionService

# Utilities
from .utils import RetryPolicy, configure_logging, cosine_similarity, embedding_similarity

__all__ = [
    # Version
    "__version__",
    # Entities
    "AssembledContext",
    "ChatAnswer",
    "ChatOutcome",
    "Chunk",
    "ContextOutcome",
    "Document",
    "DocumentMetadata",
    "Embedded",
    "EmbeddingState",
    "ProcessedDocument",
    "ProcessingStage",
    "QueryContext",
    "ScoredChunk",
    "Unembedded",
    # Configuration
    "BatchConfig",
    "GenerationConfig",
    "IngestionConfig",
    "RetrievalConfig",
    "SegmenterConfig",
    "Settings",
    "load_settings",
    # Components
    "BaseDocumentStore",
    "BaseEmbedder",
    "BaseExtractor",
    "BaseLLM",
    "BaseSplitter",
    "BaseTokenizer",
    "ComponentFactory",
    "ContextAssembler",
    "EmbeddingGenerator",
    "ExtractorFactory",
    "InMemoryDocumentStore",
    "MockEmbedder",
    "OpenAIChatLLM",
    "OpenAIEmbedder",
    "ParagraphSentenceSplitter",
    "PdfExtractor",
    "PlainTextExtractor",
    "TiktokenTokenizer",
    "segment",
    # Pipelines
    "ChatPipeline",
    "DocumentProcessor",
    "IngestionService",
    # Utilities
    "RetryPolicy",
    "configure_logging",
    "cosine_similarity",
    "embedding_similarity",
]
