"""Document ingestion and chat pipelines."""

from .chat import ChatPipeline
from .ingestion import IngestionService
from .processor import DocumentProcessor

__all__ = ["ChatPipeline", "DocumentProcessor", "IngestionService"]
