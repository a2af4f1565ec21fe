from .base import BaseDocumentStore
from .in_memory import InMemoryDocumentStore

__all__ = ["BaseDocumentStore", "InMemoryDocumentStore"]
