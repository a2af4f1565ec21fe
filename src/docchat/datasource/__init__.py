"""Persistence for documents and their chunks."""

from .store import BaseDocumentStore, InMemoryDocumentStore

__all__ = ["BaseDocumentStore", "InMemoryDocumentStore"]
