"""Embedding service clients.

This module provides the embedder interface, an OpenAI-compatible HTTP
client and a deterministic mock for local use.
"""

from .base import BaseEmbedder
from .providers.mock import MockEmbedder
from .providers.openai_compatible import OpenAIEmbedder

__all__ = ["BaseEmbedder", "MockEmbedder", "OpenAIEmbedder"]
