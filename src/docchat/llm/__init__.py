"""Clients for the external model services: embeddings, tokenization, generation."""

from .base import BaseLLM
from .embedder import BaseEmbedder, MockEmbedder, OpenAIEmbedder
from .providers.openai_chat import OpenAIChatLLM
from .tokenizer import BaseTokenizer, TiktokenTokenizer

__all__ = [
    "BaseEmbedder",
    "BaseLLM",
    "BaseTokenizer",
    "MockEmbedder",
    "OpenAIChatLLM",
    "OpenAIEmbedder",
    "TiktokenTokenizer",
]
