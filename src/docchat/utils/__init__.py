"""Utility functions for DocChat."""

from .logging_config import configure_logging
from .performance import Timing, timer
from .retry import RetryPolicy, RetryState
from .similarity import cosine_similarity, embedding_similarity

__all__ = [
    "configure_logging",
    "cosine_similarity",
    "embedding_similarity",
    "RetryPolicy",
    "RetryState",
    "Timing",
    "timer",
]
