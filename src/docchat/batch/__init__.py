"""
Batched embedding generation.

Example:
    >>> from docchat.batch import BatchConfig, EmbeddingGenerator
    >>> generator = EmbeddingGenerator(embedder, BatchConfig(batch_size=20))
    >>> states = await generator.embed(texts)
"""

from .config import BatchConfig
from .generator import EmbeddingGenerator, partition, reassemble

__all__ = ["BatchConfig", "EmbeddingGenerator", "partition", "reassemble"]
