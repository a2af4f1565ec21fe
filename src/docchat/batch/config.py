"""
Embedding batch configuration.

Controls how chunk texts are grouped into requests to the embedding service
and how many attempts each request gets.
"""

from dataclasses import dataclass


@dataclass
class BatchConfig:
    """
    Configuration for batched embedding generation.

    Attributes:
        batch_size: Number of texts sent to the embedding service in one
            request. Batches run strictly one after another.
            Default: 20

        batch_delay: Pause in seconds between consecutive batches, to avoid
            saturating the embedding service.
            Default: 0.2

        max_attempts: Attempts per batch request and per isolated item,
            including the first one.
            Default: 2 (one retry)

    Example:
        >>> config = BatchConfig(batch_size=50, batch_delay=0.0)
    """

    batch_size: int = 20
    batch_delay: float = 0.2
    max_attempts: int = 2

    def __post_init__(self):
        """Validate configuration values."""
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.batch_delay < 0:
            raise ValueError("batch_delay must be non-negative")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
