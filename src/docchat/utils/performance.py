"""Stage timing for pipeline logs."""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from loguru import logger


@dataclass
class Timing:
    """Duration of one timed block, filled in when the block exits."""

    operation: str
    elapsed_ms: float = 0.0

    def __str__(self) -> str:
        if self.elapsed_ms > 1000:
            return f"{self.elapsed_ms / 1000:.2f}s"
        return f"{self.elapsed_ms:.2f}ms"


@contextmanager
def timer(
    operation: str,
    log_level: str = "INFO",
    threshold_ms: float = 0,
    **context: Any,
) -> Iterator[Timing]:
    """Time a block and log how long it took.

    Args:
        operation: Description of the operation being timed
        log_level: Log level name to use ("DEBUG", "INFO", "WARNING")
        threshold_ms: Only log if the block takes at least this long
        **context: Extra fields bound to the log record (e.g. document_id)

    Example:
        >>> with timer("Embedding 100 chunks", document_id=doc_id) as timing:
        ...     states = await generator.embed(texts)
        >>> timing.elapsed_ms
    """
    timing = Timing(operation)
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed_ms = (time.perf_counter() - start) * 1000
        if timing.elapsed_ms >= threshold_ms:
            logger.bind(**context).log(log_level.upper(), f"{operation} took {timing}")
