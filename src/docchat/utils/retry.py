"""
Bounded retry policy for calls to external services.

Every call site that needs to retry (embedding batches, single embedding
items) shares the same policy object instead of duplicating try/except
blocks. The default policy makes at most two attempts with no delay.

Usage:
------
    from docchat.utils.retry import RetryPolicy

    policy = RetryPolicy(max_attempts=2)
    vectors = await policy.run(embedder.embed, ["some text"], label="chunk 3")

    # Retry only transient service errors, with a short backoff
    batch_policy = RetryPolicy(
        max_attempts=3,
        base_delay=0.5,
        retry_on=(RetryableError,),
    )
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, TypeVar

from docchat.errors import DocChatError, RateLimitError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum number of attempts (including the first one)
        base_delay: Initial delay between attempts (seconds)
        max_delay: Maximum delay between attempts (seconds)
        exponential_base: Base for exponential backoff
        jitter: Random jitter (0.0 to 1.0, fraction of delay)
        retry_on: Exception types that trigger another attempt
        stop_on: Exception types that are never retried
        respect_retry_after: Honor retry_after from RateLimitError
    """

    max_attempts: int = 2
    base_delay: float = 0.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: float = 0.0
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    stop_on: tuple[type[BaseException], ...] = ()
    respect_retry_after: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")
        if not 0 <= self.jitter <= 1:
            raise ValueError("jitter must be between 0 and 1")

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """
        Determine if an error should trigger another attempt.

        Args:
            error: The exception that was raised
            attempt: Attempt number that just failed (1-based)

        Returns:
            True if another attempt should be made
        """
        if attempt >= self.max_attempts:
            return False
        if self.stop_on and isinstance(error, self.stop_on):
            return False
        return isinstance(error, self.retry_on)

    def calculate_delay(self, attempt: int, error: BaseException | None = None) -> float:
        """
        Calculate delay before the next attempt.

        Args:
            attempt: Attempt number that just failed (1-based)
            error: The exception that triggered the retry

        Returns:
            Delay in seconds
        """
        if self.respect_retry_after and isinstance(error, RateLimitError):
            if error.retry_after is not None and error.retry_after > 0:
                return min(error.retry_after, self.max_delay)

        if self.base_delay == 0:
            return 0.0

        delay = self.base_delay * (self.exponential_base ** (attempt - 1))

        if self.jitter > 0:
            jitter_range = delay * self.jitter
            delay += random.uniform(-jitter_range, jitter_range)

        return max(0.0, min(delay, self.max_delay))

    async def run(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        label: str | None = None,
        **kwargs: Any
    ) -> T:
        """
        Await ``func(*args, **kwargs)`` under this policy.

        Args:
            func: Coroutine function to call
            *args: Positional arguments for func
            label: Name used in log lines (defaults to the function name)
            **kwargs: Keyword arguments for func

        Returns:
            Result of the first successful attempt

        Raises:
            The last error once attempts are exhausted or the error is not retryable
        """
        name = label or getattr(func, "__name__", "call")
        state = RetryState()

        while True:
            state.attempt += 1
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                state.errors.append(e)
                _log_error(name, state.attempt, self.max_attempts, e)

                if not self.should_retry(e, state.attempt):
                    if state.attempt > 1:
                        logger.error(
                            f"[{name}] Giving up after {state.attempt} attempts "
                            f"({state.elapsed_time:.2f}s): {type(e).__name__}: {e}"
                        )
                    raise

                delay = self.calculate_delay(state.attempt, e)
                state.total_delay += delay
                logger.warning(
                    f"[{name}] Retrying in {delay:.2f}s "
                    f"(attempt {state.attempt}/{self.max_attempts}) "
                    f"after {type(e).__name__}: {e}"
                )
                if delay > 0:
                    await asyncio.sleep(delay)


@dataclass
class RetryState:
    """Tracks the attempts made by a single ``RetryPolicy.run`` call."""

    attempt: int = 0
    total_delay: float = 0.0
    errors: list[Exception] = field(default_factory=list)
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_time(self) -> float:
        """Total elapsed time since first attempt."""
        return time.time() - self.start_time


def _log_error(name: str, attempt: int, max_attempts: int, error: Exception) -> None:
    """Log a failed attempt with the error details."""
    error_info: dict[str, Any] = {
        "call": name,
        "attempt": attempt,
        "max_attempts": max_attempts,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if isinstance(error, DocChatError):
        error_info["details"] = error.details
        if error.original_error:
            error_info["original_error"] = str(error.original_error)

    logger.debug(f"[{name}] Attempt {attempt} failed: {error_info}")
