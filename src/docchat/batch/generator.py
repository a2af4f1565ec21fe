"""
Batched embedding generation.

Texts flow through three stages:
1. partition: split the ordered input into fixed-size batches, tagging each
   text with its original position
2. dispatch: embed one batch at a time (one request per batch); a batch
   rejected for input reasons is isolated into concurrent per-item requests
3. reassemble: put results back in input order by their tag, never by
   completion order

Failure handling:
- A batch request is retried for transient service errors only. Unless the
  service rejected the input itself (HTTP 400), a failed batch fails as a
  whole with EmbeddingBatchError, e.g. when the configured model or endpoint
  does not exist.
- An isolated item is retried once for any error. If the retry also fails the
  item becomes ``Unembedded`` instead of failing the document, unless its
  error is itself a service failure.
"""

import asyncio
import builtins

from loguru import logger

from docchat.batch.config import BatchConfig
from docchat.entities.document import Embedded, EmbeddingState, Unembedded
from docchat.errors import (
    EmbeddingBatchError,
    EmbeddingError,
    EmbeddingItemError,
    RetryableError,
    is_service_failure,
)
from docchat.llm.embedder.base import BaseEmbedder
from docchat.utils.retry import RetryPolicy

TaggedText = tuple[int, str]
TaggedEmbedding = tuple[int, EmbeddingState]


def partition(texts: list[str], batch_size: int) -> list[list[TaggedText]]:
    """Split texts into batches of at most ``batch_size``, tagged by input index."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    tagged = list(enumerate(texts))
    return [tagged[i:i + batch_size] for i in range(0, len(tagged), batch_size)]


def reassemble(results: list[TaggedEmbedding], total: int) -> list[EmbeddingState]:
    """Order tagged results by input index.

    Raises:
        EmbeddingError: If an index is missing or duplicated
    """
    ordered: list[EmbeddingState | None] = [None] * total
    for index, state in results:
        if not 0 <= index < total or ordered[index] is not None:
            raise EmbeddingError(
                "Embedding results do not match input",
                details={"index": index, "total": total},
            )
        ordered[index] = state

    missing = [i for i, state in enumerate(ordered) if state is None]
    if missing:
        raise EmbeddingError(
            "Embedding results missing for some inputs",
            details={"missing": missing[:10], "total": total},
        )
    return ordered  # type: ignore[return-value]


class EmbeddingGenerator:
    """
    Converts chunk texts into embeddings through an external embedding service.

    Output always has one entry per input, in input order: ``Embedded`` for
    successes and ``Unembedded`` for items that failed after their retry.

    Attributes:
        embedder: Client for the embedding service
        config: Batch size, inter-batch delay and attempt count
        batch_policy: Retry policy applied to whole-batch requests
        item_policy: Retry policy applied to isolated single-item requests

    Example:
        >>> generator = EmbeddingGenerator(embedder, BatchConfig(batch_size=20))
        >>> states = await generator.embed(["first chunk", "second chunk"])
        >>> [isinstance(s, Embedded) for s in states]
        [True, True]
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        config: BatchConfig | None = None,
        batch_policy: RetryPolicy | None = None,
        item_policy: RetryPolicy | None = None,
    ):
        self.embedder = embedder
        self.config = config or BatchConfig()
        self.batch_policy = batch_policy or RetryPolicy(
            max_attempts=self.config.max_attempts,
            retry_on=(RetryableError, builtins.ConnectionError, builtins.TimeoutError),
        )
        self.item_policy = item_policy or RetryPolicy(max_attempts=self.config.max_attempts)

    async def embed(self, texts: list[str]) -> list[EmbeddingState]:
        """Embed every text, batch by batch.

        Args:
            texts: Texts to embed, in document order

        Returns:
            One embedding state per input, in input order

        Raises:
            EmbeddingBatchError: If a batch fails because the service is unusable
        """
        if not texts:
            return []

        batches = partition(texts, self.config.batch_size)
        total_batches = len(batches)
        logger.info(
            f"Embedding {len(texts)} texts in {total_batches} batches "
            f"(batch_size={self.config.batch_size})"
        )

        results: list[TaggedEmbedding] = []
        for batch_num, batch in enumerate(batches, start=1):
            logger.debug(f"Embedding batch {batch_num}/{total_batches} ({len(batch)} texts)")
            results.extend(await self._embed_batch(batch, batch_num, total_batches))

            if batch_num < total_batches and self.config.batch_delay > 0:
                await asyncio.sleep(self.config.batch_delay)

        states = reassemble(results, len(texts))
        failed = sum(1 for state in states if isinstance(state, Unembedded))
        if failed:
            logger.warning(f"Embedded {len(states) - failed}/{len(states)} texts; {failed} left without embedding")
        else:
            logger.info(f"Embedded {len(states)} texts")
        return states

    async def embed_query(self, query: str) -> list[float]:
        """Embed a single query string.

        Raises:
            EmbeddingError: If no vector could be obtained
        """
        try:
            vectors = await self.batch_policy.run(self.embedder.embed, [query], label="query embedding")
        except Exception as e:
            raise EmbeddingError("Query embedding failed", original_error=e) from e

        if len(vectors) != 1 or not vectors[0]:
            raise EmbeddingError("Embedding service returned no vector for the query")
        return list(vectors[0])

    async def _embed_batch(
        self,
        batch: list[TaggedText],
        batch_num: int,
        total_batches: int,
    ) -> list[TaggedEmbedding]:
        label = f"embedding batch {batch_num}/{total_batches}"
        texts = [text for _, text in batch]

        try:
            vectors = await self.batch_policy.run(self.embedder.embed, texts, label=label)
        except Exception as e:
            if is_service_failure(e):
                logger.error(f"{label} failed: {type(e).__name__}: {e}")
                raise EmbeddingBatchError(
                    f"Embedding batch {batch_num} failed",
                    details={"batch_num": batch_num, "size": len(batch)},
                    original_error=e,
                ) from e
            logger.warning(f"{label} rejected ({type(e).__name__}: {e}); embedding items individually")
            return await self._embed_items(batch, batch_num)

        if len(vectors) != len(batch):
            logger.warning(
                f"{label} returned {len(vectors)} vectors for {len(batch)} texts; "
                f"embedding items individually"
            )
            return await self._embed_items(batch, batch_num)

        results: list[TaggedEmbedding] = []
        missing: list[TaggedText] = []
        for (index, text), vector in zip(batch, vectors):
            if vector:
                results.append((index, Embedded(vector=list(vector))))
            else:
                missing.append((index, text))

        if missing:
            results.extend(await self._embed_items(missing, batch_num))
        return results

    async def _embed_items(self, items: list[TaggedText], batch_num: int) -> list[TaggedEmbedding]:
        outcomes = await asyncio.gather(
            *(self._embed_item(index, text) for index, text in items),
            return_exceptions=True,
        )

        results: list[TaggedEmbedding] = []
        for (index, _), outcome in zip(items, outcomes):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, EmbeddingBatchError):
                    outcome.details.setdefault("batch_num", batch_num)
                raise outcome
            results.append(outcome)
        return results

    async def _embed_item(self, index: int, text: str) -> TaggedEmbedding:
        async def embed_one() -> list[float]:
            vectors = await self.embedder.embed([text])
            if len(vectors) != 1 or not vectors[0]:
                raise EmbeddingItemError("Embedding service returned no vector", index=index)
            return list(vectors[0])

        try:
            vector = await self.item_policy.run(embed_one, label=f"chunk {index}")
        except Exception as e:
            if is_service_failure(e):
                raise EmbeddingBatchError(
                    f"Embedding service failed while embedding chunk {index}",
                    details={"index": index},
                    original_error=e,
                ) from e
            logger.error(f"Chunk {index} left without embedding after retry: {type(e).__name__}: {e}")
            return index, Unembedded(reason=f"{type(e).__name__}: {e}")

        return index, Embedded(vector=vector)
