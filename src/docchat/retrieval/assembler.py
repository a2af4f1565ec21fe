"""
Context assembly for grounded answers.

Given a query and a pool of candidate chunks, the assembler:
1. Embeds the query
2. Scores every candidate by cosine similarity (unembedded chunks score 0)
3. Keeps chunks at or above the similarity threshold
4. Orders them by similarity, highest first, ties broken by chunk index
5. Keeps at most ``max_chunks``
6. Packs them, in that order, into one text block until the next chunk would
   push the token count past ``max_context_tokens``

When nothing survives steps 3 or 6 the result carries
``ContextOutcome.NO_RELEVANT_CONTENT`` instead of an empty success.
"""

from loguru import logger

from docchat.batch.generator import EmbeddingGenerator
from docchat.config.models import RetrievalConfig
from docchat.entities.document import Chunk
from docchat.entities.query import AssembledContext, ContextOutcome, ScoredChunk
from docchat.llm.tokenizer import BaseTokenizer
from docchat.utils.similarity import embedding_similarity

CONTEXT_SEPARATOR = "\n\n"


class ContextAssembler:
    """
    Selects and packs the most relevant chunks under a token ceiling.

    Attributes:
        generator: Embedding generator used for the query
        tokenizer: Tokenizer consistent with the generation model
        config: Threshold, chunk cap and token ceiling
    """

    def __init__(
        self,
        generator: EmbeddingGenerator,
        tokenizer: BaseTokenizer,
        config: RetrievalConfig | None = None,
    ):
        self.generator = generator
        self.tokenizer = tokenizer
        self.config = config or RetrievalConfig()

    async def assemble(
        self,
        query: str,
        candidate_chunks: list[Chunk],
        config: RetrievalConfig | None = None,
    ) -> AssembledContext:
        """Build a bounded context for a query.

        Args:
            query: User question
            candidate_chunks: Chunks of the selected documents
            config: Per-call override of the assembler's configuration

        Returns:
            The assembled context; ``is_empty`` when nothing relevant fits

        Raises:
            EmbeddingError: If the query cannot be embedded
        """
        query_vector = await self.generator.embed_query(query)
        return self.assemble_for_vector(query_vector, candidate_chunks, config)

    def assemble_for_vector(
        self,
        query_vector: list[float],
        candidate_chunks: list[Chunk],
        config: RetrievalConfig | None = None,
    ) -> AssembledContext:
        """Build a bounded context for an already embedded query."""
        config = config or self.config
        ranked = self.rank(query_vector, candidate_chunks, config)

        if not ranked:
            logger.info(
                f"No chunk out of {len(candidate_chunks)} reached similarity "
                f"{config.similarity_threshold}"
            )
            return AssembledContext.empty()

        return self.pack(ranked, config)

    def rank(
        self,
        query_vector: list[float],
        candidate_chunks: list[Chunk],
        config: RetrievalConfig | None = None,
    ) -> list[ScoredChunk]:
        """Score, filter, order and cap candidate chunks."""
        config = config or self.config

        scored = [
            ScoredChunk(chunk=chunk, similarity=embedding_similarity(query_vector, chunk.embedding))
            for chunk in candidate_chunks
        ]
        relevant = [s for s in scored if s.similarity >= config.similarity_threshold]
        # sorted() is stable, so equal (similarity, index) keep candidate order
        relevant = sorted(relevant, key=lambda s: (-s.similarity, s.chunk.index))

        logger.debug(
            f"{len(relevant)}/{len(candidate_chunks)} chunks at or above "
            f"similarity {config.similarity_threshold}"
        )
        return relevant[:config.max_chunks]

    def pack(self, ranked: list[ScoredChunk], config: RetrievalConfig | None = None) -> AssembledContext:
        """Accumulate ranked chunks until the token ceiling is reached."""
        config = config or self.config

        selected: list[ScoredChunk] = []
        tokens_used = 0
        for scored in ranked:
            token_count = self.tokenizer.count_tokens(scored.chunk.content)
            if tokens_used + token_count > config.max_context_tokens:
                logger.info(
                    f"Stopping at {tokens_used} tokens to stay under "
                    f"{config.max_context_tokens} limit"
                )
                break
            selected.append(scored.model_copy(update={"token_count": token_count}))
            tokens_used += token_count

        if not selected:
            logger.info(
                f"Token ceiling {config.max_context_tokens} admits none of "
                f"{len(ranked)} relevant chunks"
            )
            return AssembledContext.empty()

        logger.info(f"Assembled context from {len(selected)} chunks ({tokens_used} tokens)")
        return AssembledContext(
            text=CONTEXT_SEPARATOR.join(s.chunk.content for s in selected),
            tokens_used=tokens_used,
            outcome=ContextOutcome.FOUND,
            chunks=selected,
        )
