"""
Chat Pipeline.

Answers a question grounded in a set of documents:
Load chunks -> Embed query -> Assemble context -> Generate

Two outcomes short-circuit before generation: the documents have no chunks
at all, or no chunk is relevant enough to fit into the context.
"""

from loguru import logger

from docchat.config.models import GenerationConfig
from docchat.datasource.store.base import BaseDocumentStore
from docchat.entities.document import Chunk
from docchat.entities.query import ChatAnswer, ChatOutcome, GenerationRequest, QueryContext
from docchat.llm.base import BaseLLM
from docchat.retrieval.assembler import ContextAssembler


class ChatPipeline:
    """
    Question answering over stored document chunks.

    Attributes:
        store: Persistence store holding the chunks
        assembler: Context assembler (embeds the query and packs the context)
        llm: Generation service
        config: System prompt and fallback answer
    """

    def __init__(
        self,
        store: BaseDocumentStore,
        assembler: ContextAssembler,
        llm: BaseLLM,
        config: GenerationConfig | None = None,
    ):
        self.store = store
        self.assembler = assembler
        self.llm = llm
        self.config = config or GenerationConfig()

    async def answer(self, question: str, document_ids: list[str]) -> ChatAnswer:
        """
        Answer a question using the given documents as the only source.

        Args:
            question: User question
            document_ids: Documents to search

        Returns:
            A ChatAnswer whose outcome tells answered, no content and
            no relevant content apart

        Raises:
            ValueError: If the question or the document list is empty
            EmbeddingError: If the question cannot be embedded
            GenerationError: If the generation service fails
        """
        if not question or not question.strip():
            raise ValueError("question must not be empty")
        if not document_ids:
            raise ValueError("at least one document id is required")

        query = QueryContext(query=question, document_ids=list(document_ids))

        chunks = await self._load_chunks(query.document_ids)
        if not chunks:
            logger.info(f"[Chat] No chunks found for documents {query.document_ids}")
            return ChatAnswer(outcome=ChatOutcome.NO_CONTENT)

        query.query_vector = await self.assembler.generator.embed_query(question)
        query.context = self.assembler.assemble_for_vector(query.query_vector, chunks)

        if query.context.is_empty:
            return ChatAnswer(outcome=ChatOutcome.NO_RELEVANT_CONTENT, context=query.context)

        result = await self.llm.generate(
            GenerationRequest(
                system_prompt=self.config.system_prompt,
                context_text=query.context.text,
                question=question,
            )
        )
        content = result.content.strip() or self.config.fallback_answer

        return ChatAnswer(outcome=ChatOutcome.ANSWERED, content=content, context=query.context)

    async def _load_chunks(self, document_ids: list[str]) -> list[Chunk]:
        chunks: list[Chunk] = []
        for document_id in document_ids:
            try:
                chunks.extend(await self.store.find_chunks_by_document(document_id))
            except Exception as e:
                logger.warning(f"[Chat] Skipping document {document_id}: failed to load chunks: {e}")
        return chunks
