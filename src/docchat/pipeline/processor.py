"""
Document Processor.

Drives one uploaded document through:
Received -> Extracted -> Segmented -> Embedded -> Done

Any fatal error moves the document to Failed and is raised as a single
DocumentProcessingError carrying the stage and the document id. Partial
embedding (some chunks left ``Unembedded``) is not a failure.
"""

import asyncio

from loguru import logger

from docchat.batch.generator import EmbeddingGenerator
from docchat.config.models import SegmenterConfig
from docchat.entities.document import (
    Chunk,
    DocumentMetadata,
    ExtractionResult,
    ProcessedDocument,
    ProcessingStage,
    Unembedded,
)
from docchat.errors import DocChatError, DocumentProcessingError, ExtractionError
from docchat.index_processor.extractor.factory import ExtractorFactory
from docchat.index_processor.splitter.base import BaseSplitter
from docchat.index_processor.splitter.providers.paragraph_sentence import ParagraphSentenceSplitter
from docchat.utils.performance import timer


class DocumentProcessor:
    """
    Orchestrates extraction, segmentation and embedding for one document.

    The processor holds no per-document state; every call to ``process`` is
    independent. Persisting the result is the caller's job.

    Attributes:
        generator: Embedding generator for chunk texts
        extractors: MIME type to extractor registry
        splitter: Text segmenter
    """

    def __init__(
        self,
        generator: EmbeddingGenerator,
        extractors: ExtractorFactory | None = None,
        splitter: BaseSplitter | None = None,
        segmenter_config: SegmenterConfig | None = None,
    ):
        self.generator = generator
        self.extractors = extractors or ExtractorFactory()
        if splitter is None:
            config = segmenter_config or SegmenterConfig()
            splitter = ParagraphSentenceSplitter(max_chunk_size=config.max_chunk_size)
        self.splitter = splitter

    async def process(
        self,
        data: bytes,
        mime_type: str,
        document_id: str | None = None,
    ) -> ProcessedDocument:
        """
        Turn raw upload bytes into embedded chunks.

        Args:
            data: Raw file content
            mime_type: MIME type of the upload, e.g. "application/pdf"
            document_id: Identifier stamped onto chunks and errors

        Returns:
            Extracted text, ordered chunks and aggregated metadata

        Raises:
            DocumentProcessingError: On unsupported type, extraction failure
                or embedding service unavailability
        """
        stage = ProcessingStage.RECEIVED
        label = document_id or "<unsaved>"
        logger.info(f"[Processor] Document {label}: {stage} ({mime_type}, {len(data)} bytes)")

        try:
            with timer(f"[Processor] Document {label} processing", document_id=document_id) as timing:
                extraction = await self._extract(data, mime_type)
                stage = self._advance(label, ProcessingStage.EXTRACTED, f"{len(extraction.text)} characters")

                texts = self.splitter.split_text(extraction.text)
                stage = self._advance(label, ProcessingStage.SEGMENTED, f"{len(texts)} chunks")

                states = await self.generator.embed(texts)
                stage = self._advance(label, ProcessingStage.EMBEDDED, f"{len(states)} embeddings")
        except Exception as e:
            logger.error(f"[Processor] Document {label}: {ProcessingStage.FAILED} after {stage}: {e}")
            raise DocumentProcessingError(
                f"Processing failed after stage '{stage}'",
                stage=str(stage),
                document_id=document_id,
                original_error=e,
            ) from e

        chunks = [
            Chunk(content=text, index=index, embedding=state, document_id=document_id)
            for index, (text, state) in enumerate(zip(texts, states))
        ]
        unembedded = sum(1 for chunk in chunks if isinstance(chunk.embedding, Unembedded))
        if unembedded:
            logger.warning(f"[Processor] Document {label}: {unembedded} chunks stored without embedding")

        self._advance(label, ProcessingStage.DONE, f"{len(chunks)} chunks in {timing}")
        return ProcessedDocument(
            text=extraction.text,
            chunks=chunks,
            metadata=DocumentMetadata(
                pages=extraction.page_count,
                info=extraction.info,
                total_chunks=len(chunks),
            ),
        )

    async def _extract(self, data: bytes, mime_type: str) -> ExtractionResult:
        extractor = self.extractors.for_mime_type(mime_type)
        try:
            # Extractors are synchronous and may be CPU bound (PDF parsing)
            return await asyncio.to_thread(extractor.extract, data)
        except DocChatError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"{type(extractor).__name__} failed",
                details={"mime_type": mime_type},
                original_error=e,
            ) from e

    @staticmethod
    def _advance(label: str, stage: ProcessingStage, summary: str) -> ProcessingStage:
        logger.info(f"[Processor] Document {label}: {stage} ({summary})")
        return stage
