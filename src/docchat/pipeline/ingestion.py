"""
Ingestion Service.

Handles an upload end to end:
Validate -> Process (extract, segment, embed) -> Save document -> Save chunks

The store has no transaction spanning the document record and its chunks.
When chunk writes fail after the document was saved, the document is
deleted again if ``compensate_on_chunk_failure`` is set; otherwise the
document is left in place with missing chunks and the gap is logged.
"""

from uuid import uuid4

from loguru import logger

from docchat.config.models import IngestionConfig
from docchat.datasource.store.base import BaseDocumentStore
from docchat.entities.document import Chunk, Document
from docchat.errors import DocumentNotFoundError, FileTooLargeError, StorageError

from .processor import DocumentProcessor


class IngestionService:
    """
    Stores uploaded documents and their chunks.

    Attributes:
        processor: Document processor producing chunks
        store: Persistence store for documents and chunks
        config: Size limit, storage batch size and compensation flag
    """

    def __init__(
        self,
        processor: DocumentProcessor,
        store: BaseDocumentStore,
        config: IngestionConfig | None = None,
    ):
        self.processor = processor
        self.store = store
        self.config = config or IngestionConfig()

    async def ingest(
        self,
        data: bytes,
        file_name: str,
        mime_type: str,
        user_id: str,
    ) -> Document:
        """
        Process and persist one upload.

        Args:
            data: Raw file content
            file_name: Original file name; its stem becomes the title
            mime_type: MIME type of the upload
            user_id: Owner of the new document

        Returns:
            The saved document

        Raises:
            FileTooLargeError: If the upload exceeds ``max_file_size``
            DocumentProcessingError: If processing fails (nothing is stored)
            StorageError: If the store rejects the document or its chunks
        """
        if len(data) > self.config.max_file_size:
            raise FileTooLargeError(len(data), self.config.max_file_size)

        document_id = str(uuid4())
        processed = await self.processor.process(data, mime_type, document_id=document_id)

        document = Document(
            id=document_id,
            user_id=user_id,
            title=Document.title_from_file_name(file_name),
            file_name=file_name,
            mime_type=mime_type,
            file_size=len(data),
            text=processed.text,
            metadata=processed.metadata,
        )

        try:
            await self.store.save_document(document)
        except Exception as e:
            raise StorageError(
                "Failed to save document",
                details={"document_id": document_id},
                original_error=e,
            ) from e

        await self._save_chunks(document, processed.chunks)

        logger.info(
            f"[Ingestion] Stored document {document_id} '{document.title}' "
            f"({document.metadata.total_chunks} chunks, {document.metadata.pages} pages)"
        )
        return document

    async def _save_chunks(self, document: Document, chunks: list[Chunk]) -> None:
        batch_size = self.config.storage_batch_size
        saved = 0
        try:
            for start in range(0, len(chunks), batch_size):
                batch = chunks[start:start + batch_size]
                await self.store.save_chunks(batch)
                saved += len(batch)
        except Exception as e:
            details = {"document_id": document.id, "saved_chunks": saved, "total_chunks": len(chunks)}

            if not self.config.compensate_on_chunk_failure:
                logger.error(
                    f"[Ingestion] Document {document.id} saved with {saved}/{len(chunks)} chunks: {e}"
                )
                raise StorageError("Failed to save chunks", details=details, original_error=e) from e

            logger.error(f"[Ingestion] Chunk write failed for {document.id}, removing document: {e}")
            try:
                await self.store.delete_document_and_chunks(document.id)
            except Exception as cleanup_error:
                logger.error(f"[Ingestion] Could not remove document {document.id}: {cleanup_error}")
                details["compensated"] = False
            else:
                details["compensated"] = True
            raise StorageError("Failed to save chunks", details=details, original_error=e) from e

    async def delete_document(self, document_id: str, user_id: str) -> None:
        """
        Delete a document and its chunks.

        Raises:
            DocumentNotFoundError: If the document does not exist or belongs to another user
        """
        document = await self.store.get_document(document_id)
        if document is None or document.user_id != user_id:
            raise DocumentNotFoundError(document_id)

        await self.store.delete_document_and_chunks(document_id)
        logger.info(f"[Ingestion] Deleted document {document_id}")

    async def list_documents(self, user_id: str | None = None) -> list[Document]:
        """
        Uploaded documents, newest first.

        Args:
            user_id: Only list documents owned by this user (all when omitted)
        """
        documents = await self.store.list_documents(user_id)
        logger.debug(f"[Ingestion] Listed {len(documents)} documents")
        return documents

    async def get_chunks(self, document_id: str) -> list[Chunk]:
        """Chunks of a document in index order."""
        return await self.store.find_chunks_by_document(document_id)
