"""Tests for the ingestion service (upload, persistence, deletion)."""

import pytest

from docchat.batch import BatchConfig, EmbeddingGenerator
from docchat.config.models import IngestionConfig, SegmenterConfig
from docchat.errors import (
    DocumentNotFoundError,
    DocumentProcessingError,
    FileTooLargeError,
    StorageError,
)
from docchat.pipeline.ingestion import IngestionService
from docchat.pipeline.processor import DocumentProcessor
from tests.utils.fakes import FakeEmbedder, FlakyDocumentStore

FIVE_PARAGRAPHS = "\n\n".join(f"Paragraph number {i}." for i in range(5)).encode()


def _service(store, embedder=None, **config) -> IngestionService:
    generator = EmbeddingGenerator(embedder or FakeEmbedder(), BatchConfig(batch_delay=0.0))
    processor = DocumentProcessor(generator, segmenter_config=SegmenterConfig(max_chunk_size=20))
    return IngestionService(processor, store, IngestionConfig(**config))


class TestIngest:
    @pytest.mark.asyncio
    async def test_document_and_chunks_saved(self, store):
        doc = await _service(store).ingest(FIVE_PARAGRAPHS, "notes.v1.txt", "text/plain", user_id="u1")

        assert doc.title == "notes.v1"
        assert doc.file_name == "notes.v1.txt"
        assert doc.user_id == "u1"
        assert doc.file_size == len(FIVE_PARAGRAPHS)
        assert doc.metadata.total_chunks == 5
        assert await store.get_document(doc.id) == doc

        chunks = await store.find_chunks_by_document(doc.id)
        assert [c.index for c in chunks] == [0, 1, 2, 3, 4]
        assert all(c.document_id == doc.id for c in chunks)

    @pytest.mark.asyncio
    async def test_chunks_written_in_storage_batches(self, store, mocker):
        save_chunks = mocker.spy(store, "save_chunks")

        await _service(store, storage_batch_size=2).ingest(FIVE_PARAGRAPHS, "a.txt", "text/plain", user_id="u1")

        assert [len(call.args[0]) for call in save_chunks.call_args_list] == [2, 2, 1]

    @pytest.mark.asyncio
    async def test_file_too_large(self, store):
        with pytest.raises(FileTooLargeError):
            await _service(store, max_file_size=10).ingest(b"x" * 11, "big.txt", "text/plain", user_id="u1")
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_processing_failure_stores_nothing(self, store):
        service = _service(store, embedder=FakeEmbedder(unreachable=True))

        with pytest.raises(DocumentProcessingError):
            await service.ingest(FIVE_PARAGRAPHS, "a.txt", "text/plain", user_id="u1")

        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_chunk_failure_compensated(self):
        store = FlakyDocumentStore(fail_chunk_writes_after=1)

        with pytest.raises(StorageError) as exc_info:
            await _service(store, storage_batch_size=2).ingest(FIVE_PARAGRAPHS, "a.txt", "text/plain", user_id="u1")

        details = exc_info.value.details
        assert details["compensated"] is True
        assert details["saved_chunks"] == 2
        assert len(store) == 0
        assert await store.find_chunks_by_document(details["document_id"]) == []

    @pytest.mark.asyncio
    async def test_chunk_failure_without_compensation_leaves_document(self):
        store = FlakyDocumentStore(fail_chunk_writes_after=0)
        service = _service(store, compensate_on_chunk_failure=False)

        with pytest.raises(StorageError) as exc_info:
            await service.ingest(FIVE_PARAGRAPHS, "a.txt", "text/plain", user_id="u1")

        document_id = exc_info.value.details["document_id"]
        assert await store.get_document(document_id) is not None
        assert await store.find_chunks_by_document(document_id) == []


class TestDeleteAndRead:
    @pytest.mark.asyncio
    async def test_delete_own_document(self, store):
        service = _service(store)
        doc = await service.ingest(FIVE_PARAGRAPHS, "a.txt", "text/plain", user_id="u1")

        await service.delete_document(doc.id, user_id="u1")

        assert await store.get_document(doc.id) is None
        assert await service.get_chunks(doc.id) == []

    @pytest.mark.asyncio
    async def test_delete_other_users_document(self, store):
        service = _service(store)
        doc = await service.ingest(FIVE_PARAGRAPHS, "a.txt", "text/plain", user_id="u1")

        with pytest.raises(DocumentNotFoundError):
            await service.delete_document(doc.id, user_id="intruder")
        assert await store.get_document(doc.id) is not None

    @pytest.mark.asyncio
    async def test_delete_missing_document(self, store):
        with pytest.raises(DocumentNotFoundError):
            await _service(store).delete_document("nope", user_id="u1")

    @pytest.mark.asyncio
    async def test_get_chunks_in_order(self, store):
        service = _service(store)
        doc = await service.ingest(FIVE_PARAGRAPHS, "a.txt", "text/plain", user_id="u1")

        chunks = await service.get_chunks(doc.id)

        assert [c.content for c in chunks] == [f"Paragraph number {i}." for i in range(5)]

    @pytest.mark.asyncio
    async def test_list_documents(self, store):
        service = _service(store)
        first = await service.ingest(FIVE_PARAGRAPHS, "a.txt", "text/plain", user_id="u1")
        second = await service.ingest(FIVE_PARAGRAPHS, "b.pdf.txt", "text/plain", user_id="u1")
        await service.ingest(FIVE_PARAGRAPHS, "c.txt", "text/plain", user_id="u2")

        documents = await service.list_documents("u1")

        assert {doc.id for doc in documents} == {first.id, second.id}
        assert [doc.created_at for doc in documents] == sorted((doc.created_at for doc in documents), reverse=True)
        assert documents[0].metadata.total_chunks == 5
        assert len(await service.list_documents()) == 3
