from docchat.entities.document import Chunk, Document
from docchat.errors import StorageError

from .base import BaseDocumentStore


class InMemoryDocumentStore(BaseDocumentStore):
    """
    Simple In-Memory Document Store.
    Not persistent.
    """

    def __init__(self):
        self._documents: dict[str, Document] = {}
        self._chunks: dict[str, dict[int, Chunk]] = {}

    async def save_document(self, document: Document) -> None:
        self._documents[document.id] = document

    async def get_document(self, document_id: str) -> Document | None:
        return self._documents.get(document_id)

    async def list_documents(self, user_id: str | None = None) -> list[Document]:
        documents = [
            doc for doc in self._documents.values()
            if user_id is None or doc.user_id == user_id
        ]
        return sorted(documents, key=lambda doc: doc.created_at, reverse=True)

    async def save_chunks(self, chunks: list[Chunk]) -> None:
        for chunk in chunks:
            if not chunk.document_id:
                raise StorageError("Chunk has no document_id", details={"index": chunk.index})
            self._chunks.setdefault(chunk.document_id, {})[chunk.index] = chunk

    async def find_chunks_by_document(self, document_id: str) -> list[Chunk]:
        chunks = self._chunks.get(document_id, {})
        return [chunks[i] for i in sorted(chunks)]

    async def delete_document_and_chunks(self, document_id: str) -> None:
        self._documents.pop(document_id, None)
        self._chunks.pop(document_id, None)

    def __len__(self) -> int:
        return len(self._documents)
