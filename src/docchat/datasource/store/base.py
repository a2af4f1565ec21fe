from abc import ABC, abstractmethod

from docchat.entities.document import Chunk, Document


class BaseDocumentStore(ABC):
    """
    Abstract Base Class for document persistence.

    Documents and chunks are written separately; a chunk belongs to the
    document named by its ``document_id``.
    """

    @abstractmethod
    async def save_document(self, document: Document) -> None:
        """Insert or replace a document record."""
        pass

    @abstractmethod
    async def get_document(self, document_id: str) -> Document | None:
        """Get a document by id, or None."""
        pass

    @abstractmethod
    async def list_documents(self, user_id: str | None = None) -> list[Document]:
        """Documents, newest first. Restricted to one owner when user_id is given."""
        pass

    @abstractmethod
    async def save_chunks(self, chunks: list[Chunk]) -> None:
        """Persist chunks. Each chunk must carry a document_id."""
        pass

    @abstractmethod
    async def find_chunks_by_document(self, document_id: str) -> list[Chunk]:
        """All chunks of a document, ordered by index."""
        pass

    @abstractmethod
    async def delete_document_and_chunks(self, document_id: str) -> None:
        """Remove a document together with its chunks."""
        pass
