"""
Vector store contract.

Every store persists documents and their embedded chunks and answers
nearest-K queries by cosine distance. Writes happen inside a transaction
obtained from begin(): nothing written there is visible to nearest_k or
find_by_name until the block exits cleanly, and everything is discarded if it
raises.

Ties on distance are ordered by (file_name, chunk_index) so citation order is
deterministic.

Dependencies: homelab_rag.models
System role: Storage collaborator interface for ingestion and retrieval
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
import uuid

from homelab_rag.models.document import Chunk, Document, RetrievedChunk


class VectorStoreTransaction(ABC):
    """Write side of one all-or-nothing unit of work."""

    @abstractmethod
    async def find_by_name(self, file_name: str) -> Document | None:
        """Document with this file name, including ones staged in this transaction."""

    @abstractmethod
    async def create_document(
        self,
        file_name: str,
        file_path: str,
        content: str,
    ) -> Document:
        """
        Stage a new document.

        Raises:
            DocumentAlreadyExists: When file_name is already persisted
        """

    @abstractmethod
    async def create_chunk(
        self,
        document_id: uuid.UUID,
        content: str,
        chunk_index: int,
        embedding: Sequence[float] | None,
    ) -> Chunk:
        """Stage a chunk for a document created in this transaction."""


class VectorStore(ABC):
    """Document/chunk store with similarity search."""

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[VectorStoreTransaction]:
        """Open a transaction; commit on clean exit, roll back on exception."""

    @abstractmethod
    async def find_by_name(self, file_name: str) -> Document | None:
        """Committed document with this file name, or None."""

    @abstractmethod
    async def nearest_k(
        self,
        query_vector: Sequence[float],
        k: int,
    ) -> list[RetrievedChunk]:
        """
        Chunks closest to query_vector.

        Args:
            query_vector: Query embedding
            k: Maximum number of chunks

        Returns:
            list[RetrievedChunk]: Ascending cosine distance, embedded chunks only
        """

    @abstractmethod
    async def list_documents(self) -> list[Document]:
        """All committed documents ordered by ingestion time."""

    async def initialize(self) -> None:
        """Prepare storage (schema, extensions) before first use."""

    async def aclose(self) -> None:
        """Release connections."""
