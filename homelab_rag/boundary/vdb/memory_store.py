"""
In-process vector store for development and tests.

Keeps documents and chunks in memory and ranks chunks by cosine distance with
numpy. Writes are staged per transaction and published together under a lock,
so a reader never sees half of a document.

Dependencies: numpy, homelab_rag.boundary.vdb.vector_store
System role: Development vector store (no database required)
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import uuid

import numpy as np

from homelab_rag.boundary.vdb.vector_store import VectorStore, VectorStoreTransaction
from homelab_rag.core.exceptions import DocumentAlreadyExists, VectorStoreError
from homelab_rag.models.document import Chunk, Document, RetrievedChunk

logger = logging.getLogger(__name__)


class _MemoryTransaction(VectorStoreTransaction):
    """Staging area for one unit of work."""

    def __init__(self, store: "InMemoryVectorStore") -> None:
        self._store = store
        self.documents: dict[str, Document] = {}
        self.chunks: list[Chunk] = []

    async def find_by_name(self, file_name: str) -> Document | None:
        staged = self.documents.get(file_name)
        if staged is not None:
            return staged
        return await self._store.find_by_name(file_name)

    async def create_document(
        self,
        file_name: str,
        file_path: str,
        content: str,
    ) -> Document:
        if await self.find_by_name(file_name) is not None:
            raise DocumentAlreadyExists(file_name)
        document = Document(
            id=uuid.uuid4(),
            file_name=file_name,
            file_path=file_path,
            content=content,
            ingested_at=datetime.now(timezone.utc),
        )
        self.documents[file_name] = document
        return document

    async def create_chunk(
        self,
        document_id: uuid.UUID,
        content: str,
        chunk_index: int,
        embedding: Sequence[float] | None,
    ) -> Chunk:
        if not any(doc.id == document_id for doc in self.documents.values()):
            raise VectorStoreError(
                "Chunk references a document not created in this transaction",
                operation="create_chunk",
                details={"document_id": str(document_id)},
            )
        chunk = Chunk(
            id=uuid.uuid4(),
            document_id=document_id,
            content=content,
            chunk_index=chunk_index,
            embedding=tuple(float(v) for v in embedding) if embedding is not None else None,
        )
        self.chunks.append(chunk)
        return chunk


class InMemoryVectorStore(VectorStore):
    """Numpy-backed store; state lives for the process lifetime."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}
        self._names_by_id: dict[uuid.UUID, str] = {}
        self._chunks: list[Chunk] = []
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[VectorStoreTransaction]:
        tx = _MemoryTransaction(self)
        yield tx
        async with self._lock:
            self._publish(tx)

    def _publish(self, tx: _MemoryTransaction) -> None:
        for file_name in tx.documents:
            if file_name in self._documents:
                raise DocumentAlreadyExists(file_name)

        counts: dict[uuid.UUID, int] = {}
        for chunk in tx.chunks:
            counts[chunk.document_id] = counts.get(chunk.document_id, 0) + 1

        documents = dict(self._documents)
        names_by_id = dict(self._names_by_id)
        for file_name, document in tx.documents.items():
            documents[file_name] = document.model_copy(
                update={"chunk_count": counts.get(document.id, 0)}
            )
            names_by_id[document.id] = file_name

        # Swap whole containers so readers see either none or all of the writes.
        self._documents = documents
        self._names_by_id = names_by_id
        self._chunks = [*self._chunks, *tx.chunks]
        logger.debug(
            f"{__name__}:_publish - Committed {len(tx.documents)} documents, "
            f"{len(tx.chunks)} chunks"
        )

    async def find_by_name(self, file_name: str) -> Document | None:
        return self._documents.get(file_name)

    async def nearest_k(
        self,
        query_vector: Sequence[float],
        k: int,
    ) -> list[RetrievedChunk]:
        names_by_id = self._names_by_id
        candidates = [c for c in self._chunks if c.embedding is not None]
        if not candidates or k <= 0:
            return []

        try:
            matrix = np.asarray([c.embedding for c in candidates], dtype=np.float64)
            query = np.asarray(query_vector, dtype=np.float64)
            norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
            dots = matrix @ query
        except ValueError as e:
            raise VectorStoreError(
                f"Query vector incompatible with stored vectors: {e}",
                operation="nearest_k",
            ) from e

        with np.errstate(divide="ignore", invalid="ignore"):
            similarity = np.where(norms > 0, dots / norms, 0.0)
        distances = 1.0 - similarity

        ranked = sorted(
            range(len(candidates)),
            key=lambda i: (
                float(distances[i]),
                names_by_id[candidates[i].document_id],
                candidates[i].chunk_index,
            ),
        )
        return [
            RetrievedChunk(
                chunk_id=candidates[i].id,
                document_id=candidates[i].document_id,
                file_name=names_by_id[candidates[i].document_id],
                content=candidates[i].content,
                chunk_index=candidates[i].chunk_index,
                distance=float(distances[i]),
            )
            for i in ranked[:k]
        ]

    async def list_documents(self) -> list[Document]:
        return sorted(self._documents.values(), key=lambda d: d.ingested_at)
