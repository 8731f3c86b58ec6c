"""
PostgreSQL + pgvector store.

Documents and chunks live in the documents/document_chunks tables; nearest-K
uses the pgvector cosine distance operator. One store transaction maps to
one database transaction, so a failed ingestion leaves no rows behind.

Dependencies: sqlalchemy, pgvector, homelab_rag.boundary.db
System role: Production vector store
"""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from homelab_rag.boundary.db.connection import create_tables
from homelab_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from homelab_rag.boundary.db.CRUD.document_crud import document_crud
from homelab_rag.boundary.db.models.document_model import DocumentChunkModel, DocumentModel
from homelab_rag.boundary.vdb.vector_store import VectorStore, VectorStoreTransaction
from homelab_rag.core.exceptions import DocumentAlreadyExists, VectorStoreError
from homelab_rag.models.document import Chunk, Document, RetrievedChunk

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def _is_file_name_conflict(error: IntegrityError) -> bool:
    """
    Whether an IntegrityError is the unique violation on documents.file_name.

    PostgreSQL drivers expose SQLSTATE 23505; SQLite only has the message
    ("UNIQUE constraint failed: documents.file_name").
    """
    message = str(error.orig).lower()
    if "file_name" not in message:
        return False
    sqlstate = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    return "unique" in message or "duplicate" in message


def _to_document(model: DocumentModel, chunk_count: int = 0) -> Document:
    return Document(
        id=model.id,
        file_name=model.file_name,
        file_path=model.file_path,
        content=model.content,
        ingested_at=model.ingested_at,
        chunk_count=chunk_count,
    )


def _to_chunk(model: DocumentChunkModel) -> Chunk:
    embedding = model.embedding
    return Chunk(
        id=model.id,
        document_id=model.document_id,
        content=model.content,
        chunk_index=model.chunk_index,
        embedding=tuple(float(v) for v in embedding) if embedding is not None else None,
    )


class _PgTransaction(VectorStoreTransaction):
    """Store transaction bound to one AsyncSession transaction."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.file_name: str | None = None

    async def find_by_name(self, file_name: str) -> Document | None:
        try:
            model = await document_crud.get_by_file_name(self._session, file_name)
            if model is None:
                return None
            count = await document_crud.count_chunks(self._session, model.id)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to look up document: {e}",
                operation="find_by_name",
            ) from e
        return _to_document(model, count)

    async def create_document(
        self,
        file_name: str,
        file_path: str,
        content: str,
    ) -> Document:
        self.file_name = file_name
        try:
            model = await document_crud.create(
                self._session,
                file_name=file_name,
                file_path=file_path,
                content=content,
            )
        except SQLAlchemyError as e:
            if isinstance(e, IntegrityError) and _is_file_name_conflict(e):
                raise DocumentAlreadyExists(file_name) from e
            raise VectorStoreError(
                f"Document insert failed: {e}",
                operation="create_document",
                details={"file_name": file_name},
            ) from e
        return _to_document(model)

    async def create_chunk(
        self,
        document_id: uuid.UUID,
        content: str,
        chunk_index: int,
        embedding: Sequence[float] | None,
    ) -> Chunk:
        try:
            model = await chunk_crud.create(
                self._session,
                document_id=document_id,
                content=content,
                chunk_index=chunk_index,
                embedding=list(embedding) if embedding is not None else None,
            )
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to store chunk {chunk_index}: {e}",
                operation="create_chunk",
                details={"document_id": str(document_id)},
            ) from e
        return _to_chunk(model)


class PgVectorStore(VectorStore):
    """
    Vector store backed by PostgreSQL with the pgvector extension.

    Args:
        session_factory: Session factory bound to the engine
        engine: Engine to dispose on close (optional when shared)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine = engine

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[VectorStoreTransaction]:
        """
        Open a session transaction; commit on clean exit, roll back otherwise.

        Raises:
            DocumentAlreadyExists: The file name was committed concurrently
            VectorStoreError: The session could not open or commit
        """
        tx: _PgTransaction | None = None
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    tx = _PgTransaction(session)
                    yield tx
        except SQLAlchemyError as e:
            conflict = isinstance(e, IntegrityError) and _is_file_name_conflict(e)
            if conflict and tx is not None and tx.file_name is not None:
                raise DocumentAlreadyExists(tx.file_name) from e
            raise VectorStoreError(f"Transaction failed: {e}", operation="transaction") from e

    async def find_by_name(self, file_name: str) -> Document | None:
        try:
            async with self._session_factory() as session:
                return await _PgTransaction(session).find_by_name(file_name)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to look up document: {e}",
                operation="find_by_name",
            ) from e

    async def nearest_k(
        self,
        query_vector: Sequence[float],
        k: int,
    ) -> list[RetrievedChunk]:
        if k <= 0:
            return []
        try:
            async with self._session_factory() as session:
                rows = await chunk_crud.nearest(session, query_vector, k)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Similarity search failed: {e}",
                operation="nearest_k",
            ) from e

        logger.debug(f"{__name__}:nearest_k - {len(rows)} rows for k={k}")
        return [
            RetrievedChunk(
                chunk_id=chunk.id,
                document_id=chunk.document_id,
                file_name=file_name,
                content=chunk.content,
                chunk_index=chunk.chunk_index,
                distance=float(distance),
            )
            for chunk, file_name, distance in rows
        ]

    async def list_documents(self) -> list[Document]:
        try:
            async with self._session_factory() as session:
                rows = await document_crud.list_with_chunk_counts(session)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to list documents: {e}",
                operation="list_documents",
            ) from e
        return [_to_document(model, count) for model, count in rows]

    async def initialize(self) -> None:
        if self._engine is not None:
            await create_tables(self._engine)

    async def aclose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info(f"{__name__}:aclose - Engine disposed")
