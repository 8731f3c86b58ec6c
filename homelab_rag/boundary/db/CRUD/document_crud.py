"""
Queries over the documents table.

Extends BaseCRUD with the idempotency lookup by file name and chunk counts.

Dependencies: sqlalchemy, homelab_rag.boundary.db.models
System role: Document lookups and listings for PgVectorStore
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from homelab_rag.boundary.db.models.document_model import DocumentChunkModel, DocumentModel
from homelab_rag.boundary.db.CRUD.base_crud import BaseCRUD


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_file_name(
        self,
        session: AsyncSession,
        file_name: str,
    ) -> DocumentModel | None:
        """
        Retrieve a document by its unique file name.

        Args:
            session: Async database session
            file_name: Idempotency key

        Returns:
            DocumentModel if found, None otherwise
        """
        stmt = select(DocumentModel).where(DocumentModel.file_name == file_name)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_chunks(self, session: AsyncSession, document_id: UUID) -> int:
        """
        Count chunks owned by a document.

        Args:
            session: Async database session
            document_id: Document UUID

        Returns:
            int: Number of chunks
        """
        stmt = select(func.count(DocumentChunkModel.id)).where(
            DocumentChunkModel.document_id == document_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def list_with_chunk_counts(
        self,
        session: AsyncSession,
    ) -> Sequence[tuple[DocumentModel, int]]:
        """
        Retrieve every document with its chunk count, oldest first.

        Args:
            session: Async database session

        Returns:
            Sequence of (DocumentModel, chunk_count) pairs
        """
        stmt = (
            select(DocumentModel, func.count(DocumentChunkModel.id))
            .outerjoin(DocumentChunkModel, DocumentChunkModel.document_id == DocumentModel.id)
            .group_by(DocumentModel.id)
            .order_by(DocumentModel.ingested_at, DocumentModel.file_name)
        )
        result = await session.execute(stmt)
        return [(document, int(count)) for document, count in result.all()]


document_crud = DocumentCRUD()
