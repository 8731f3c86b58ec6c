"""
Chunk CRUD operations.

Extends BaseCRUD with the cosine-distance nearest-neighbour query.

Dependencies: sqlalchemy, pgvector, homelab_rag.boundary.db.models
System role: Chunk persistence and similarity search
"""

from typing import Any, Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from homelab_rag.boundary.db.models.document_model import DocumentChunkModel, DocumentModel
from homelab_rag.boundary.db.CRUD.base_crud import BaseCRUD


class ChunkCRUD(BaseCRUD[DocumentChunkModel]):
    """CRUD operations for DocumentChunkModel."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with DocumentChunkModel."""
        super().__init__(DocumentChunkModel)

    def nearest_statement(self, query_vector: Sequence[float], k: int) -> Select:
        """
        Build the nearest-K statement.

        Selects (chunk, file_name, distance) for embedded chunks ordered by
        pgvector cosine distance (<=>), ties broken by file name then index.

        Args:
            query_vector: Query embedding
            k: Maximum rows

        Returns:
            Select: Statement ready to execute
        """
        distance = DocumentChunkModel.embedding.cosine_distance(list(query_vector)).label("distance")
        return (
            select(DocumentChunkModel, DocumentModel.file_name, distance)
            .join(DocumentModel, DocumentChunkModel.document_id == DocumentModel.id)
            .where(DocumentChunkModel.embedding.is_not(None))
            .order_by(distance, DocumentModel.file_name, DocumentChunkModel.chunk_index)
            .limit(k)
        )

    async def nearest(
        self,
        session: AsyncSession,
        query_vector: Sequence[float],
        k: int,
    ) -> Sequence[Any]:
        """
        Execute the nearest-K query.

        Args:
            session: Async database session
            query_vector: Query embedding
            k: Maximum rows

        Returns:
            Sequence of (DocumentChunkModel, file_name, distance) rows
        """
        result = await session.execute(self.nearest_statement(query_vector, k))
        return result.all()


chunk_crud = ChunkCRUD()
