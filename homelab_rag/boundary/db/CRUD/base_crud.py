"""
Shared insert helper for the document tables.

Document and chunk rows are written once and never updated, so the base
class only knows how to insert; subclasses add their read queries.

Dependencies: sqlalchemy
System role: Common write path for DocumentCRUD and ChunkCRUD
"""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from homelab_rag.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Query helpers bound to one ORM model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert a row inside the caller's transaction.

        The row is flushed so constraint violations surface here rather than
        at commit, then refreshed to pick up defaults.

        Args:
            session: Session with an open transaction
            **kwargs: Column values

        Returns:
            The persisted instance

        Raises:
            IntegrityError: Unique or foreign key violation
        """
        row = self.model(**kwargs)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row
