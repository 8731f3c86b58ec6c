"""
Document and chunk ORM models.

A document owns its chunks; deleting the document cascades to them. Chunk
embeddings live in a pgvector column; the dimension is fixed per deployment
by the embedding provider and checked before insert, so the column is
declared without one.

Dependencies: sqlalchemy, pgvector, homelab_rag.boundary.db.base
System role: Document/chunk persistence for ingestion and retrieval
"""

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homelab_rag.boundary.db.base import Base, IngestedAtMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, IngestedAtMixin):
    """
    Ingested source document.

    Attributes:
        id: UUID primary key (auto-generated)
        file_name: Unique idempotency key (512 char limit)
        file_path: Where the text was read from (1024 char limit)
        content: Full raw text
        ingested_at: Ingestion timestamp (UTC)

    Relationships:
        chunks: Owned DocumentChunkModel rows ordered by chunk_index
    """

    __tablename__ = "documents"

    file_name: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        unique=True,
        index=True,
        doc="Idempotency key",
    )

    file_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        default="",
        doc="Provenance of the raw text",
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    chunks = relationship(
        "DocumentChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DocumentChunkModel.chunk_index",
    )


class DocumentChunkModel(Base, UUIDMixin):
    """
    Chunk of a document with its embedding.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Owning document (ON DELETE CASCADE)
        content: Chunk text
        chunk_index: 0-based position in the document, unique per document
        embedding: pgvector column; NULL means never queried

    Constraints:
        (document_id, chunk_index) unique
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunks_position"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)

    embedding = mapped_column(Vector(), nullable=True)

    document = relationship("DocumentModel", back_populates="chunks")
