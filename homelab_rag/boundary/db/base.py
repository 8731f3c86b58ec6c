"""
ORM base and shared columns for the documents schema.

Both tables key on UUIDs; documents additionally carry the time they were
ingested.

Dependencies: sqlalchemy
System role: Declarative base for the pgvector store tables
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Metadata holder for documents and document_chunks."""

    pass


class UUIDMixin:
    """
    UUID primary key assigned client-side on insert.

    Attributes:
        id: Random (v4) identifier
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class IngestedAtMixin:
    """
    Ingestion timestamp, written once.

    Attributes:
        ingested_at: UTC time the row was created
    """

    ingested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
