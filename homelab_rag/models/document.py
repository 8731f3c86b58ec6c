"""
Document and chunk domain models.

Store-agnostic representations returned by every VectorStore implementation.

Dependencies: pydantic
System role: Document/chunk data structures shared by ingestion and retrieval
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Ingested source document."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(description="Opaque identifier assigned on first persist")
    file_name: str = Field(description="Unique idempotency key")
    file_path: str = Field(default="", description="Provenance of the raw text")
    content: str = Field(description="Full raw text")
    ingested_at: datetime = Field(description="UTC ingestion timestamp")
    chunk_count: int = Field(default=0, description="Number of chunks owned by the document")


class Chunk(BaseModel):
    """Contiguous slice of a document, the unit of embedding and retrieval."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(description="Chunk identifier")
    document_id: uuid.UUID = Field(description="Owning document")
    content: str = Field(description="Chunk text content")
    chunk_index: int = Field(ge=0, description="0-based position in the source document")
    embedding: tuple[float, ...] | None = Field(
        default=None,
        description="Embedding vector; None means not yet embedded",
    )


class RetrievedChunk(BaseModel):
    """Chunk returned by a nearest-K query."""

    model_config = ConfigDict(frozen=True)

    chunk_id: uuid.UUID
    document_id: uuid.UUID
    file_name: str = Field(description="Owning document's file name")
    content: str
    chunk_index: int
    distance: float = Field(description="Cosine distance to the query (lower is closer)")
