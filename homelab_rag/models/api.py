"""
HTTP request/response schemas.

JSON fields are camelCase on the wire; Python attributes stay snake_case.

Dependencies: pydantic
System role: HTTP API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from homelab_rag.models.ingestion import FileIngestStatus


class CamelModel(BaseModel):
    """Base schema serialising to camelCase and accepting either case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngestFileRequest(CamelModel):
    """Request schema for single-file ingestion."""

    file_path: str = Field(min_length=1, description="Path of the file on the server")


class IngestFileResponse(CamelModel):
    """Response schema for single-file ingestion."""

    message: str
    document_id: uuid.UUID
    file_name: str
    chunk_count: int
    created: bool


class IngestDirectoryRequest(CamelModel):
    """Request schema for directory ingestion."""

    directory_path: str = Field(min_length=1, description="Directory on the server")
    pattern: str | None = Field(default=None, description="Glob pattern (default '*.md')")


class FileIngestResultResponse(CamelModel):
    """One file's outcome in a directory ingestion."""

    file_name: str
    status: FileIngestStatus
    chunk_count: int | None = None
    error: str | None = None


class IngestDirectoryResponse(CamelModel):
    """Response schema for directory ingestion."""

    message: str
    results: list[FileIngestResultResponse]


class DocumentResponse(CamelModel):
    """Ingested document summary (content omitted)."""

    id: uuid.UUID
    file_name: str
    file_path: str
    ingested_at: datetime
    chunk_count: int


class QueryRequest(CamelModel):
    """Request schema for questions."""

    question: str = Field(min_length=1, description="Question to answer")
    top_k: int | None = Field(default=None, description="Chunks to retrieve (default 5)")
    provider: str | None = Field(default=None, description="Generation provider name")


class SourceResponse(CamelModel):
    """Citation of one retrieved chunk."""

    file_name: str
    chunk_index: int
    preview: str


class QueryResponse(CamelModel):
    """Response schema for questions."""

    question: str
    answer: str
    sources: list[SourceResponse]
    chunks_used: int
    provider_used: str | None = None


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class ProvidersHealthResponse(CamelModel):
    """Registered providers and selection defaults."""

    embedding_provider: str
    embedding_dimension: int
    embedding_providers: list[str]
    generation_providers: list[str]
    default_generation_provider: str
    default_registered: bool
