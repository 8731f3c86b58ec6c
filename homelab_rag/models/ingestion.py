"""
Ingestion result models.

Dependencies: pydantic
System role: Results returned by the document service
"""

import enum
import uuid

from pydantic import BaseModel, Field


class IngestResult(BaseModel):
    """Outcome of ingesting one document."""

    document_id: uuid.UUID
    file_name: str
    chunk_count: int = Field(ge=0)
    created: bool = Field(description="False when the file name was already ingested")


class FileIngestStatus(str, enum.Enum):
    """Per-file status in a directory ingestion."""

    SUCCESS = "success"
    FAILED = "failed"


class FileIngestResult(BaseModel):
    """One file's outcome in a directory ingestion."""

    file_name: str
    status: FileIngestStatus
    chunk_count: int | None = None
    error: str | None = None


class DirectoryIngestResult(BaseModel):
    """Outcome of ingesting every matching file under a directory."""

    directory: str
    results: list[FileIngestResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.status == FileIngestStatus.SUCCESS)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == FileIngestStatus.FAILED)
