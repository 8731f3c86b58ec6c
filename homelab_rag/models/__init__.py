"""Domain models shared by the store, the orchestrators and the services."""

from homelab_rag.models.document import Chunk, Document, RetrievedChunk
from homelab_rag.models.ingestion import (
    DirectoryIngestResult,
    FileIngestResult,
    FileIngestStatus,
    IngestResult,
)
from homelab_rag.models.query import AnswerResult, QueryResult, Source

__all__ = [
    "AnswerResult",
    "Chunk",
    "DirectoryIngestResult",
    "Document",
    "FileIngestResult",
    "FileIngestStatus",
    "IngestResult",
    "QueryResult",
    "RetrievedChunk",
    "Source",
]
