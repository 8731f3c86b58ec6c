"""
Document ingestion and listing service.

Coordinates ingestion of raw text, single files and whole directories, and
lists what has been ingested. Reading files happens off the event loop.

Dependencies: homelab_rag.core, homelab_rag.boundary.vdb
System role: Upward-facing ingest operations used by the HTTP shell
"""

import asyncio
import logging
from pathlib import Path

from homelab_rag.boundary.vdb.vector_store import VectorStore
from homelab_rag.core.exceptions import DocumentSourceNotFoundError, IngestionFailed
from homelab_rag.core.ingestion_orchestrator import IngestionOrchestrator
from homelab_rag.models.document import Document
from homelab_rag.models.ingestion import (
    DirectoryIngestResult,
    FileIngestResult,
    FileIngestStatus,
    IngestResult,
)
from homelab_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY_PATTERN = "*.md"


class DocumentService:
    """
    Ingests text, files and directories; lists documents.

    Uses IngestionOrchestrator for the write path and the vector store for listing.
    """

    def __init__(
        self,
        orchestrator: IngestionOrchestrator,
        store: VectorStore,
        directory_pattern: str = DEFAULT_DIRECTORY_PATTERN,
    ) -> None:
        """
        Wire the service.

        Args:
            orchestrator: Ingestion orchestrator
            store: Vector store used for listing documents
            directory_pattern: Default glob for directory ingestion
        """
        self.orchestrator = orchestrator
        self.store = store
        self.directory_pattern = directory_pattern

    async def ingest(
        self,
        file_name: str,
        content: str,
        file_path: str | None = None,
    ) -> IngestResult:
        """
        Ingest raw text under a file name.

        Args:
            file_name: Idempotency key
            content: Full raw text
            file_path: Provenance recorded with the document

        Returns:
            IngestResult: Document id, chunk count and whether it was created

        Raises:
            IngestionFailed: Provider or store failure
        """
        outcome = await self.orchestrator.ingest(file_name, content, file_path)
        return IngestResult(
            document_id=outcome.document.id,
            file_name=outcome.document.file_name,
            chunk_count=outcome.document.chunk_count,
            created=outcome.created,
        )

    async def ingest_file(self, path: str | Path) -> IngestResult:
        """
        Read a file and ingest it under its base name.

        Args:
            path: Path to a UTF-8 text file

        Returns:
            IngestResult: Ingestion outcome

        Raises:
            DocumentSourceNotFoundError: If the file does not exist
            IngestionFailed: If the file cannot be read or ingestion fails
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise DocumentSourceNotFoundError(str(path))

        try:
            content = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IngestionFailed(
                f"Could not read file: {e}",
                file_name=file_path.name,
                details={"path": str(file_path)},
            ) from e

        logger.info(f"{__name__}:ingest_file - Read {len(content)} chars from {file_path}")
        return await self.ingest(file_path.name, content, str(file_path))

    async def ingest_directory(
        self,
        path: str | Path,
        pattern: str | None = None,
    ) -> DirectoryIngestResult:
        """
        Ingest every file under a directory matching pattern, recursively.

        A failure on one file is recorded and the remaining files continue.

        Args:
            path: Directory to scan
            pattern: Glob pattern (defaults to the configured pattern, '*.md')

        Returns:
            DirectoryIngestResult: Per-file success/failure

        Raises:
            DocumentSourceNotFoundError: If the directory does not exist
        """
        directory = Path(path)
        if not directory.is_dir():
            raise DocumentSourceNotFoundError(str(path))

        glob = pattern or self.directory_pattern
        files = await asyncio.to_thread(
            lambda: sorted(p for p in directory.rglob(glob) if p.is_file())
        )
        logger.info(
            f"{__name__}:ingest_directory - Found {len(files)} files matching "
            f"'{glob}' in {directory}"
        )

        results: list[FileIngestResult] = []
        for file_path in files:
            try:
                ingested = await self.ingest_file(file_path)
            except (IngestionFailed, DocumentSourceNotFoundError) as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:ingest_directory - Failed to ingest {file_path.name}",
                    e,
                    file_name=file_path.name,
                )
                results.append(
                    FileIngestResult(
                        file_name=file_path.name,
                        status=FileIngestStatus.FAILED,
                        error=e.message,
                    )
                )
                continue
            results.append(
                FileIngestResult(
                    file_name=ingested.file_name,
                    status=FileIngestStatus.SUCCESS,
                    chunk_count=ingested.chunk_count,
                )
            )

        return DirectoryIngestResult(directory=str(directory), results=results)

    async def list_documents(self) -> list[Document]:
        """
        List ingested documents, oldest first.

        Returns:
            list[Document]: Documents with chunk counts
        """
        return await self.store.list_documents()
