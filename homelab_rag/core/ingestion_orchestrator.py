"""
Ingestion orchestrator.

Turns raw document text into an embedded, persisted document:
lookup by file name -> split -> embed every chunk -> write in one transaction.

Embedding happens before anything is written, and the document with all of its
chunks is written inside a single store transaction, so a failure at any step
leaves nothing behind and retrieval never sees a half-ingested document.

Dependencies: homelab_rag.core.chunker, homelab_rag.core.providers, homelab_rag.boundary.vdb
System role: Write path of the RAG pipeline
"""

import asyncio
import logging
from dataclasses import dataclass

from homelab_rag.boundary.vdb.vector_store import VectorStore
from homelab_rag.core.chunker import ChunkSplitter
from homelab_rag.core.exceptions import (
    DocumentAlreadyExists,
    IngestionFailed,
    ProviderError,
    VectorStoreError,
)
from homelab_rag.core.providers.base import EmbeddingProvider
from homelab_rag.models.document import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestOutcome:
    """Result of ingesting one document."""

    document: Document
    created: bool


class IngestionOrchestrator:
    """
    Idempotent, all-or-nothing document ingestion.

    A document is identified by its file name: ingesting a name that is
    already stored returns the stored document without re-embedding.
    """

    def __init__(
        self,
        store: VectorStore,
        embedder: EmbeddingProvider,
        splitter: ChunkSplitter | None = None,
        embedding_concurrency: int = 1,
    ) -> None:
        """
        Initialize ingestion orchestrator.

        Args:
            store: Vector store receiving documents and chunks
            embedder: The system-wide embedding provider
            splitter: Paragraph chunk splitter (default max size 1000)
            embedding_concurrency: Parallel embedding calls per document (1 = sequential)

        Raises:
            ValueError: If embedding_concurrency < 1
        """
        if embedding_concurrency < 1:
            raise ValueError("embedding_concurrency must be at least 1")
        self.store = store
        self.embedder = embedder
        self.splitter = splitter or ChunkSplitter()
        self.embedding_concurrency = embedding_concurrency

    async def ingest(
        self,
        file_name: str,
        content: str,
        file_path: str | None = None,
    ) -> IngestOutcome:
        """
        Ingest a document unless one with the same file name exists.

        Args:
            file_name: Idempotency key
            content: Full raw text
            file_path: Provenance recorded with the document

        Returns:
            IngestOutcome: Stored document and whether this call created it

        Raises:
            IngestionFailed: Provider or store failure; nothing was persisted
            ProviderConfigurationError: Fatal configuration (e.g. dimension mismatch)
        """
        existing = await self._find_existing(file_name)
        if existing is not None:
            logger.info(
                f"{__name__}:ingest - '{file_name}' already ingested "
                f"({existing.chunk_count} chunks), skipping"
            )
            return IngestOutcome(document=existing, created=False)

        chunks = self.splitter.split(content)
        logger.info(f"{__name__}:ingest - '{file_name}' split into {len(chunks)} chunks")

        try:
            embeddings = await self._embed_all(chunks)
        except ProviderError as e:
            raise IngestionFailed(
                f"Embedding failed: {e.message}",
                file_name=file_name,
                details={"provider": e.provider},
            ) from e

        try:
            document = await self._persist(file_name, file_path or "", content, chunks, embeddings)
        except DocumentAlreadyExists:
            winner = await self._find_existing(file_name)
            if winner is None:
                raise IngestionFailed(
                    "Document reported as existing but could not be read back",
                    file_name=file_name,
                )
            logger.info(
                f"{__name__}:ingest - '{file_name}' committed concurrently, "
                f"returning existing document"
            )
            return IngestOutcome(document=winner, created=False)
        except VectorStoreError as e:
            raise IngestionFailed(
                f"Failed to store document: {e.message}",
                file_name=file_name,
                details={"operation": e.details.get("operation")},
            ) from e

        logger.info(
            f"{__name__}:ingest - Ingested '{file_name}' as {document.id} "
            f"with {document.chunk_count} chunks"
        )
        return IngestOutcome(document=document, created=True)

    async def _find_existing(self, file_name: str) -> Document | None:
        try:
            return await self.store.find_by_name(file_name)
        except VectorStoreError as e:
            raise IngestionFailed(
                f"Failed to look up document: {e.message}",
                file_name=file_name,
            ) from e

    async def _embed_all(self, chunks: list[str]) -> list[list[float]]:
        """Embed chunks, returning vectors in chunk order."""
        if self.embedding_concurrency == 1 or len(chunks) <= 1:
            return [await self.embedder.embed(chunk) for chunk in chunks]

        semaphore = asyncio.Semaphore(self.embedding_concurrency)

        async def embed_one(chunk: str) -> list[float]:
            async with semaphore:
                return await self.embedder.embed(chunk)

        tasks = [asyncio.ensure_future(embed_one(chunk)) for chunk in chunks]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _persist(
        self,
        file_name: str,
        file_path: str,
        content: str,
        chunks: list[str],
        embeddings: list[list[float]],
    ) -> Document:
        """Write the document and every chunk in one transaction."""
        async with self.store.begin() as tx:
            document = await tx.create_document(
                file_name=file_name,
                file_path=file_path,
                content=content,
            )
            for index, (chunk, embedding) in enumerate(zip(chunks, embeddings)):
                await tx.create_chunk(
                    document_id=document.id,
                    content=chunk,
                    chunk_index=index,
                    embedding=embedding,
                )
        return document.model_copy(update={"chunk_count": len(chunks)})
