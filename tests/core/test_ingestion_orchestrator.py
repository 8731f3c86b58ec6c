"""
Test suite for IngestionOrchestrator.

Runs against the in-memory store with fake providers; storage failures run
on PgVectorStore over SQLite with single CRUD calls patched to fail.

System role: Verification of idempotent, all-or-nothing ingestion
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from homelab_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from homelab_rag.boundary.vdb.memory_store import InMemoryVectorStore
from homelab_rag.boundary.vdb.pgvector_store import PgVectorStore
from homelab_rag.core.chunker import ChunkSplitter
from homelab_rag.core.exceptions import (
    DocumentAlreadyExists,
    EmbeddingDimensionMismatch,
    IngestionFailed,
    VectorStoreError,
)
from homelab_rag.core.ingestion_orchestrator import IngestionOrchestrator
from tests.fakes import FakeEmbeddingProvider

DOC = "alpha paragraph\n\nbeta paragraph\n\ngamma paragraph"


@pytest.fixture
def orchestrator(memory_store: InMemoryVectorStore, embedder: FakeEmbeddingProvider) -> IngestionOrchestrator:
    """Orchestrator with one paragraph per chunk."""
    return IngestionOrchestrator(
        store=memory_store,
        embedder=embedder,
        splitter=ChunkSplitter(max_chunk_size=10),
    )


class TestIngest:
    """Test suite for IngestionOrchestrator.ingest()."""

    @pytest.mark.asyncio
    async def test_ingest_should_create_document_with_contiguous_chunks(
        self,
        orchestrator: IngestionOrchestrator,
        memory_store: InMemoryVectorStore,
    ) -> None:
        # Act
        outcome = await orchestrator.ingest("setup.md", DOC, "/docs/setup.md")

        # Assert
        assert outcome.created is True
        assert outcome.document.chunk_count == 3
        assert outcome.document.file_path == "/docs/setup.md"
        stored = await memory_store.find_by_name("setup.md")
        assert stored is not None
        assert stored.chunk_count == 3
        indices = sorted(c.chunk_index for c in memory_store._chunks)
        assert indices == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_ingest_should_be_idempotent_by_file_name(
        self,
        orchestrator: IngestionOrchestrator,
        memory_store: InMemoryVectorStore,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        first = await orchestrator.ingest("setup.md", DOC)
        calls_after_first = len(embedder.calls)

        # Act
        second = await orchestrator.ingest("setup.md", "completely different text")

        # Assert
        assert second.created is False
        assert second.document.id == first.document.id
        assert second.document.chunk_count == 3
        assert len(embedder.calls) == calls_after_first
        assert len(await memory_store.list_documents()) == 1
        assert len(memory_store._chunks) == 3

    @pytest.mark.asyncio
    async def test_ingest_should_store_nothing_when_embedding_fails_midway(
        self,
        memory_store: InMemoryVectorStore,
    ) -> None:
        # Arrange
        embedder = FakeEmbeddingProvider(fail_on="gamma")
        orchestrator = IngestionOrchestrator(
            store=memory_store,
            embedder=embedder,
            splitter=ChunkSplitter(max_chunk_size=10),
        )

        # Act & Assert
        with pytest.raises(IngestionFailed) as exc_info:
            await orchestrator.ingest("setup.md", DOC)
        assert exc_info.value.file_name == "setup.md"
        assert exc_info.value.__cause__ is not None
        assert await memory_store.find_by_name("setup.md") is None
        assert memory_store._chunks == []

    @pytest.mark.asyncio
    async def test_ingest_should_allow_retry_after_failure(
        self,
        memory_store: InMemoryVectorStore,
    ) -> None:
        # Arrange
        embedder = FakeEmbeddingProvider(fail_on="gamma")
        orchestrator = IngestionOrchestrator(
            store=memory_store,
            embedder=embedder,
            splitter=ChunkSplitter(max_chunk_size=10),
        )
        with pytest.raises(IngestionFailed):
            await orchestrator.ingest("setup.md", DOC)

        # Act
        embedder.fail_on = None
        outcome = await orchestrator.ingest("setup.md", DOC)

        # Assert
        assert outcome.created is True
        assert outcome.document.chunk_count == 3

    @pytest.mark.asyncio
    async def test_ingest_should_propagate_dimension_mismatch_unwrapped(
        self,
        memory_store: InMemoryVectorStore,
    ) -> None:
        # Arrange
        embedder = FakeEmbeddingProvider(default=[1.0, 0.0])
        embedder.dimension = 3
        orchestrator = IngestionOrchestrator(store=memory_store, embedder=embedder)

        # Act & Assert
        with pytest.raises(EmbeddingDimensionMismatch):
            await orchestrator.ingest("setup.md", DOC)
        assert await memory_store.list_documents() == []

    @pytest.mark.asyncio
    async def test_ingest_should_create_document_without_chunks_for_empty_text(
        self,
        orchestrator: IngestionOrchestrator,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Act
        outcome = await orchestrator.ingest("empty.md", "")

        # Assert
        assert outcome.created is True
        assert outcome.document.chunk_count == 0
        assert embedder.calls == []

    @pytest.mark.asyncio
    async def test_ingest_should_return_winner_when_store_reports_duplicate(
        self,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        winner = MagicMock(chunk_count=2)
        store = MagicMock()
        store.find_by_name = AsyncMock(side_effect=[None, winner])
        tx = MagicMock()
        tx.create_document = AsyncMock(side_effect=DocumentAlreadyExists("setup.md"))
        store.begin = MagicMock(return_value=MagicMock(
            __aenter__=AsyncMock(return_value=tx),
            __aexit__=AsyncMock(return_value=False),
        ))
        orchestrator = IngestionOrchestrator(store=store, embedder=embedder)

        # Act
        outcome = await orchestrator.ingest("setup.md", DOC)

        # Assert
        assert outcome.created is False
        assert outcome.document is winner

    @pytest.mark.asyncio
    async def test_ingest_should_wrap_lookup_failure(
        self,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        store = MagicMock()
        store.find_by_name = AsyncMock(
            side_effect=VectorStoreError("connection refused", operation="find_by_name")
        )
        orchestrator = IngestionOrchestrator(store=store, embedder=embedder)

        # Act & Assert
        with pytest.raises(IngestionFailed) as exc_info:
            await orchestrator.ingest("setup.md", DOC)
        assert exc_info.value.file_name == "setup.md"
        assert isinstance(exc_info.value.__cause__, VectorStoreError)
        assert embedder.calls == []

    @pytest.mark.asyncio
    async def test_ingest_should_wrap_lookup_failure_after_duplicate(
        self,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        store = MagicMock()
        store.find_by_name = AsyncMock(
            side_effect=[None, VectorStoreError("connection reset", operation="find_by_name")]
        )
        tx = MagicMock()
        tx.create_document = AsyncMock(side_effect=DocumentAlreadyExists("setup.md"))
        store.begin = MagicMock(return_value=MagicMock(
            __aenter__=AsyncMock(return_value=tx),
            __aexit__=AsyncMock(return_value=False),
        ))
        orchestrator = IngestionOrchestrator(store=store, embedder=embedder)

        # Act & Assert
        with pytest.raises(IngestionFailed):
            await orchestrator.ingest("setup.md", DOC)


class TestIngestStorageFailures:
    """Test suite for store errors during ingestion, on the SQL-backed store."""

    @pytest.fixture
    def pg_store(self, sqlite_engine) -> PgVectorStore:
        """PgVectorStore over the SQLite test engine."""
        factory = async_sessionmaker(sqlite_engine, class_=AsyncSession, expire_on_commit=False)
        return PgVectorStore(session_factory=factory)

    @pytest.mark.asyncio
    async def test_ingest_should_wrap_document_insert_failure(
        self,
        pg_store: PgVectorStore,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        orchestrator = IngestionOrchestrator(store=pg_store, embedder=embedder)
        outage = OperationalError("INSERT", {}, Exception("server closed the connection"))

        # Act & Assert
        with patch(
            "homelab_rag.boundary.vdb.pgvector_store.document_crud.create",
            AsyncMock(side_effect=outage),
        ):
            with pytest.raises(IngestionFailed) as exc_info:
                await orchestrator.ingest("setup.md", DOC)
        assert exc_info.value.details["operation"] == "create_document"
        assert await pg_store.list_documents() == []

    @pytest.mark.asyncio
    async def test_ingest_should_roll_back_document_when_chunk_insert_fails(
        self,
        pg_store: PgVectorStore,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        orchestrator = IngestionOrchestrator(
            store=pg_store,
            embedder=embedder,
            splitter=ChunkSplitter(max_chunk_size=10),
        )
        original_create = chunk_crud.create
        inserted = 0

        async def fail_on_second_chunk(session, **kwargs):
            nonlocal inserted
            inserted += 1
            if inserted == 2:
                raise OperationalError("INSERT", {}, Exception("disk full"))
            return await original_create(session, **kwargs)

        # Act & Assert
        with patch(
            "homelab_rag.boundary.vdb.pgvector_store.chunk_crud.create",
            AsyncMock(side_effect=fail_on_second_chunk),
        ):
            with pytest.raises(IngestionFailed) as exc_info:
                await orchestrator.ingest("setup.md", DOC)
        assert exc_info.value.details["operation"] == "create_chunk"
        assert await pg_store.find_by_name("setup.md") is None

    @pytest.mark.asyncio
    async def test_ingest_should_wrap_connection_failure_on_begin(
        self,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        refused = OperationalError("CONNECT", {}, Exception("connection refused"))
        store = PgVectorStore(session_factory=MagicMock(side_effect=refused))
        store.find_by_name = AsyncMock(return_value=None)
        orchestrator = IngestionOrchestrator(store=store, embedder=embedder)

        # Act & Assert
        with pytest.raises(IngestionFailed) as exc_info:
            await orchestrator.ingest("setup.md", DOC)
        assert exc_info.value.details["operation"] == "transaction"


class TestConcurrentEmbedding:
    """Test suite for concurrent chunk embedding."""

    @pytest.mark.asyncio
    async def test_ingest_should_assign_indices_by_source_order_not_completion(
        self,
        memory_store: InMemoryVectorStore,
    ) -> None:
        # Arrange
        class SlowFirstEmbedder(FakeEmbeddingProvider):
            async def _embed(self, text: str) -> list[float]:
                if text.startswith("alpha"):
                    await asyncio.sleep(0.05)
                return await super()._embed(text)

        embedder = SlowFirstEmbedder(
            keywords={
                "alpha": [1.0, 0.0, 0.0],
                "beta": [0.0, 1.0, 0.0],
                "gamma": [0.0, 0.0, 1.0],
            },
        )
        orchestrator = IngestionOrchestrator(
            store=memory_store,
            embedder=embedder,
            splitter=ChunkSplitter(max_chunk_size=10),
            embedding_concurrency=3,
        )

        # Act
        await orchestrator.ingest("setup.md", DOC)

        # Assert
        assert embedder.calls[-1].startswith("alpha")
        by_index = {c.chunk_index: c for c in memory_store._chunks}
        assert by_index[0].content == "alpha paragraph"
        assert by_index[0].embedding == (1.0, 0.0, 0.0)
        assert by_index[1].embedding == (0.0, 1.0, 0.0)
        assert by_index[2].embedding == (0.0, 0.0, 1.0)

    @pytest.mark.asyncio
    async def test_ingest_should_store_nothing_when_concurrent_embedding_fails(
        self,
        memory_store: InMemoryVectorStore,
    ) -> None:
        # Arrange
        orchestrator = IngestionOrchestrator(
            store=memory_store,
            embedder=FakeEmbeddingProvider(fail_on="beta"),
            splitter=ChunkSplitter(max_chunk_size=10),
            embedding_concurrency=2,
        )

        # Act & Assert
        with pytest.raises(IngestionFailed):
            await orchestrator.ingest("setup.md", DOC)
        assert memory_store._chunks == []

    def test_init_should_reject_zero_concurrency(
        self,
        memory_store: InMemoryVectorStore,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Act & Assert
        with pytest.raises(ValueError):
            IngestionOrchestrator(store=memory_store, embedder=embedder, embedding_concurrency=0)
