"""
Test suite for RetrievalOrchestrator.

System role: Verification of question answering, citations and provider selection
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from homelab_rag.boundary.vdb.memory_store import InMemoryVectorStore
from homelab_rag.core.exceptions import (
    NoProviderAvailable,
    ProviderNotConfigured,
    ProviderUnavailable,
    RetrievalError,
    VectorStoreError,
)
from homelab_rag.core.ingestion_orchestrator import IngestionOrchestrator
from homelab_rag.core.registry import ProviderRegistry
from homelab_rag.core.retrieval_orchestrator import (
    NO_INFORMATION_ANSWER,
    RetrievalOrchestrator,
    normalize_top_k,
)
from homelab_rag.models.document import RetrievedChunk
from tests.fakes import FakeEmbeddingProvider, FakeGenerationProvider


def retrieved(content: str, file_name: str, index: int, distance: float) -> RetrievedChunk:
    return RetrievedChunk(
        chunk_id=uuid.uuid4(),
        document_id=uuid.uuid4(),
        file_name=file_name,
        content=content,
        chunk_index=index,
        distance=distance,
    )


def stub_store(chunks: list[RetrievedChunk]) -> MagicMock:
    store = MagicMock()
    store.nearest_k = AsyncMock(return_value=chunks)
    return store


class TestNormalizeTopK:
    """Test suite for normalize_top_k()."""

    @pytest.mark.parametrize("value", [None, 0, -3, True, False, "5", 2.5])
    def test_normalize_top_k_should_default_invalid_values(self, value) -> None:
        assert normalize_top_k(value, default=5) == 5

    def test_normalize_top_k_should_keep_positive_int(self) -> None:
        assert normalize_top_k(8, default=5) == 8


class TestAnswer:
    """Test suite for RetrievalOrchestrator.answer()."""

    @pytest.mark.asyncio
    async def test_answer_should_return_fixed_answer_for_empty_corpus(
        self,
        memory_store: InMemoryVectorStore,
        registry: ProviderRegistry,
        generator: FakeGenerationProvider,
    ) -> None:
        # Arrange
        orchestrator = RetrievalOrchestrator(store=memory_store, registry=registry)

        # Act
        result = await orchestrator.answer("How do I reset the router?")

        # Assert
        assert result.answer == NO_INFORMATION_ANSWER
        assert result.sources == []
        assert result.chunks_used == 0
        assert result.provider_used is None
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_answer_should_not_resolve_provider_for_empty_corpus(
        self,
        memory_store: InMemoryVectorStore,
    ) -> None:
        # Arrange
        registry = ProviderRegistry(
            embedding_providers={"ollama": FakeEmbeddingProvider()},
            generation_providers={},
            embedding_provider_name="ollama",
            default_generation_name="groq",
        )
        orchestrator = RetrievalOrchestrator(store=memory_store, registry=registry)

        # Act
        result = await orchestrator.answer("anything", provider_name="missing")

        # Assert
        assert result.answer == NO_INFORMATION_ANSWER

    @pytest.mark.asyncio
    async def test_answer_should_preserve_store_order_in_sources_and_context(
        self,
        registry: ProviderRegistry,
        generator: FakeGenerationProvider,
    ) -> None:
        # Arrange
        chunks = [
            retrieved("z" * 450, "network.md", 4, 0.1),
            retrieved("short text", "backup.md", 0, 0.2),
            retrieved("y" * 200, "backup.md", 2, 0.2),
        ]
        orchestrator = RetrievalOrchestrator(store=stub_store(chunks), registry=registry)

        # Act
        result = await orchestrator.answer("question?")

        # Assert
        assert [(s.file_name, s.chunk_index) for s in result.sources] == [
            ("network.md", 4),
            ("backup.md", 0),
            ("backup.md", 2),
        ]
        assert result.sources[0].preview == "z" * 200 + "..."
        assert result.sources[1].preview == "short text"
        assert result.sources[2].preview == "y" * 200
        assert all(len(s.preview) <= 203 for s in result.sources)
        assert generator.calls == [("question?", ["z" * 450, "short text", "y" * 200])]
        assert result.chunks_used == 3
        assert result.provider_used == "groq"

    @pytest.mark.asyncio
    async def test_answer_should_pass_normalized_top_k_to_store(
        self,
        registry: ProviderRegistry,
    ) -> None:
        # Arrange
        store = stub_store([])
        orchestrator = RetrievalOrchestrator(store=store, registry=registry, default_top_k=7)

        # Act
        await orchestrator.answer("q", top_k=0)
        await orchestrator.answer("q", top_k=2)

        # Assert
        assert [c.args[1] for c in store.nearest_k.await_args_list] == [7, 2]

    @pytest.mark.asyncio
    async def test_answer_should_use_explicit_provider(
        self,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        groq, ollama = FakeGenerationProvider("groq"), FakeGenerationProvider("ollama")
        registry = ProviderRegistry(
            embedding_providers={"ollama": embedder},
            generation_providers={"groq": groq, "ollama": ollama},
            embedding_provider_name="ollama",
            default_generation_name="groq",
        )
        orchestrator = RetrievalOrchestrator(
            store=stub_store([retrieved("ctx", "a.md", 0, 0.0)]),
            registry=registry,
        )

        # Act
        result = await orchestrator.answer("q", provider_name="Ollama")

        # Assert
        assert result.provider_used == "ollama"
        assert result.answer == "answer from ollama"
        assert groq.calls == []

    @pytest.mark.asyncio
    async def test_answer_should_fall_back_to_single_alternate(
        self,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        registry = ProviderRegistry(
            embedding_providers={"ollama": embedder},
            generation_providers={"ollama": FakeGenerationProvider("ollama")},
            embedding_provider_name="ollama",
            default_generation_name="groq",
        )
        orchestrator = RetrievalOrchestrator(
            store=stub_store([retrieved("ctx", "a.md", 0, 0.0)]),
            registry=registry,
        )

        # Act
        result = await orchestrator.answer("q")

        # Assert
        assert result.provider_used == "ollama"

    @pytest.mark.asyncio
    async def test_answer_should_fail_with_two_alternates_and_no_default(
        self,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        registry = ProviderRegistry(
            embedding_providers={"ollama": embedder},
            generation_providers={
                "ollama": FakeGenerationProvider("ollama"),
                "local": FakeGenerationProvider("local"),
            },
            embedding_provider_name="ollama",
            default_generation_name="groq",
        )
        orchestrator = RetrievalOrchestrator(
            store=stub_store([retrieved("ctx", "a.md", 0, 0.0)]),
            registry=registry,
        )

        # Act & Assert
        with pytest.raises(NoProviderAvailable):
            await orchestrator.answer("q")

    @pytest.mark.asyncio
    async def test_answer_should_propagate_unknown_provider(
        self,
        registry: ProviderRegistry,
    ) -> None:
        # Arrange
        orchestrator = RetrievalOrchestrator(
            store=stub_store([retrieved("ctx", "a.md", 0, 0.0)]),
            registry=registry,
        )

        # Act & Assert
        with pytest.raises(ProviderNotConfigured):
            await orchestrator.answer("q", provider_name="openai")

    @pytest.mark.asyncio
    async def test_answer_should_wrap_generation_failure_without_switching_provider(
        self,
        embedder: FakeEmbeddingProvider,
    ) -> None:
        # Arrange
        failing = FakeGenerationProvider("groq")
        failing._complete = AsyncMock(side_effect=ProviderUnavailable("down", "groq"))
        other = FakeGenerationProvider("ollama")
        registry = ProviderRegistry(
            embedding_providers={"ollama": embedder},
            generation_providers={"groq": failing, "ollama": other},
            embedding_provider_name="ollama",
            default_generation_name="groq",
        )
        orchestrator = RetrievalOrchestrator(
            store=stub_store([retrieved("ctx", "a.md", 0, 0.0)]),
            registry=registry,
        )

        # Act & Assert
        with pytest.raises(RetrievalError) as exc_info:
            await orchestrator.answer("why is it down?")
        assert isinstance(exc_info.value.__cause__, ProviderUnavailable)
        assert exc_info.value.details["question"] == "why is it down?"
        assert other.calls == []

    @pytest.mark.asyncio
    async def test_answer_should_wrap_store_failure(
        self,
        registry: ProviderRegistry,
    ) -> None:
        # Arrange
        store = MagicMock()
        store.nearest_k = AsyncMock(side_effect=VectorStoreError("db down", operation="nearest_k"))
        orchestrator = RetrievalOrchestrator(store=store, registry=registry)

        # Act & Assert
        with pytest.raises(RetrievalError):
            await orchestrator.answer("q")

    @pytest.mark.asyncio
    async def test_answer_should_rank_ingested_chunks_by_similarity(
        self,
        memory_store: InMemoryVectorStore,
        generator: FakeGenerationProvider,
    ) -> None:
        # Arrange
        embedder = FakeEmbeddingProvider(
            keywords={
                "docker": [1.0, 0.0, 0.0],
                "backup": [0.0, 1.0, 0.0],
            },
            default=[0.0, 0.0, 1.0],
        )
        registry = ProviderRegistry(
            embedding_providers={"ollama": embedder},
            generation_providers={"groq": generator},
            embedding_provider_name="ollama",
            default_generation_name="groq",
        )
        ingestion = IngestionOrchestrator(store=memory_store, embedder=embedder)
        await ingestion.ingest("docker.md", "How to run docker containers.")
        await ingestion.ingest("backup.md", "Nightly backup schedule.")
        orchestrator = RetrievalOrchestrator(store=memory_store, registry=registry)

        # Act
        result = await orchestrator.answer("restart docker", top_k=1)

        # Assert
        assert [s.file_name for s in result.sources] == ["docker.md"]
        assert generator.calls[0][1] == ["How to run docker containers."]
