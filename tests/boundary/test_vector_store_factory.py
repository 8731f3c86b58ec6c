"""Tests for vector store selection."""

import pytest

from homelab_rag.boundary.vdb import InMemoryVectorStore, PgVectorStore
from homelab_rag.boundary.vdb.vector_store_factory import get_vector_store
from homelab_rag.configs.settings import Settings
from homelab_rag.configs.vector_store import VectorStoreSettings


class TestGetVectorStore:
    """Test get_vector_store()."""

    def test_get_vector_store_should_return_memory_store(self) -> None:
        # Arrange
        settings = Settings(vector_store=VectorStoreSettings(store_type="memory"))

        # Act
        store = get_vector_store(settings)

        # Assert
        assert isinstance(store, InMemoryVectorStore)

    @pytest.mark.asyncio
    async def test_get_vector_store_should_return_pgvector_store(self) -> None:
        # Arrange
        settings = Settings(vector_store=VectorStoreSettings(store_type="PGVECTOR"))

        # Act
        store = get_vector_store(settings)

        # Assert
        assert isinstance(store, PgVectorStore)
        await store.aclose()

    def test_get_vector_store_should_reject_unknown_type(self) -> None:
        # Arrange
        settings = Settings(vector_store=VectorStoreSettings(store_type="faiss"))

        # Act & Assert
        with pytest.raises(ValueError, match="faiss"):
            get_vector_store(settings)
