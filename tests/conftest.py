"""
Shared test fixtures and configuration for entire test suite.

Provides: Fake embedding/generation providers, in-memory store, registry,
SQLite-backed async engine, temp directories
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from homelab_rag.boundary.vdb.memory_store import InMemoryVectorStore
from homelab_rag.core.registry import ProviderRegistry
from tests.fakes import FakeEmbeddingProvider, FakeGenerationProvider


@pytest.fixture
def embedder() -> FakeEmbeddingProvider:
    """Provide deterministic embedding provider."""
    return FakeEmbeddingProvider()


@pytest.fixture
def generator() -> FakeGenerationProvider:
    """Provide recording generation provider registered as 'groq'."""
    return FakeGenerationProvider("groq")


@pytest.fixture
def registry(
    embedder: FakeEmbeddingProvider,
    generator: FakeGenerationProvider,
) -> ProviderRegistry:
    """Provide registry with one embedder and the default generator."""
    return ProviderRegistry(
        embedding_providers={"ollama": embedder},
        generation_providers={"groq": generator},
        embedding_provider_name="ollama",
        default_generation_name="groq",
    )


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    """Provide empty in-memory vector store."""
    return InMemoryVectorStore()


@pytest.fixture
async def sqlite_engine():
    """
    Create in-memory SQLite async engine with the ORM schema.

    Yields:
        AsyncEngine: Engine sharing one connection across sessions
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from homelab_rag.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_async_db(sqlite_engine):
    """
    Create session on the in-memory SQLite database.

    Yields:
        AsyncSession: Test database session rolled back afterwards
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    async_session = async_sessionmaker(
        sqlite_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def temp_dir():
    """
    Create a temporary directory for test files.

    Yields:
        Path: Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp(prefix="homelab_rag_test_"))
    yield temp_path

    if temp_path.exists():
        shutil.rmtree(temp_path, ignore_errors=True)
