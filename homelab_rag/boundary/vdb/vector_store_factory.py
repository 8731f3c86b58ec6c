"""
Vector store factory for selecting between in-memory (dev) and pgvector (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: homelab_rag.boundary.vdb, homelab_rag.boundary.db, homelab_rag.configs
System role: Vector store instantiation and selection
"""

import logging

from homelab_rag.boundary.db.connection import get_async_engine, get_async_session_factory
from homelab_rag.boundary.vdb.memory_store import InMemoryVectorStore
from homelab_rag.boundary.vdb.pgvector_store import PgVectorStore
from homelab_rag.boundary.vdb.vector_store import VectorStore
from homelab_rag.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def get_vector_store(settings: Settings | None = None) -> VectorStore:
    """
    Factory function to get vector store based on environment configuration.

    Args:
        settings: Application settings (defaults to cached settings)

    Returns:
        InMemoryVectorStore or PgVectorStore: Configured vector store instance

    Raises:
        ValueError: If VECTOR_STORE_STORE_TYPE is invalid
    """
    settings = settings or get_settings()
    store_type = settings.vector_store.store_type.lower()

    if store_type == "memory":
        logger.info(
            f"{__name__}:get_vector_store - Creating in-memory vector store (local dev mode)"
        )
        return InMemoryVectorStore()

    elif store_type == "pgvector":
        logger.info(f"{__name__}:get_vector_store - Creating pgvector store (production mode)")
        engine = get_async_engine(settings.database)
        return PgVectorStore(
            session_factory=get_async_session_factory(engine),
            engine=engine,
        )

    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
            f"Must be 'memory' (dev) or 'pgvector' (production)."
        )
