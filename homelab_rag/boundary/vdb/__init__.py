"""
Vector database boundary layer.

Provides vector stores for storage and retrieval operations.
- InMemoryVectorStore: Numpy-backed store for development and tests
- PgVectorStore: PostgreSQL + pgvector store for production

Dependencies: numpy, sqlalchemy, pgvector
System role: Vector store adapter for RAG retrieval
"""

from homelab_rag.boundary.vdb.memory_store import InMemoryVectorStore
from homelab_rag.boundary.vdb.pgvector_store import PgVectorStore
from homelab_rag.boundary.vdb.vector_store import VectorStore, VectorStoreTransaction

__all__ = [
    "InMemoryVectorStore",
    "PgVectorStore",
    "VectorStore",
    "VectorStoreTransaction",
]
