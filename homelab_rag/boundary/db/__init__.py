"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, IngestedAtMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables(): Connection management
  - DocumentModel, DocumentChunkModel: Persisted entities
  - document_crud, chunk_crud: CRUD operation singletons

Dependencies: sqlalchemy, pgvector, homelab_rag.configs
System role: Database adapter behind the pgvector store
"""

from homelab_rag.boundary.db.base import Base, IngestedAtMixin, UUIDMixin
from homelab_rag.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from homelab_rag.boundary.db.models.document_model import DocumentChunkModel, DocumentModel
from homelab_rag.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    DocumentCRUD,
    chunk_crud,
    document_crud,
)

__all__ = [
    # Base classes
    "Base",
    "IngestedAtMixin",
    "UUIDMixin",
    # Connection
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DocumentModel",
    "DocumentChunkModel",
    # CRUD classes
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    # CRUD singletons
    "chunk_crud",
    "document_crud",
]
