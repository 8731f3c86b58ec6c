"""
CRUD operations for database models.

Exports CRUD classes and singleton instances.
"""

from homelab_rag.boundary.db.CRUD.base_crud import BaseCRUD
from homelab_rag.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from homelab_rag.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "chunk_crud",
    "document_crud",
]
