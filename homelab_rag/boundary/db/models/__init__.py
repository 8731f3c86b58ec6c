"""ORM models."""

from homelab_rag.boundary.db.models.document_model import DocumentChunkModel, DocumentModel

__all__ = ["DocumentModel", "DocumentChunkModel"]
