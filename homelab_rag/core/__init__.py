"""
Core business logic module.

Contains the chunker, provider registry, ingestion and retrieval orchestrators,
and the exception hierarchy.
"""

from homelab_rag.core.exceptions import (
    HomelabRAGException,
    ProviderError,
    ProviderUnavailable,
    ProviderResponseInvalid,
    ProviderConfigurationError,
    ProviderNotConfigured,
    NoProviderAvailable,
    EmbeddingDimensionMismatch,
    DocumentSourceNotFoundError,
    DocumentAlreadyExists,
    IngestionFailed,
    VectorStoreError,
    RetrievalError,
)

# Business logic modules
from homelab_rag.core.chunker import ChunkSplitter
from homelab_rag.core.registry import ProviderRegistry, ResolvedProvider, Selection
from homelab_rag.core.ingestion_orchestrator import IngestionOrchestrator, IngestOutcome
from homelab_rag.core.retrieval_orchestrator import RetrievalOrchestrator

__all__ = [
    # Exceptions
    "HomelabRAGException",
    "ProviderError",
    "ProviderUnavailable",
    "ProviderResponseInvalid",
    "ProviderConfigurationError",
    "ProviderNotConfigured",
    "NoProviderAvailable",
    "EmbeddingDimensionMismatch",
    "DocumentSourceNotFoundError",
    "DocumentAlreadyExists",
    "IngestionFailed",
    "VectorStoreError",
    "RetrievalError",
    # Business logic
    "ChunkSplitter",
    "IngestionOrchestrator",
    "IngestOutcome",
    "ProviderRegistry",
    "ResolvedProvider",
    "RetrievalOrchestrator",
    "Selection",
]
