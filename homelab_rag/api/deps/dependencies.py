"""
Dependency injection container.

The service container is built once in the application lifespan and kept on
app.state; factory functions hand its services to routes via Depends.

Dependencies: homelab_rag.configs, homelab_rag.application, homelab_rag.boundary, homelab_rag.core
System role: DI container for service injection
"""

import logging

from fastapi import Request

from homelab_rag.application.services import DocumentService, QueryService
from homelab_rag.boundary.vdb.vector_store import VectorStore
from homelab_rag.configs import Settings
from homelab_rag.core.chunker import ChunkSplitter
from homelab_rag.core.ingestion_orchestrator import IngestionOrchestrator
from homelab_rag.core.registry import ProviderRegistry
from homelab_rag.core.retrieval_orchestrator import RetrievalOrchestrator

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Shared, read-only services for the lifetime of the application."""

    def __init__(
        self,
        settings: Settings,
        registry: ProviderRegistry,
        store: VectorStore,
    ) -> None:
        """
        Wire orchestrators and services from their collaborators.

        Args:
            settings: Application settings
            registry: Provider registry
            store: Vector store
        """
        self.settings = settings
        self.registry = registry
        self.store = store

        ingestion = IngestionOrchestrator(
            store=store,
            embedder=registry.embedding_provider,
            splitter=ChunkSplitter(settings.ingestion.chunk_size),
            embedding_concurrency=settings.ingestion.embedding_concurrency,
        )
        retrieval = RetrievalOrchestrator(
            store=store,
            registry=registry,
            default_top_k=settings.vector_store.top_k,
        )
        self.document_service = DocumentService(
            orchestrator=ingestion,
            store=store,
            directory_pattern=settings.ingestion.directory_pattern,
        )
        self.query_service = QueryService(orchestrator=retrieval)

    async def aclose(self) -> None:
        """Close provider clients and store connections."""
        await self.registry.aclose()
        await self.store.aclose()
        logger.info(f"{__name__}:aclose - Services closed")


def get_container(request: Request) -> ServiceContainer:
    """Get the service container built at startup."""
    return request.app.state.container


def get_document_service(request: Request) -> DocumentService:
    """
    Get document service instance.

    Returns:
        DocumentService: Shared document service
    """
    return get_container(request).document_service


def get_query_service(request: Request) -> QueryService:
    """
    Get query service instance.

    Returns:
        QueryService: Shared query service
    """
    return get_container(request).query_service


def get_provider_registry(request: Request) -> ProviderRegistry:
    """
    Get provider registry.

    Returns:
        ProviderRegistry: Registry built at startup
    """
    return get_container(request).registry
