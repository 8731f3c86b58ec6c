"""
HTTP entry point for the homelab RAG service.

Mounts the documents, query and health routers under /api/v1 and runs under uvicorn.
Providers and the vector store are built once at startup and closed on
shutdown.

Dependencies: fastapi, homelab_rag.api.routers, uvicorn
System role: Application factory and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homelab_rag.api.deps import ServiceContainer
from homelab_rag.boundary.vdb.vector_store_factory import get_vector_store
from homelab_rag.configs import Settings, get_settings
from homelab_rag.core.providers.factory import build_registry
from homelab_rag.observability.logger import configure_logging, get_logger
from homelab_rag.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    documents_router,
    health_router,
    query_router,
)

logger = get_logger(__name__)


async def build_container(settings: Settings) -> ServiceContainer:
    """
    Build providers and the vector store, and prepare storage.

    Args:
        settings: Application settings

    Returns:
        ServiceContainer: Wired services
    """
    registry = build_registry(settings)
    store = get_vector_store(settings)
    try:
        await store.initialize()
    except Exception:
        await registry.aclose()
        await store.aclose()
        raise
    return ServiceContainer(settings=settings, registry=registry, store=store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build services on startup and close them on shutdown.

    Builds the service container unless one was set before startup (tests),
    and closes it on shutdown.
    """
    # Startup
    if getattr(app.state, "container", None) is None:
        logger.info(f"{__name__}:lifespan - Building services...")
        app.state.container = await build_container(get_settings())
        logger.info(f"{__name__}:lifespan - Services ready")

    yield

    # Shutdown
    await app.state.container.aclose()
    app.state.container = None


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """
    Application factory.

    Args:
        container: Pre-built services (built at startup when None)

    Returns:
        FastAPI: App with middleware, routers and /healthz
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Retrieval-augmented Q&A over homelab documentation",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(query_router, prefix="/api/v1")

    @app.get("/healthz", include_in_schema=False)
    async def healthz() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    uvicorn.run(
        "homelab_rag.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
