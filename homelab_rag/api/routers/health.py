"""
Health check API endpoints.

Routes: GET /health, GET /health/providers

Dependencies: homelab_rag.core.registry
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends

from homelab_rag.api.deps import get_provider_registry
from homelab_rag.core.registry import ProviderRegistry
from homelab_rag.models.api import HealthResponse, ProvidersHealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/providers", response_model=ProvidersHealthResponse)
async def health_check_providers(
    registry: ProviderRegistry = Depends(get_provider_registry),
) -> ProvidersHealthResponse:
    """Registered providers, the embedding dimension and the default generator."""
    return ProvidersHealthResponse(**registry.describe())
