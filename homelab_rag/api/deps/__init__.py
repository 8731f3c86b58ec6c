"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceContainer,
    get_container,
    get_document_service,
    get_provider_registry,
    get_query_service,
)

__all__ = [
    "ServiceContainer",
    "get_container",
    "get_document_service",
    "get_provider_registry",
    "get_query_service",
]
