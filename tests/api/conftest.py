"""Fixtures for HTTP tests: an app wired with fake providers and the in-memory store."""

import pytest
from fastapi.testclient import TestClient

from homelab_rag.api.deps import ServiceContainer
from homelab_rag.api.main import create_app
from homelab_rag.boundary.vdb.memory_store import InMemoryVectorStore
from homelab_rag.configs import Settings
from homelab_rag.core.registry import ProviderRegistry


@pytest.fixture
def container(registry: ProviderRegistry, memory_store: InMemoryVectorStore) -> ServiceContainer:
    return ServiceContainer(settings=Settings(), registry=registry, store=memory_store)


@pytest.fixture
def client(container: ServiceContainer):
    app = create_app(container)
    yield TestClient(app)
    app.dependency_overrides.clear()
