"""
Provider registry.

Holds the embedding and generation providers that initialised at startup and
resolves a request's provider name to one of them. Built once, read-only
afterwards, so concurrent requests share it without locking.

Resolution for generation:
    explicit name  -> that provider, or ProviderNotConfigured
    no name        -> the configured default if registered,
                      else the single registered alternate,
                      else NoProviderAvailable

Fallback is decided from what is registered, never by retrying a failed call
on another provider. Embeddings always use one designated provider so every
stored and query vector has the same dimension.

Dependencies: homelab_rag.core.providers, homelab_rag.core.exceptions
System role: Provider lookup and default/fallback selection
"""

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from homelab_rag.core.exceptions import (
    NoProviderAvailable,
    ProviderConfigurationError,
    ProviderNotConfigured,
)
from homelab_rag.core.providers.base import EmbeddingProvider, GenerationProvider

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Registry keys are case-insensitive and ignore surrounding whitespace."""
    return name.strip().lower()


class Selection(str, enum.Enum):
    """How a generation provider was chosen."""

    EXPLICIT = "explicit"
    DEFAULT = "default"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ResolvedProvider:
    """Generation provider chosen for one request."""

    name: str
    provider: GenerationProvider
    selection: Selection


def _index(providers: Mapping[str, Any], kind: str) -> MappingProxyType:
    indexed: dict[str, Any] = {}
    for name, provider in providers.items():
        key = normalize_name(name)
        if not key:
            raise ProviderConfigurationError(f"Empty {kind} provider name")
        if key in indexed:
            raise ProviderConfigurationError(
                f"Duplicate {kind} provider name '{key}'",
                {"provider": key, "kind": kind},
            )
        indexed[key] = provider
    return MappingProxyType(indexed)


class ProviderRegistry:
    """Immutable name → provider lookup."""

    def __init__(
        self,
        embedding_providers: Mapping[str, EmbeddingProvider],
        generation_providers: Mapping[str, GenerationProvider],
        embedding_provider_name: str,
        default_generation_name: str,
    ) -> None:
        """
        Build registry from successfully initialised providers.

        Args:
            embedding_providers: Registered embedding providers by name
            generation_providers: Registered generation providers by name
            embedding_provider_name: The one provider used for all embeddings
            default_generation_name: Provider used when a request names none

        Raises:
            ProviderNotConfigured: When the designated embedding provider is missing
            ProviderConfigurationError: On duplicate or empty names
        """
        self._embedding = _index(embedding_providers, "embedding")
        self._generation = _index(generation_providers, "generation")
        self._embedding_name = normalize_name(embedding_provider_name)
        self._default_name = normalize_name(default_generation_name)

        if self._embedding_name not in self._embedding:
            raise ProviderNotConfigured(self._embedding_name, kind="embedding")

        if self._default_name not in self._generation:
            logger.warning(
                f"{__name__}:__init__ - Default generation provider "
                f"'{self._default_name}' is not registered; "
                f"registered: {sorted(self._generation)}"
            )

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        """The system-wide embedding provider."""
        return self._embedding[self._embedding_name]

    @property
    def embedding_dimension(self) -> int:
        """Vector size shared by every stored and query embedding."""
        return self.embedding_provider.dimension

    @property
    def generation_names(self) -> list[str]:
        """Registered generation provider names, sorted."""
        return sorted(self._generation)

    def resolve_generation(self, name: str | None = None) -> ResolvedProvider:
        """
        Resolve the generation provider for a request.

        Args:
            name: Provider requested by the caller, or None for the default

        Returns:
            ResolvedProvider: Chosen provider with how it was selected

        Raises:
            ProviderNotConfigured: Explicit name is not registered
            NoProviderAvailable: No name given and no default or single alternate
        """
        if name is not None and name.strip():
            key = normalize_name(name)
            if key not in self._generation:
                raise ProviderNotConfigured(key)
            return ResolvedProvider(key, self._generation[key], Selection.EXPLICIT)

        if self._default_name in self._generation:
            return ResolvedProvider(
                self._default_name,
                self._generation[self._default_name],
                Selection.DEFAULT,
            )

        if len(self._generation) == 1:
            (key, provider), = self._generation.items()
            logger.info(
                f"{__name__}:resolve_generation - Default '{self._default_name}' "
                f"unavailable, using '{key}'"
            )
            return ResolvedProvider(key, provider, Selection.FALLBACK)

        raise NoProviderAvailable(
            "No generation provider available: default "
            f"'{self._default_name}' is not registered and "
            f"{len(self._generation)} alternates are",
            {"default": self._default_name, "registered": self.generation_names},
        )

    def describe(self) -> dict[str, Any]:
        """
        Startup diagnostics.

        Returns:
            dict: Registered names, defaults and the embedding dimension
        """
        default_registered = self._default_name in self._generation
        return {
            "embedding_provider": self._embedding_name,
            "embedding_dimension": self.embedding_dimension,
            "embedding_providers": sorted(self._embedding),
            "generation_providers": self.generation_names,
            "default_generation_provider": self._default_name,
            "default_registered": default_registered,
        }

    async def aclose(self) -> None:
        """Close every provider's client (each instance once)."""
        seen: set[int] = set()
        for provider in [*self._embedding.values(), *self._generation.values()]:
            if id(provider) in seen:
                continue
            seen.add(id(provider))
            await provider.aclose()
