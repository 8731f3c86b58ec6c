"""
Provider registry factory.

Builds every backend the configuration allows and registers only those that
initialised. Groq needs an API key; Ollama can be switched off.

Dependencies: homelab_rag.configs, homelab_rag.core.providers, homelab_rag.core.registry
System role: Startup-time provider instantiation
"""

import logging

from homelab_rag.configs import Settings
from homelab_rag.core.providers.base import (
    EmbeddingProvider,
    GenerationProvider,
    RetryPolicy,
)
from homelab_rag.core.providers.groq_provider import GroqGenerationProvider
from homelab_rag.core.providers.ollama_provider import (
    OllamaEmbeddingProvider,
    OllamaGenerationProvider,
)
from homelab_rag.core.registry import ProviderRegistry

logger = logging.getLogger(__name__)

OLLAMA = "ollama"
GROQ = "groq"


def build_registry(settings: Settings) -> ProviderRegistry:
    """
    Create providers from settings and assemble the registry.

    Args:
        settings: Application settings

    Returns:
        ProviderRegistry: Registry of the providers that initialised

    Raises:
        ProviderNotConfigured: When the designated embedding provider is unavailable
    """
    retry_policy = RetryPolicy(
        max_retries=settings.providers.max_retries,
        initial_wait=settings.providers.retry_initial_wait,
        max_wait=settings.providers.retry_max_wait,
    )
    embedding: dict[str, EmbeddingProvider] = {}
    generation: dict[str, GenerationProvider] = {}

    ollama = settings.ollama
    if ollama.enabled:
        embedding[OLLAMA] = OllamaEmbeddingProvider(
            base_url=ollama.base_url,
            model=ollama.embedding_model,
            dimension=ollama.embedding_dimension,
            timeout=ollama.timeout,
            name=OLLAMA,
            retry_policy=retry_policy,
        )
        generation[OLLAMA] = OllamaGenerationProvider(
            base_url=ollama.base_url,
            model=ollama.model,
            max_tokens=ollama.max_tokens,
            temperature=ollama.temperature,
            timeout=ollama.timeout,
            name=OLLAMA,
            retry_policy=retry_policy,
        )
    else:
        logger.info(f"{__name__}:build_registry - Ollama disabled, not registered")

    groq = settings.groq
    api_key = groq.api_key.get_secret_value() if groq.api_key else ""
    if api_key:
        generation[GROQ] = GroqGenerationProvider(
            api_key=api_key,
            model=groq.model,
            base_url=groq.base_url,
            max_tokens=groq.max_tokens,
            temperature=groq.temperature,
            timeout=groq.timeout,
            name=GROQ,
            retry_policy=retry_policy,
        )
    else:
        logger.warning(f"{__name__}:build_registry - GROQ_API_KEY not set, Groq not registered")

    registry = ProviderRegistry(
        embedding_providers=embedding,
        generation_providers=generation,
        embedding_provider_name=settings.providers.embedding_provider,
        default_generation_name=settings.providers.default_generation_provider,
    )
    logger.info(f"{__name__}:build_registry - Providers ready: {registry.describe()}")
    return registry
