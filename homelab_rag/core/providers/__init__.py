"""
Embedding and generation providers.

Exports the capability base classes and the LangChain-backed Ollama and Groq backends.
"""

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

__all__ = [
    "EmbeddingProvider",
    "GenerationProvider",
    "RetryPolicy",
    "GroqGenerationProvider",
    "OllamaEmbeddingProvider",
    "OllamaGenerationProvider",
]
