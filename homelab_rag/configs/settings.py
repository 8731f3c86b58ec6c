"""
Aggregated settings for the homelab RAG service.

One attribute per concern (database, vector_store, ingestion, providers,
ollama, groq), each reading its own env prefix.

Dependencies: homelab_rag.configs.*
System role: Single source of configuration
"""

from functools import lru_cache

from pydantic import Field

from homelab_rag.configs.base import BaseSettings
from homelab_rag.configs.database import DatabaseSettings
from homelab_rag.configs.ingestion import IngestionSettings
from homelab_rag.configs.providers import GroqSettings, OllamaSettings, ProviderSettings
from homelab_rag.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Every settings group, built from the environment at construction."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    ollama: OllamaSettings = Field(default_factory=OllamaSettings)
    groq: GroqSettings = Field(default_factory=GroqSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide Settings, read once.

    Cached so every caller sees the same values; tests construct
    Settings() directly instead.

    Returns:
        Settings: Cached settings

    Usage:
        from homelab_rag.configs import get_settings
        settings = get_settings()
    """
    return Settings()
