"""
Vector store configuration settings.

Selects the vector store backend and the retrieval defaults.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from homelab_rag.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for dev, pgvector for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pgvector",
        description="Vector store type: 'memory' for local dev, 'pgvector' for production",
    )
    top_k: int = Field(
        default=5,
        ge=1,
        description="Number of chunks retrieved when the caller gives no valid top_k",
    )
