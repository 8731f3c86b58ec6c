"""
Configuration settings for document ingestion.

Dependencies: pydantic, pydantic_settings
System role: Chunking and embedding fan-out configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from homelab_rag.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Settings for the ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(
        default=1000,
        ge=1,
        description="Maximum chunk size in characters (oversized paragraphs are kept whole)",
    )
    embedding_concurrency: int = Field(
        default=1,
        ge=1,
        description="Concurrent embedding calls per document (1 = sequential)",
    )
    directory_pattern: str = Field(
        default="*.md",
        description="Glob used when ingesting a directory recursively",
    )
