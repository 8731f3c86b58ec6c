"""
Provider configuration settings.

Ollama serves embeddings and generation from a local host, Groq serves
generation through its OpenAI-compatible API. A backend is only registered
when its configuration allows it (Ollama enabled, Groq API key present).

Dependencies: pydantic, pydantic_settings
System role: Embedding and generation backend configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from homelab_rag.configs.base import BaseSettings


class OllamaSettings(BaseSettings):
    """Ollama backend configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OLLAMA_",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Register Ollama providers")
    base_url: str = Field(default="http://localhost:11434", description="Ollama server URL")
    model: str = Field(default="llama3.2", description="Generation model")
    embedding_model: str = Field(default="llama3.2", description="Embedding model")
    embedding_dimension: int = Field(
        default=3072,
        ge=1,
        description="Vector size returned by the embedding model (llama3.2 = 3072)",
    )
    max_tokens: int = Field(default=1000, description="num_predict for generation")
    temperature: float = Field(default=0.7, description="Sampling temperature")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")


class GroqSettings(BaseSettings):
    """Groq backend configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GROQ_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = Field(default=None, description="Groq API key")
    base_url: str = Field(
        default="https://api.groq.com",
        description="Groq API host; the SDK appends /openai/v1",
    )
    model: str = Field(default="llama-3.3-70b-versatile", description="Chat model")
    max_tokens: int = Field(default=1000, description="Maximum completion tokens")
    temperature: float = Field(default=0.7, description="Sampling temperature")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")


class ProviderSettings(BaseSettings):
    """Provider selection and retry policy."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROVIDERS_",
        case_sensitive=False,
        extra="ignore",
    )

    default_generation_provider: str = Field(
        default="groq",
        description="Generation provider used when a query names none",
    )
    embedding_provider: str = Field(
        default="ollama",
        description="The single embedding provider used for every stored and query vector",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        description="Retries of a transient failure on the same provider (0 disables)",
    )
    retry_initial_wait: float = Field(default=0.5, ge=0, description="First backoff in seconds")
    retry_max_wait: float = Field(default=8.0, ge=0, description="Backoff ceiling in seconds")
