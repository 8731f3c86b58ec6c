"""
Shared settings base.

Every settings class reads the process environment and an optional .env
file, ignoring keys it does not declare. Fields declared here apply to the
whole service and carry no prefix.

Dependencies: pydantic_settings
System role: Root of the configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field


class BaseSettings(PydanticBaseSettings):
    """Service-wide settings and the .env loading policy."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="Homelab RAG API",
        description="Service name shown in the API docs and startup logs",
    )
    environment: str = Field(
        default="development",
        description="Deployment label (development, homelab, ...)",
    )
    debug: bool = Field(
        default=False,
        description="Run FastAPI in debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level name",
    )
