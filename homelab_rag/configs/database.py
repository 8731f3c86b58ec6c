"""
PostgreSQL settings for the pgvector store.

Only read when VECTOR_STORE_STORE_TYPE is 'pgvector'. The target database
must allow CREATE EXTENSION vector (or already have it).

Dependencies: pydantic, pydantic_settings
System role: Connection parameters for the production vector store
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from homelab_rag.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """POSTGRES_* connection and pool settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Server hostname")
    port: int = Field(default=5432, description="Server port")
    user: str = Field(default="postgres", description="Login role")
    password: str = Field(default="postgres", description="Login password")
    db: str = Field(default="homelabrag", description="Database holding documents and chunks")

    pool_size: int = Field(default=10, description="Persistent connections kept by the engine")
    max_overflow: int = Field(default=20, description="Extra connections allowed under load")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a free connection")
    echo_sql: bool = Field(default=False, description="Log every SQL statement")

    sslmode: str = Field(default="disable", description="'require' to force TLS")

    @property
    def async_database_url(self) -> str:
        """
        SQLAlchemy URL for the asyncpg driver.

        asyncpg takes TLS as an `ssl` query parameter instead of libpq's
        `sslmode`.

        Returns:
            str: postgresql+asyncpg URL
        """
        query = "?ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{query}"
        )
