"""
Engine, sessions and schema bootstrap for PostgreSQL.

Provides the async SQLAlchemy engine, session factory, and schema setup
for the pgvector store.

Dependencies: sqlalchemy, pgvector, homelab_rag.configs
System role: Connection lifecycle for the pgvector store
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker

from homelab_rag.boundary.db.base import Base
from homelab_rag.boundary.db import models  # noqa: F401
from homelab_rag.configs.database import DatabaseSettings

logger = logging.getLogger(__name__)


def get_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Build the pooled asyncpg engine.

    pool_pre_ping=True verifies connections before use to detect stale/broken
    connections early. Vectors travel in pgvector text form, which asyncpg
    passes through for extension types.

    Args:
        db_config: PostgreSQL settings

    Returns:
        AsyncEngine: Engine for PgVectorStore
    """
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Session factory used by PgVectorStore transactions.

    autoflush=False for explicit transaction control;
    expire_on_commit=False so rows stay readable after commit.

    Args:
        engine: Async engine to bind

    Returns:
        async_sessionmaker: Async session factory
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Enable the vector extension and create all tables if missing.

    Args:
        engine: Async engine connected to PostgreSQL
    """
    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_tables - Schema ready")
