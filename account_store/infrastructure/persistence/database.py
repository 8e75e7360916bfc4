"""Database connection management.

This module provides async SQLAlchemy database connectivity with connection
pooling, per-statement connection lifecycle management and schema bootstrap.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from account_store.domain.models.base import Base
from account_store.infrastructure.config import Settings
from account_store.infrastructure.logging.config import get_logger


logger = get_logger(__name__)


class Database:
    """Database connection manager with async SQLAlchemy support.

    Handles database engine creation and connection pooling, and lends out
    connections that run exactly one unit of work each.

    Connection Pool Configuration:
        - pool_size: Base number of persistent connections
        - max_overflow: Additional connections during traffic spikes
        - pool_pre_ping: Validates connections before use (prevents stale connections)

    SQLite URLs (used for tests and local runs) skip the pool sizing options,
    which SQLite's pool classes do not accept.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize database manager with application settings.

        Args:
            settings: Application configuration containing database connection details
        """
        self.settings = settings
        self._engine: AsyncEngine | None = None

    def get_engine(self) -> AsyncEngine:
        """Get or create the database engine (singleton pattern).

        Lazily initializes the engine on first access with configured
        connection pool settings.

        Returns:
            Async SQLAlchemy engine instance
        """
        if self._engine is None:
            options: dict[str, Any] = {"echo": self.settings.database_echo}
            if make_url(self.settings.database_url).get_backend_name() != "sqlite":
                options.update(
                    pool_size=self.settings.database_pool_size,
                    max_overflow=self.settings.database_max_overflow,
                    pool_pre_ping=True,
                )
            self._engine = create_async_engine(self.settings.database_url, **options)
        return self._engine

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[AsyncConnection]:
        """Provide a pooled connection wrapped in a single short transaction.

        Usage:
            async with database.connection() as conn:
                result = await conn.execute(statement)
                # Commit on success, rollback on exception

        Yields:
            Active database connection
        """
        async with self.get_engine().begin() as conn:
            yield conn

    async def create_schema(self) -> None:
        """Create all tables and indexes declared on the model metadata."""
        async with self.connection() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_schema_created")

    async def close(self) -> None:
        """Close all database connections and dispose of the engine.

        Should be called during application shutdown to ensure clean
        resource cleanup and prevent connection leaks.
        """
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None

