"""Tests for AccountRepository failure mapping.

A stub database lends out a mocked connection so timeouts and driver
errors can be injected without a real engine.

Test Organization:
- TestTimeouts: Per-call and default time budgets
- TestErrorMapping: Driver errors become domain errors
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from uuid_extension import uuid7

from account_store.domain.exceptions import DuplicateIdentityError, EntityNotFoundError, StoreError
from account_store.infrastructure.repositories.account_repository import AccountRepository
from tests.factories import make_settings


class StubDatabase:
    """Database stand-in yielding a mocked connection."""

    def __init__(self, settings: Any, conn: AsyncMock, delay: float = 0.0) -> None:
        self.settings = settings
        self.conn = conn
        self.delay = delay

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[AsyncMock]:
        if self.delay:
            await asyncio.sleep(self.delay)
        yield self.conn


@pytest.fixture
def conn() -> AsyncMock:
    conn = AsyncMock()
    result = MagicMock()
    result.mappings.return_value.all.return_value = []
    result.mappings.return_value.one_or_none.return_value = None
    conn.execute = AsyncMock(return_value=result)
    return conn


class TestTimeouts:
    """Test time budgets."""

    async def test_slow_store_raises_store_error(self, tmp_path: Path, conn: AsyncMock) -> None:
        """Test exceeding the per-call timeout is a store failure, not not-found.

        Arrange: Store that takes longer than the budget
        Act: Read an account with a short timeout
        Assert: StoreError raised
        """
        # Arrange
        repo = AccountRepository(StubDatabase(make_settings(tmp_path), conn, delay=1.0))

        # Act / Assert
        with pytest.raises(StoreError) as exc_info:
            await repo.get_by_id(uuid7(), timeout=0.01)

        assert not isinstance(exc_info.value, EntityNotFoundError)
        assert exc_info.value.details == {"operation": "get", "timeout": 0.01}

    async def test_default_timeout_from_settings(self, tmp_path: Path, conn: AsyncMock) -> None:
        """Test the configured statement timeout applies when none is given."""
        settings = make_settings(tmp_path, database_statement_timeout=0.01)
        repo = AccountRepository(StubDatabase(settings, conn, delay=1.0))

        with pytest.raises(StoreError):
            await repo.get_all()

    async def test_fast_store_returns_normally(self, tmp_path: Path, conn: AsyncMock) -> None:
        """Test calls within budget succeed."""
        repo = AccountRepository(StubDatabase(make_settings(tmp_path), conn))

        assert await repo.get_by_id(uuid7()) is None
        assert await repo.get_all(skip=0, limit=10) == []


class TestErrorMapping:
    """Test driver errors become domain errors."""

    async def test_integrity_error_is_duplicate_identity(self, tmp_path: Path, conn: AsyncMock) -> None:
        """Test a unique index violation maps to DuplicateIdentityError."""
        conn.execute.side_effect = IntegrityError("INSERT", {}, Exception("unique"))
        repo = AccountRepository(StubDatabase(make_settings(tmp_path), conn))

        with pytest.raises(DuplicateIdentityError):
            await repo.create({"username": "alice", "email": "a@example.com", "password_hash": "h"})

    async def test_operational_error_is_store_error(self, tmp_path: Path, conn: AsyncMock) -> None:
        """Test connectivity failures map to StoreError."""
        conn.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        repo = AccountRepository(StubDatabase(make_settings(tmp_path), conn))

        with pytest.raises(StoreError):
            await repo.find_identity_conflict("alice", "a@example.com")

    async def test_bad_statement_is_store_error(self, tmp_path: Path, conn: AsyncMock) -> None:
        """Test query construction failures map to StoreError."""
        repo = AccountRepository(StubDatabase(make_settings(tmp_path), conn))

        with pytest.raises(StoreError):
            await repo.update(uuid7(), {"password_hash": "x"})

        conn.execute.assert_not_called()

    async def test_driver_overflow_is_store_error(self, tmp_path: Path, conn: AsyncMock) -> None:
        """Test parameters the driver cannot bind map to StoreError."""
        conn.execute.side_effect = OverflowError("Python int too large to convert to SQLite INTEGER")
        repo = AccountRepository(StubDatabase(make_settings(tmp_path), conn))

        with pytest.raises(StoreError) as exc_info:
            await repo.get_all(skip=10**20, limit=10)

        assert exc_info.value.details == {"operation": "list"}
