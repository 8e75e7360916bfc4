"""Account repository for database operations.

This module implements the record store for accounts, focusing solely on
data access without caching logic. For cached point reads, use the
CachedAccountRepository decorator.
"""

import asyncio
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from account_store.domain.exceptions import DuplicateIdentityError, StoreError
from account_store.domain.interfaces import IAccountRepository
from account_store.domain.models.account import Account
from account_store.infrastructure.logging.config import get_logger
from account_store.infrastructure.persistence.database import Database
from account_store.infrastructure.persistence.query_builder import AccountQueryBuilder


logger = get_logger(__name__)


def _to_account(row: Mapping[str, Any]) -> Account:
    """Materialize a detached Account from a row of public columns."""
    return Account(**dict(row))


class AccountRepository(IAccountRepository):
    """Record store for accounts.

    Each method runs a single statement on its own pooled connection and
    commits immediately; no multi-statement transactions are opened. Every
    call is bounded by a timeout, and driver failures are translated into
    domain exceptions:

    - uniqueness violations become ``DuplicateIdentityError``
    - timeouts, other database errors and parameters the driver cannot bind
      (e.g. an offset past the integer range) become ``StoreError``

    Returned accounts are detached from any ORM session and never carry the
    stored credential hash.
    """

    def __init__(
        self,
        database: Database,
        query_builder: AccountQueryBuilder | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize account repository.

        Args:
            database: Database manager providing pooled connections
            query_builder: Statement builder (default AccountQueryBuilder)
            timeout: Default per-call timeout in seconds (default from settings)
        """
        self._database = database
        self._queries = query_builder or AccountQueryBuilder()
        self._timeout = timeout if timeout is not None else database.settings.database_statement_timeout

    @asynccontextmanager
    async def _unit_of_work(self, operation: str, timeout: float | None) -> AsyncGenerator[AsyncConnection]:
        """Borrow a connection for one statement under a time budget."""
        budget = timeout if timeout is not None else self._timeout
        try:
            async with asyncio.timeout(budget), self._database.connection() as conn:
                yield conn
        except IntegrityError as e:
            logger.info("account_uniqueness_violation", operation=operation)
            raise DuplicateIdentityError(
                "An active account with this username or email already exists"
            ) from e
        except TimeoutError as e:
            logger.error("account_store_timeout", operation=operation, timeout=budget)
            raise StoreError(
                f"Account store timed out during {operation}",
                details={"operation": operation, "timeout": budget},
            ) from e
        except (SQLAlchemyError, ValueError, OverflowError) as e:
            logger.error("account_store_error", operation=operation, error=str(e))
            raise StoreError(
                f"Account store failed during {operation}",
                details={"operation": operation},
            ) from e

    async def get_all(
        self,
        skip: int = 0,
        limit: int | None = None,
        timeout: float | None = None,
    ) -> list[Account]:
        """Retrieve active accounts with offset pagination.

        Args:
            skip: Number of records to skip (offset)
            limit: Maximum records to return (None for all)
            timeout: Optional per-call timeout in seconds

        Returns:
            List of active accounts in creation order
        """
        async with self._unit_of_work("list", timeout) as conn:
            result = await conn.execute(self._queries.select_active(offset=skip, limit=limit))
            rows = result.mappings().all()
        return [_to_account(row) for row in rows]

    async def get_by_id(self, id: UUID, timeout: float | None = None) -> Account | None:
        """Retrieve an active account by identifier.

        Args:
            id: Account identifier
            timeout: Optional per-call timeout in seconds

        Returns:
            Account if found and active, None otherwise
        """
        async with self._unit_of_work("get", timeout) as conn:
            result = await conn.execute(self._queries.select_by_id(id))
            row = result.mappings().one_or_none()
        return _to_account(row) if row is not None else None

    async def find_identity_conflict(
        self,
        username: str,
        email: str,
        exclude_id: UUID | None = None,
        timeout: float | None = None,
    ) -> UUID | None:
        """Look up an active account already using ``username`` or ``email``.

        Args:
            username: Username to check
            email: Email to check
            exclude_id: Identifier of the account being updated, if any
            timeout: Optional per-call timeout in seconds

        Returns:
            Conflicting account identifier, or None
        """
        stmt = self._queries.select_identity_conflict(username, email, exclude_id)
        async with self._unit_of_work("identity_check", timeout) as conn:
            result = await conn.execute(stmt)
            return result.scalar_one_or_none()

    async def create(self, values: Mapping[str, Any], timeout: float | None = None) -> Account:
        """Insert a new account.

        Args:
            values: Column values including the hashed credential
            timeout: Optional per-call timeout in seconds

        Returns:
            Created account with identifier and timestamps populated
        """
        async with self._unit_of_work("create", timeout) as conn:
            result = await conn.execute(self._queries.insert(values))
            row = result.mappings().one()
        return _to_account(row)

    async def update(
        self,
        id: UUID,
        values: Mapping[str, Any],
        timeout: float | None = None,
    ) -> Account | None:
        """Update mutable fields of an active account.

        Args:
            id: Account identifier
            values: Replacement values for username, email and display fields
            timeout: Optional per-call timeout in seconds

        Returns:
            Refreshed account, or None when no active row matched
        """
        async with self._unit_of_work("update", timeout) as conn:
            result = await conn.execute(self._queries.update_active(id, values))
            row = result.mappings().one_or_none()
        return _to_account(row) if row is not None else None

    async def delete(self, id: UUID, timeout: float | None = None) -> bool:
        """Soft delete an account by setting its deleted_at timestamp.

        Args:
            id: Account identifier
            timeout: Optional per-call timeout in seconds

        Returns:
            True if soft-deleted, False if no active row matched
        """
        async with self._unit_of_work("delete", timeout) as conn:
            result = await conn.execute(self._queries.soft_delete(id))
            return result.rowcount > 0
