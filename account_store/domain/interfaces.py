"""Repository and collaborator interfaces defining data access contracts.

This module defines abstract interfaces for the account record store, the
read cache and the credential transform, establishing the contract between
the application and infrastructure layers. These interfaces enable
dependency inversion and facilitate testing with mock implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from account_store.domain.models.account import Account


class IAccountRepository(ABC):
    """Account repository contract with soft delete semantics.

    Every method targets active (non-deleted) records only and issues a
    single statement against the store. ``timeout`` overrides the default
    per-call time budget in seconds.
    """

    @abstractmethod
    async def get_all(
        self,
        skip: int = 0,
        limit: int | None = None,
        timeout: float | None = None,
    ) -> list[Account]:
        """Retrieve active accounts in store order.

        Args:
            skip: Number of records to skip (offset for pagination)
            limit: Maximum number of records to return (None for all)
            timeout: Optional per-call timeout in seconds

        Returns:
            List of accounts with credential cleared
        """

    @abstractmethod
    async def get_by_id(self, id: UUID, timeout: float | None = None) -> Account | None:
        """Retrieve an active account by its identifier.

        Args:
            id: Account identifier
            timeout: Optional per-call timeout in seconds

        Returns:
            Account if an active record matches, None otherwise
        """

    @abstractmethod
    async def find_identity_conflict(
        self,
        username: str,
        email: str,
        exclude_id: UUID | None = None,
        timeout: float | None = None,
    ) -> UUID | None:
        """Find an active account already holding the username or email.

        Args:
            username: Candidate username (exact match)
            email: Candidate email (exact match)
            exclude_id: Identifier to ignore (the account being updated)
            timeout: Optional per-call timeout in seconds

        Returns:
            Identifier of a conflicting account, or None
        """

    @abstractmethod
    async def create(self, values: Mapping[str, Any], timeout: float | None = None) -> Account:
        """Insert a new account row.

        Args:
            values: Column values (identifier and timestamps are assigned by the store)
            timeout: Optional per-call timeout in seconds

        Returns:
            Created account with generated fields populated
        """

    @abstractmethod
    async def update(
        self,
        id: UUID,
        values: Mapping[str, Any],
        timeout: float | None = None,
    ) -> Account | None:
        """Update the mutable fields of an active account.

        Args:
            id: Account identifier
            values: Replacement values for mutable fields
            timeout: Optional per-call timeout in seconds

        Returns:
            Refreshed account, or None when zero rows were affected
        """

    @abstractmethod
    async def delete(self, id: UUID, timeout: float | None = None) -> bool:
        """Mark an active account as deleted (soft delete).

        Args:
            id: Account identifier
            timeout: Optional per-call timeout in seconds

        Returns:
            True if a row was soft-deleted, False if nothing matched
        """


class ICache(ABC):
    """Key-value cache with per-entry time-to-live."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None on miss or expiry."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value; returns True if it was cached."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key; returns True if it was present."""


class ICredentialHasher(ABC):
    """One-way credential transform."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return the hashed form of ``password``."""
