"""Cached account repository implementing the cache-aside read path.

This module wraps the account record store with a read cache keyed by
account identifier. Point reads consult the cache first; writes go to the
store and then populate or invalidate the cached entry.
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from account_store.app.schemas import AccountRead
from account_store.domain.interfaces import IAccountRepository, ICache
from account_store.domain.models.account import Account
from account_store.infrastructure.constants import CacheDefaults
from account_store.infrastructure.logging.config import get_logger


logger = get_logger(__name__)


class CachedAccountRepository(IAccountRepository):
    """Cache-aside decorator over an account repository.

    Design Pattern: Decorator Pattern
    - Wraps any IAccountRepository implementation
    - Adds caching behavior transparently
    - Delegates all database operations to wrapped repository

    Cache Strategy:
    - get_by_id: Try cache first, fall back to DB, then populate cache
    - create: Populates cache after creation
    - update: Invalidates the entry after the store call
    - delete: Invalidates the entry after the store call
    - TTL: 5 minutes (300 seconds) for cached entries

    Not Cached:
    - get_all: List operations (any write would invalidate every page)
    - find_identity_conflict: Uniqueness checks must see the store

    Cached values are public snapshots (``AccountRead`` dumps), so the
    credential is never cached and callers always receive a fresh Account.
    Cache failures are logged and never fail the operation.

    Example:
        ```python
        base_repo = AccountRepository(database)
        cache = MemoryCache(settings)
        cached_repo = CachedAccountRepository(base_repo, cache)

        # Uses cache
        account = await cached_repo.get_by_id(account_id)

        # Invalidates cache
        await cached_repo.update(account_id, {"username": "alice", "email": "a@example.com"})
        ```
    """

    def __init__(
        self,
        repository: IAccountRepository,
        cache: ICache,
        default_ttl: int = CacheDefaults.DEFAULT_TTL,
    ) -> None:
        """Initialize cached account repository.

        Args:
            repository: Account record store to wrap
            cache: Cache instance owned by this repository
            default_ttl: TTL in seconds for cached entries (default: 300s = 5 min)
        """
        self._repository = repository
        self._cache = cache
        self._default_ttl = default_ttl

    @staticmethod
    def _cache_key(id: UUID) -> str:
        """Generate cache key for account by ID.

        Args:
            id: Account identifier

        Returns:
            Cache key in format "account:{id}"
        """
        return f"{CacheDefaults.KEY_PREFIX}:{id}"

    async def _remember(self, account: Account) -> None:
        snapshot = AccountRead.model_validate(account).model_dump()
        try:
            await self._cache.set(self._cache_key(account.id), snapshot, ttl=self._default_ttl)
        except Exception as e:
            logger.warning("cache_set_failed", account_id=str(account.id), error=str(e))

    async def _forget(self, id: UUID) -> None:
        try:
            await self._cache.delete(self._cache_key(id))
        except Exception as e:
            logger.warning("cache_delete_failed", account_id=str(id), error=str(e))

    async def get_by_id(self, id: UUID, timeout: float | None = None) -> Account | None:
        """Get account by ID with caching.

        Cache-aside pattern:
        1. Check cache first
        2. If miss, fetch from database via wrapped repository
        3. Store result in cache with TTL

        Args:
            id: Account identifier
            timeout: Optional per-call timeout for the store read

        Returns:
            Account if found, None otherwise
        """
        try:
            cached = await self._cache.get(self._cache_key(id))
        except Exception as e:
            logger.warning("cache_get_failed", account_id=str(id), error=str(e))
            cached = None
        if cached:
            return Account(**cached)

        account = await self._repository.get_by_id(id, timeout=timeout)
        if account is not None:
            await self._remember(account)
        return account

    async def create(self, values: Mapping[str, Any], timeout: float | None = None) -> Account:
        """Create account and populate cache.

        Args:
            values: Column values for the new account
            timeout: Optional per-call timeout in seconds

        Returns:
            Created account with generated ID and timestamps
        """
        created = await self._repository.create(values, timeout=timeout)
        await self._remember(created)
        return created

    async def update(
        self,
        id: UUID,
        values: Mapping[str, Any],
        timeout: float | None = None,
    ) -> Account | None:
        """Update account and invalidate its cache entry.

        The entry is dropped even when no row matched, so a stale copy of
        an account deleted elsewhere does not outlive this call.

        Args:
            id: Account identifier
            values: Replacement values for mutable fields
            timeout: Optional per-call timeout in seconds

        Returns:
            Updated account, or None when no active row matched
        """
        updated = await self._repository.update(id, values, timeout=timeout)
        await self._forget(id)
        return updated

    async def delete(self, id: UUID, timeout: float | None = None) -> bool:
        """Soft delete account and invalidate cache.

        Args:
            id: Account identifier
            timeout: Optional per-call timeout in seconds

        Returns:
            True if deleted, False if not found
        """
        deleted = await self._repository.delete(id, timeout=timeout)
        await self._forget(id)
        return deleted

    # Pass-through methods (never cached)

    async def get_all(
        self,
        skip: int = 0,
        limit: int | None = None,
        timeout: float | None = None,
    ) -> list[Account]:
        """Get active accounts with pagination (not cached)."""
        return await self._repository.get_all(skip=skip, limit=limit, timeout=timeout)

    async def find_identity_conflict(
        self,
        username: str,
        email: str,
        exclude_id: UUID | None = None,
        timeout: float | None = None,
    ) -> UUID | None:
        """Check username/email uniqueness against the store (not cached)."""
        return await self._repository.find_identity_conflict(
            username, email, exclude_id=exclude_id, timeout=timeout
        )
