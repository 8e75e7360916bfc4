"""Repository implementations."""

from account_store.infrastructure.repositories.account_repository import AccountRepository
from account_store.infrastructure.repositories.cached_account_repository import (
    CachedAccountRepository,
)


__all__ = ["AccountRepository", "CachedAccountRepository"]
