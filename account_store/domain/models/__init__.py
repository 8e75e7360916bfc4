"""Domain models."""

from account_store.domain.models.account import Account
from account_store.domain.models.base import Base


__all__ = ["Account", "Base"]
