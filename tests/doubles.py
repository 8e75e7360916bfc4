"""Test doubles shared by unit and integration tests."""

from collections import Counter
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from account_store.domain.interfaces import IAccountRepository
from account_store.domain.models.account import Account


class StoreSpy(IAccountRepository):
    """Record store wrapper counting calls per operation.

    Wraps the real repository so tests can assert whether an operation
    reached the store (e.g. a cache hit must not).
    """

    def __init__(self, repository: IAccountRepository) -> None:
        self._repository = repository
        self.calls: Counter[str] = Counter()

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def reset(self) -> None:
        self.calls.clear()

    async def get_all(self, skip: int = 0, limit: int | None = None, timeout: float | None = None) -> list[Account]:
        self.calls["get_all"] += 1
        return await self._repository.get_all(skip=skip, limit=limit, timeout=timeout)

    async def get_by_id(self, id: UUID, timeout: float | None = None) -> Account | None:
        self.calls["get_by_id"] += 1
        return await self._repository.get_by_id(id, timeout=timeout)

    async def find_identity_conflict(
        self,
        username: str,
        email: str,
        exclude_id: UUID | None = None,
        timeout: float | None = None,
    ) -> UUID | None:
        self.calls["find_identity_conflict"] += 1
        return await self._repository.find_identity_conflict(
            username, email, exclude_id=exclude_id, timeout=timeout
        )

    async def create(self, values: Mapping[str, Any], timeout: float | None = None) -> Account:
        self.calls["create"] += 1
        return await self._repository.create(values, timeout=timeout)

    async def update(self, id: UUID, values: Mapping[str, Any], timeout: float | None = None) -> Account | None:
        self.calls["update"] += 1
        return await self._repository.update(id, values, timeout=timeout)

    async def delete(self, id: UUID, timeout: float | None = None) -> bool:
        self.calls["delete"] += 1
        return await self._repository.delete(id, timeout=timeout)
