"""Account service facade.

``AccountService`` is the single entry point for callers (an HTTP layer, a
CLI, tests). It delegates to the use cases, where all rules live, and binds
the operation name to the log context for the duration of each call.
"""

from typing import Any
from uuid import UUID

from account_store.app.usecases.account_usecases import (
    CreateAccountUseCase,
    DeleteAccountUseCase,
    GetAccountUseCase,
    ListAccountsUseCase,
    Payload,
    UpdateAccountUseCase,
)
from account_store.domain.models.account import Account
from account_store.infrastructure.logging.config import account_operation


class AccountService:
    """Entity service exposing list/get/create/update/delete for accounts.

    Every operation raises only ``DomainException`` subclasses, tagged with
    an ``ErrorKind``:

    - ``VALIDATION`` for malformed identifiers or payloads
    - ``DUPLICATE_IDENTITY`` when username or email is taken
    - ``NOT_FOUND`` when no active account matches
    - ``INTERNAL`` when the store fails or times out

    Example:
        ```python
        service = container.account_service()
        account = await service.create({"username": "alice", "email": "alice@example.com",
                                        "password": "s3cret-pass"})
        same = await service.get_by_id(str(account.id))
        ```
    """

    def __init__(
        self,
        list_accounts: ListAccountsUseCase,
        get_account: GetAccountUseCase,
        create_account: CreateAccountUseCase,
        update_account: UpdateAccountUseCase,
        delete_account: DeleteAccountUseCase,
    ) -> None:
        self._list = list_accounts
        self._get = get_account
        self._create = create_account
        self._update = update_account
        self._delete = delete_account

    async def list(self, page: Any = None, page_size: Any = None, timeout: float | None = None) -> list[Account]:
        """Return one page of active accounts (page 1, size 10 by default)."""
        with account_operation("list"):
            return await self._list.execute(page, page_size, timeout=timeout)

    async def get_by_id(self, account_id: str | UUID, timeout: float | None = None) -> Account:
        """Return the active account with this identifier."""
        with account_operation("get", account_id):
            return await self._get.execute(account_id, timeout=timeout)

    async def create(self, data: Payload, timeout: float | None = None) -> Account:
        """Create an account and return it without its credential."""
        with account_operation("create"):
            return await self._create.execute(data, timeout=timeout)

    async def update(self, account_id: str | UUID, data: Payload, timeout: float | None = None) -> Account:
        """Replace username, email and display fields of an active account."""
        with account_operation("update", account_id):
            return await self._update.execute(account_id, data, timeout=timeout)

    async def delete(self, account_id: str | UUID, timeout: float | None = None) -> None:
        """Soft delete an active account."""
        with account_operation("delete", account_id):
            await self._delete.execute(account_id, timeout=timeout)
