"""Account use cases implementing business logic."""

import asyncio
from collections.abc import Mapping
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from account_store.app.schemas import AccountCreate, AccountUpdate
from account_store.domain.exceptions import (
    DuplicateIdentityError,
    EntityNotFoundError,
    InvalidIdentifierError,
    ValidationError,
)
from account_store.domain.interfaces import IAccountRepository, ICredentialHasher
from account_store.domain.models.account import Account
from account_store.domain.pagination import PageRequest
from account_store.infrastructure.logging.config import get_logger


logger = get_logger(__name__)

Payload = BaseModel | Mapping[str, Any]

S = TypeVar("S", bound=BaseModel)


def parse_account_id(account_id: str | UUID) -> UUID:
    """Parse an account identifier from caller input.

    Raises:
        InvalidIdentifierError: If the value is not a valid UUID
    """
    if isinstance(account_id, UUID):
        return account_id
    try:
        return UUID(str(account_id).strip())
    except (TypeError, ValueError) as e:
        raise InvalidIdentifierError(
            f"Invalid account identifier: {account_id!r}",
            details={"field": "id"},
        ) from e


def _validate(schema: type[S], data: Payload) -> S:
    """Validate a payload into ``schema``, raising the domain ValidationError."""
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError("Invalid account payload", details=details) from e


def _not_found(account_id: UUID) -> EntityNotFoundError:
    return EntityNotFoundError(f"Account with ID {account_id} not found")


class ListAccountsUseCase:
    """Use case for listing active accounts with offset pagination."""

    def __init__(self, account_repository: IAccountRepository) -> None:
        self._repository = account_repository

    async def execute(
        self,
        page: Any = None,
        page_size: Any = None,
        timeout: float | None = None,
    ) -> list[Account]:
        """Execute the use case.

        Invalid page parameters fall back to the defaults (page 1, size 10)
        rather than failing.

        Args:
            page: 1-based page number
            page_size: Number of accounts per page
            timeout: Optional per-call timeout in seconds

        Returns:
            Active accounts on the requested page, possibly empty
        """
        request = PageRequest.from_params(page, page_size)
        return await self._repository.get_all(skip=request.offset, limit=request.limit, timeout=timeout)


class GetAccountUseCase:
    """Use case for getting an account by ID."""

    def __init__(self, account_repository: IAccountRepository) -> None:
        self._repository = account_repository

    async def execute(self, account_id: str | UUID, timeout: float | None = None) -> Account:
        """Execute the use case.

        Args:
            account_id: The ID of the account to retrieve
            timeout: Optional per-call timeout in seconds

        Returns:
            The account entity

        Raises:
            InvalidIdentifierError: If the ID is malformed
            EntityNotFoundError: If no active account has this ID
        """
        id = parse_account_id(account_id)
        account = await self._repository.get_by_id(id, timeout=timeout)
        if account is None:
            raise _not_found(id)
        return account


class CreateAccountUseCase:
    """Use case for creating a new account.

    Username and email are checked against active accounts before anything
    is written; the partial unique indexes catch whatever races past the
    check.
    """

    def __init__(self, account_repository: IAccountRepository, hasher: ICredentialHasher) -> None:
        self._repository = account_repository
        self._hasher = hasher

    async def execute(self, data: Payload, timeout: float | None = None) -> Account:
        """Execute the use case.

        Args:
            data: AccountCreate payload or a mapping to validate into one
            timeout: Optional per-call timeout in seconds

        Returns:
            The created account (credential not included)

        Raises:
            ValidationError: If the payload is invalid
            DuplicateIdentityError: If username or email is already in use
        """
        payload = _validate(AccountCreate, data)

        conflict = await self._repository.find_identity_conflict(
            payload.username, payload.email, timeout=timeout
        )
        if conflict is not None:
            raise DuplicateIdentityError(
                "An active account with this username or email already exists",
                details={"username": payload.username, "email": payload.email},
            )

        password_hash = await asyncio.to_thread(self._hasher.hash, payload.password)
        values = payload.model_dump(exclude={"password"})
        values["password_hash"] = password_hash

        account = await self._repository.create(values, timeout=timeout)
        logger.info("account_created", account_id=str(account.id), username=account.username)
        return account


class UpdateAccountUseCase:
    """Use case for replacing an account's identity and display fields."""

    def __init__(self, account_repository: IAccountRepository) -> None:
        self._repository = account_repository

    async def execute(
        self,
        account_id: str | UUID,
        data: Payload,
        timeout: float | None = None,
    ) -> Account:
        """Execute the use case.

        Args:
            account_id: ID of the account to update
            data: AccountUpdate payload or a mapping to validate into one
            timeout: Optional per-call timeout in seconds

        Returns:
            The updated account entity

        Raises:
            InvalidIdentifierError: If the ID is malformed
            ValidationError: If the payload is invalid
            DuplicateIdentityError: If username or email belongs to another active account
            EntityNotFoundError: If no active account has this ID
        """
        id = parse_account_id(account_id)
        payload = _validate(AccountUpdate, data)

        conflict = await self._repository.find_identity_conflict(
            payload.username, payload.email, exclude_id=id, timeout=timeout
        )
        if conflict is not None:
            raise DuplicateIdentityError(
                "Another active account already uses this username or email",
                details={"username": payload.username, "email": payload.email},
            )

        account = await self._repository.update(id, payload.model_dump(), timeout=timeout)
        if account is None:
            raise _not_found(id)

        logger.info("account_updated", account_id=str(id))
        return account


class DeleteAccountUseCase:
    """Use case for soft deleting an account.

    This performs a soft delete by setting the deleted_at timestamp. The
    account disappears from every read, and its username and email become
    available again.
    """

    def __init__(self, account_repository: IAccountRepository) -> None:
        self._repository = account_repository

    async def execute(self, account_id: str | UUID, timeout: float | None = None) -> None:
        """Execute the soft delete use case.

        Args:
            account_id: ID of the account to soft delete
            timeout: Optional per-call timeout in seconds

        Raises:
            InvalidIdentifierError: If the ID is malformed
            EntityNotFoundError: If the account is missing or already deleted
        """
        id = parse_account_id(account_id)
        if not await self._repository.delete(id, timeout=timeout):
            raise _not_found(id)
        logger.info("account_soft_deleted", account_id=str(id))
