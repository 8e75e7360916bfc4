"""Application use cases."""

from account_store.app.usecases.account_usecases import (
    CreateAccountUseCase,
    DeleteAccountUseCase,
    GetAccountUseCase,
    ListAccountsUseCase,
    UpdateAccountUseCase,
    parse_account_id,
)


__all__ = [
    "CreateAccountUseCase",
    "DeleteAccountUseCase",
    "GetAccountUseCase",
    "ListAccountsUseCase",
    "UpdateAccountUseCase",
    "parse_account_id",
]
