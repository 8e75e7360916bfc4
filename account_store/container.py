"""Dependency injection container configuration."""

from dependency_injector import containers, providers

from account_store.app.service import AccountService
from account_store.app.usecases.account_usecases import (
    CreateAccountUseCase,
    DeleteAccountUseCase,
    GetAccountUseCase,
    ListAccountsUseCase,
    UpdateAccountUseCase,
)
from account_store.domain.interfaces import IAccountRepository
from account_store.infrastructure.cache.memory_cache import MemoryCache
from account_store.infrastructure.config import Settings, get_settings
from account_store.infrastructure.logging.config import configure_logging
from account_store.infrastructure.persistence.database import Database
from account_store.infrastructure.persistence.query_builder import AccountQueryBuilder
from account_store.infrastructure.repositories.account_repository import AccountRepository
from account_store.infrastructure.repositories.cached_account_repository import (
    CachedAccountRepository,
)
from account_store.infrastructure.security.credentials import CredentialHasher


def repository_mode(settings: Settings) -> str:
    """Select which repository backs the service."""
    return "cached" if settings.cache_enabled else "direct"


class UseCases(containers.DeclarativeContainer):
    """Use cases container for better organization."""

    account_repository: providers.Dependency[IAccountRepository] = providers.Dependency()
    hasher: providers.Dependency[CredentialHasher] = providers.Dependency()

    list_accounts = providers.Factory(ListAccountsUseCase, account_repository=account_repository)
    get_account = providers.Factory(GetAccountUseCase, account_repository=account_repository)
    create_account = providers.Factory(
        CreateAccountUseCase,
        account_repository=account_repository,
        hasher=hasher,
    )
    update_account = providers.Factory(UpdateAccountUseCase, account_repository=account_repository)
    delete_account = providers.Factory(DeleteAccountUseCase, account_repository=account_repository)


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Use ``create_container`` to build one with logging configured and,
    optionally, explicit settings instead of the environment.
    """

    # Configuration
    config = providers.Singleton(get_settings)

    # Infrastructure
    database = providers.Singleton(Database, settings=config)
    cache = providers.Singleton(MemoryCache, settings=config)
    query_builder = providers.Singleton(AccountQueryBuilder)
    hasher = providers.Singleton(CredentialHasher, rounds=config.provided.password_hash_rounds)

    # Repositories - using Decorator Pattern for caching
    # Base repository (pure DB operations)
    account_repository_base = providers.Singleton(
        AccountRepository,
        database=database,
        query_builder=query_builder,
    )

    # Cached repository (decorates base with caching)
    account_repository_cached = providers.Singleton(
        CachedAccountRepository,
        repository=account_repository_base,
        cache=cache,
        default_ttl=config.provided.cache_ttl,
    )

    # Selector for repository based on cache_enabled setting
    # - CACHE_ENABLED=true  → CachedAccountRepository (cache-aside reads)
    # - CACHE_ENABLED=false → AccountRepository (every read hits the store)
    account_repository = providers.Selector(
        providers.Callable(repository_mode, config),
        cached=account_repository_cached,
        direct=account_repository_base,
    )

    # Use Cases (nested container)
    use_cases = providers.Container(
        UseCases,
        account_repository=account_repository,
        hasher=hasher,
    )

    account_service = providers.Singleton(
        AccountService,
        list_accounts=use_cases.list_accounts,
        get_account=use_cases.get_account,
        create_account=use_cases.create_account,
        update_account=use_cases.update_account,
        delete_account=use_cases.delete_account,
    )


def create_container(settings: Settings | None = None) -> Container:
    """Build a container with logging configured for ``settings``.

    Args:
        settings: Settings to use instead of the environment (e.g. in tests)

    Returns:
        Ready-to-use container
    """
    container = Container()
    if settings is not None:
        container.config.override(providers.Object(settings))
    configure_logging(container.config())
    return container
