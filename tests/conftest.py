"""Global test configuration and fixtures.

Fixture Scoping Strategy:
- function: everything. Each test gets its own SQLite file, container,
  cache and store spy, so no state leaks between tests.

Unit tests use AsyncMock collaborators (``mock_repository``, ``mock_cache``).
Integration tests run the real service against a temporary
``sqlite+aiosqlite`` database built from the model metadata.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from dependency_injector import providers

from account_store.app.service import AccountService
from account_store.container import Container, create_container
from account_store.domain.interfaces import IAccountRepository
from account_store.infrastructure.config import Settings
from account_store.infrastructure.persistence.database import Database

from tests.doubles import StoreSpy

# Import test factories for use in tests
from tests.factories import account_factory, account_payload, make_settings  # noqa: F401 - Imported for test use


# ============================================================================
# Settings
# ============================================================================


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings with caching enabled.

    Returns:
        Settings instance configured for testing
    """
    return make_settings(tmp_path)


# ============================================================================
# Integration fixtures (real SQLite database)
# ============================================================================


async def _build_container(settings: Settings) -> tuple[Container, StoreSpy]:
    container = create_container(settings)
    await container.database().create_schema()
    spy = StoreSpy(container.account_repository_base())
    container.account_repository_base.override(providers.Object(spy))
    return container, spy


@pytest.fixture
async def container(test_settings: Settings) -> AsyncGenerator[Container]:
    """Create a container wired to a fresh SQLite database.

    The base repository is replaced by a ``StoreSpy`` around the real one;
    use the ``store_spy`` fixture to inspect it.

    Yields:
        Container with schema created
    """
    container, _ = await _build_container(test_settings)
    yield container
    await container.database().close()


@pytest.fixture
def store_spy(container: Container) -> StoreSpy:
    """Return the spy wrapping the record store of ``container``."""
    return container.account_repository_base()


@pytest.fixture
def database(container: Container) -> Database:
    """Return the database manager of ``container`` (schema already created)."""
    return container.database()


@pytest.fixture
def service(container: Container) -> AccountService:
    """Create the account service with the cache-aside repository."""
    return container.account_service()


@pytest.fixture
async def uncached_container(tmp_path: Path) -> AsyncGenerator[Container]:
    """Container with CACHE_ENABLED=false (every read goes to the store)."""
    container, _ = await _build_container(make_settings(tmp_path, cache_enabled=False))
    yield container
    await container.database().close()


# ============================================================================
# Unit fixtures (mocks)
# ============================================================================


@pytest.fixture
def mock_cache() -> AsyncMock:
    """Create a mock cache for unit tests (function-scoped).

    Returns:
        AsyncMock: Mocked cache that misses by default
    """
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)  # Cache misses by default
    cache.set = AsyncMock(return_value=True)
    cache.delete = AsyncMock(return_value=True)
    cache.get_metrics = MagicMock(return_value={"hits": 0, "misses": 0})
    return cache


@pytest.fixture
def mock_repository() -> AsyncMock:
    """Create a mock account repository (function-scoped).

    Returns:
        AsyncMock: Repository with no conflicts and no rows by default
    """
    repo = AsyncMock(spec=IAccountRepository)
    repo.get_all = AsyncMock(return_value=[])
    repo.get_by_id = AsyncMock(return_value=None)
    repo.find_identity_conflict = AsyncMock(return_value=None)
    repo.update = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=False)
    return repo


@pytest.fixture
def mock_hasher() -> MagicMock:
    """Create a mock credential hasher returning a fixed hash."""
    hasher = MagicMock()
    hasher.hash = MagicMock(return_value="$2b$04$hashed")
    return hasher
