"""Tests for dependency injection wiring.

Test Organization:
- TestRepositorySelection: CACHE_ENABLED picks the repository
- TestServiceWiring: Service and collaborators resolve
"""

from pathlib import Path

from account_store.app.service import AccountService
from account_store.container import create_container
from account_store.infrastructure.repositories.account_repository import AccountRepository
from account_store.infrastructure.repositories.cached_account_repository import (
    CachedAccountRepository,
)
from account_store.infrastructure.security.credentials import CredentialHasher
from tests.factories import make_settings


class TestRepositorySelection:
    """Test the cache toggle."""

    def test_cache_enabled_uses_cached_repository(self, tmp_path: Path) -> None:
        """Test the cache-aside decorator backs the service by default."""
        container = create_container(make_settings(tmp_path, cache_enabled=True))

        assert isinstance(container.account_repository(), CachedAccountRepository)

    def test_cache_disabled_uses_store_directly(self, tmp_path: Path) -> None:
        """Test strict consistency mode bypasses the cache."""
        container = create_container(make_settings(tmp_path, cache_enabled=False))

        assert isinstance(container.account_repository(), AccountRepository)

    def test_cached_repository_shares_one_cache(self, tmp_path: Path) -> None:
        """Test the cache is a singleton owned by the container."""
        container = create_container(make_settings(tmp_path))

        assert container.cache() is container.cache()
        assert container.account_repository() is container.account_repository()


class TestServiceWiring:
    """Test service construction."""

    def test_resolves_account_service(self, tmp_path: Path) -> None:
        """Test the facade resolves with all use cases."""
        container = create_container(make_settings(tmp_path))

        assert isinstance(container.account_service(), AccountService)

    def test_hasher_uses_configured_rounds(self, tmp_path: Path) -> None:
        """Test bcrypt rounds come from settings."""
        container = create_container(make_settings(tmp_path, password_hash_rounds=5))

        hasher = container.hasher()

        assert isinstance(hasher, CredentialHasher)
        assert hasher.hash("correct-horse-battery").startswith("$2b$05$")
