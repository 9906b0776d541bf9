"""Shared pytest fixtures and configuration for IdentiKey tests."""

import pytest

from identikey.config.settings import (
    IdentiKeySettings,
    KeySettings,
    SecuritySettings,
    reset_settings,
)
from identikey.infrastructure.persistence.keys import KeySchema
from identikey.infrastructure.persistence.redis_identity_store import RedisIdentityStore
from identikey.services.auth_service import AuthService
from tests.test_doubles import InMemoryRedis


@pytest.fixture(autouse=True)
def _isolate_settings():
    """Ensure every test builds settings from a clean slate."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def security_settings():
    """Security settings with the cheapest bcrypt cost for fast tests."""
    return SecuritySettings(password_hash_rounds=4)


@pytest.fixture
def app_settings(security_settings):
    """Application settings wired with the fast security section."""
    return IdentiKeySettings(security=security_settings, keys=KeySettings())


@pytest.fixture
def fake_redis():
    """In-memory Redis double."""
    return InMemoryRedis()


@pytest.fixture
def identity_store(fake_redis, security_settings):
    """Identity store backed by the in-memory Redis double."""
    return RedisIdentityStore(fake_redis, keys=KeySchema(), security=security_settings)


@pytest.fixture
def make_store(fake_redis):
    """Factory for stores with custom policy on the shared Redis double."""
    def _make(**policy):
        security = SecuritySettings(password_hash_rounds=4, **policy)
        return RedisIdentityStore(fake_redis, keys=KeySchema(), security=security)
    return _make


@pytest.fixture
def auth_service(identity_store, security_settings):
    """Auth service over the in-memory identity store."""
    return AuthService(identity_store, security_settings)
