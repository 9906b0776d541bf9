"""
Tests for identikey.config.settings
"""

import pytest
from pydantic import ValidationError

from identikey.config.settings import (
    IdentiKeySettings,
    KeySettings,
    SecuritySettings,
    get_settings,
    reset_settings,
)
from identikey.exceptions import ConfigurationError


class TestDefaults:

    def test_key_defaults(self):
        keys = KeySettings()

        assert keys.uid_counter_key == "global:uid"
        assert keys.user_roster_key == "users"
        assert keys.name_index_template == "user:{name}"
        assert keys.forward_token_template == "uid:{uid}:auth"
        assert keys.reverse_token_template == "auth:{token}"

    def test_security_defaults(self):
        security = SecuritySettings()

        assert security.revoke_previous_token is True
        assert security.enforce_unique_names is False
        assert security.accept_legacy_plaintext_passwords is True
        assert security.password_hash_rounds == 12


class TestValidation:

    def test_key_template_requires_placeholder(self):
        with pytest.raises(ValidationError):
            KeySettings(name_index_template="user:")

        with pytest.raises(ValidationError):
            KeySettings(forward_token_template="auth:{name}")

        with pytest.raises(ValidationError):
            KeySettings(reverse_token_template="auth")

    def test_length_bounds(self):
        with pytest.raises(ValidationError):
            SecuritySettings(username_min_length=10, username_max_length=5)

        with pytest.raises(ValidationError):
            SecuritySettings(password_min_length=10, password_max_length=5)

    def test_hash_cost_bounds(self):
        with pytest.raises(ValidationError):
            SecuritySettings(password_hash_rounds=3)

        with pytest.raises(ValidationError):
            SecuritySettings(password_hash_rounds=32)


class TestEnvironment:

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("REDIS_HOST", "redis.internal")
        monkeypatch.setenv("REDIS_PORT", "6390")
        monkeypatch.setenv("REVOKE_PREVIOUS_TOKEN", "false")
        monkeypatch.setenv("IDENTIKEY_NAME_INDEX_TEMPLATE", "user:{name}:uid")

        settings = IdentiKeySettings()

        assert settings.database.redis_host == "redis.internal"
        assert settings.database.redis_port == 6390
        assert settings.security.revoke_previous_token is False
        assert settings.keys.name_index_template == "user:{name}:uid"

    def test_get_settings_is_singleton(self):
        first = get_settings()

        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first

    def test_get_settings_wraps_validation_errors(self, monkeypatch):
        monkeypatch.setenv("REDIS_PORT", "not-a-port")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.error_code == "SETTINGS_INIT_ERROR"
