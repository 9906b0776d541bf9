"""
Unified Configuration System for IdentiKey

Single source of truth for all configuration using pydantic-settings.

ARCHITECTURAL PRINCIPLES:
- Only this module accesses environment variables directly
- All other modules receive configuration via dependency injection
- Type-safe validation with automatic conversion
"""

from enum import Enum
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings


# =============================================================================
# LOGGING ENUMS
# =============================================================================

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# =============================================================================
# NESTED CONFIGURATION SECTIONS
# =============================================================================

class DatabaseSettings(BaseSettings):
    """Key-value engine (Redis) connection configuration"""

    redis_host: str = Field(default="localhost")
    redis_port: int = Field(default=6379, ge=1, le=65535)
    redis_db: int = Field(default=0, ge=0)
    redis_password: Optional[SecretStr] = Field(default=None)
    redis_url: Optional[str] = Field(default=None)

    # Connection pool
    redis_max_connections: int = Field(default=20, ge=1)
    redis_socket_connect_timeout: float = Field(default=5.0, gt=0)
    redis_socket_timeout: float = Field(default=10.0, gt=0)

    model_config = {"env_prefix": "", "extra": "ignore"}


class SecuritySettings(BaseSettings):
    """Credential and token policy"""

    password_hash_rounds: int = Field(default=12, ge=4, le=31)
    accept_legacy_plaintext_passwords: bool = Field(default=True)

    # Token policy
    revoke_previous_token: bool = Field(default=True)
    enforce_unique_names: bool = Field(default=False)

    # Input validation (service layer)
    username_min_length: int = Field(default=1, ge=1)
    username_max_length: int = Field(default=255, ge=1)
    password_min_length: int = Field(default=1, ge=1)
    password_max_length: int = Field(default=1024, ge=1)

    @field_validator("username_max_length")
    @classmethod
    def validate_username_bounds(cls, v, info):
        """Ensure the maximum is not below the minimum"""
        minimum = info.data.get("username_min_length", 1)
        if v < minimum:
            raise ValueError(f"USERNAME_MAX_LENGTH ({v}) must be >= USERNAME_MIN_LENGTH ({minimum})")
        return v

    @field_validator("password_max_length")
    @classmethod
    def validate_password_bounds(cls, v, info):
        """Ensure the maximum is not below the minimum"""
        minimum = info.data.get("password_min_length", 1)
        if v < minimum:
            raise ValueError(f"PASSWORD_MAX_LENGTH ({v}) must be >= PASSWORD_MIN_LENGTH ({minimum})")
        return v

    model_config = {"env_prefix": "", "extra": "ignore"}


class KeySettings(BaseSettings):
    """Key naming scheme inside the engine"""

    uid_counter_key: str = Field(default="global:uid")
    user_roster_key: str = Field(default="users")
    user_record_template: str = Field(default="uid:{uid}")
    name_index_template: str = Field(default="user:{name}")
    forward_token_template: str = Field(default="uid:{uid}:auth")
    reverse_token_template: str = Field(default="auth:{token}")

    @field_validator("user_record_template", "forward_token_template")
    @classmethod
    def validate_uid_placeholder(cls, v):
        if "{uid}" not in v:
            raise ValueError(f"Key template '{v}' must contain a {{uid}} placeholder")
        return v

    @field_validator("name_index_template")
    @classmethod
    def validate_name_placeholder(cls, v):
        if "{name}" not in v:
            raise ValueError(f"Key template '{v}' must contain a {{name}} placeholder")
        return v

    @field_validator("reverse_token_template")
    @classmethod
    def validate_token_placeholder(cls, v):
        if "{token}" not in v:
            raise ValueError(f"Key template '{v}' must contain a {{token}} placeholder")
        return v

    model_config = {"env_prefix": "IDENTIKEY_", "extra": "ignore"}


class LoggingSettings(BaseSettings):
    """Logging configuration"""

    log_level: LogLevel = Field(default=LogLevel.INFO)
    structured_logging: bool = Field(default=True)
    include_trace_id: bool = Field(default=True)

    model_config = {"env_prefix": "", "extra": "ignore"}


class IdentiKeySettings(BaseSettings):
    """
    Unified configuration for IdentiKey.

    All configuration access should go through this class via dependency injection.
    """

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    keys: KeySettings = Field(default_factory=KeySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,
        "extra": "ignore"
    }


# =============================================================================
# SINGLETON MANAGEMENT
# =============================================================================

_settings_instance: Optional[IdentiKeySettings] = None


def get_settings() -> IdentiKeySettings:
    """
    Get global settings instance (singleton pattern).

    Raises:
        ConfigurationError: If settings validation fails
    """
    global _settings_instance
    if _settings_instance is None:
        try:
            from dotenv import load_dotenv

            load_dotenv(override=False)
            _settings_instance = IdentiKeySettings()
        except Exception as e:
            from identikey.exceptions import ConfigurationError
            raise ConfigurationError(
                f"Settings initialization failed: {e}",
                error_code="SETTINGS_INIT_ERROR",
                context={"original_error": str(e), "error_type": type(e).__name__}
            ) from e
    return _settings_instance


def reset_settings() -> None:
    """
    Reset settings instance (primarily for testing).

    Forces recreation of settings on next get_settings() call.
    """
    global _settings_instance
    _settings_instance = None
