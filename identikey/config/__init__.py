"""Configuration Package

Purpose: Centralized configuration management for IdentiKey

This package contains the pydantic-settings based configuration sections
and the process-wide settings singleton.
"""

from .settings import (
    DatabaseSettings,
    IdentiKeySettings,
    KeySettings,
    LoggingSettings,
    LogLevel,
    SecuritySettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "DatabaseSettings",
    "IdentiKeySettings",
    "KeySettings",
    "LoggingSettings",
    "LogLevel",
    "SecuritySettings",
    "get_settings",
    "reset_settings",
]
