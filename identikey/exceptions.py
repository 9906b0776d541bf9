"""
Exception hierarchy for the IdentiKey identity store.

Every error carries a human readable message, a stable error code and an
optional context dictionary so callers can branch on ``error_code`` without
parsing messages.
"""

from typing import Any, Dict, Optional


class IdentiKeyError(Exception):
    """Base exception for IdentiKey"""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "IDENTIKEY_ERROR"
        self.context = context or {}

    def __str__(self):
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(IdentiKeyError):
    """Configuration-related errors"""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "CONFIG_ERROR", context)


class DataValidationError(IdentiKeyError):
    """Caller supplied input that fails validation"""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "DATA_VALIDATION_ERROR", context)


class NoSuchUser(IdentiKeyError):
    """A name or token does not resolve to a uid"""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "NO_SUCH_USER", context)


class UserAlreadyExists(IdentiKeyError):
    """A name is already registered"""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "USER_ALREADY_EXISTS", context)


class InvalidCredentials(IdentiKeyError):
    """Name/password pair was rejected"""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "INVALID_CREDENTIALS", context)


class MalformedRecord(IdentiKeyError):
    """
    A stored user record is missing an expected field.

    Raised inside the store only; public operations convert it into a
    "not found" or "authentication failed" result.
    """

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "MALFORMED_RECORD", context)


class EngineError(IdentiKeyError):
    """The key-value engine rejected a command"""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "ENGINE_ERROR", context)


class EngineUnavailable(EngineError):
    """
    The key-value engine could not be reached (connection or timeout fault).

    Safe to retry from the caller; the store itself never retries.
    """

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "ENGINE_UNAVAILABLE", context)
