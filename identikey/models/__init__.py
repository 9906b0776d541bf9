"""Models package - central exports for IdentiKey models."""

from .auth import (
    LEGACY_PASSWORD_FIELD,
    NAME_FIELD,
    PASSWORD_HASH_FIELD,
    AuthSession,
    UserRecord,
)
from .interfaces import IIdentityStore

__all__ = [
    "AuthSession",
    "IIdentityStore",
    "LEGACY_PASSWORD_FIELD",
    "NAME_FIELD",
    "PASSWORD_HASH_FIELD",
    "UserRecord",
]
