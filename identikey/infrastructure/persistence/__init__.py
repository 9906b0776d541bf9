"""Persistence adapters for identity data."""

from .keys import KeySchema
from .redis_identity_store import RedisIdentityStore, create_identity_store

__all__ = [
    "KeySchema",
    "RedisIdentityStore",
    "create_identity_store",
]
