"""Services Package

Service layer components that orchestrate identity workflows on top of
the identity store.
"""

from .auth_service import AuthService

__all__ = [
    "AuthService",
]
