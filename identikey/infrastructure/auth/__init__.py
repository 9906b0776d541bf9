"""Authentication Infrastructure

Purpose: Credential handling for IdentiKey

Key Components:
- PasswordHasher: bcrypt hashing and legacy plaintext verification
"""

from .password_hasher import PasswordHasher

__all__ = [
    "PasswordHasher"
]
