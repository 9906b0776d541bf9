"""Password hashing for stored credentials.

Passwords are stored as bcrypt hashes (``$2b$<cost>$...``). The cost travels
with each hash, so raising the configured rounds does not invalidate
existing records.
"""

import hmac
from typing import Optional

import bcrypt

from identikey.config.settings import SecuritySettings

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    # surrogatepass keeps lone surrogates hashable instead of raising
    return password.encode("utf-8", "surrogatepass")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way password hashing with bcrypt"""

    def __init__(self, settings: Optional[SecuritySettings] = None):
        settings = settings or SecuritySettings()
        self.rounds = settings.password_hash_rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password for storage"""
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """
        Verify a plaintext password against a stored bcrypt hash.

        Malformed hashes verify as False rather than raising.
        """
        try:
            return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
        except (AttributeError, TypeError, ValueError):
            return False

    @staticmethod
    def verify_legacy(password: str, stored: str) -> bool:
        """Constant-time comparison against a legacy plaintext credential"""
        return hmac.compare_digest(
            password.encode("utf-8", "surrogatepass"),
            stored.encode("utf-8", "surrogatepass")
        )
