"""Authentication Data Models

Purpose: Define data structures for users and authentication sessions

Key Components:
- UserRecord: A registered user as stored in the ``uid:<uid>`` hash
- AuthSession: The result of a successful registration or login
"""

from dataclasses import dataclass
from typing import Dict, Optional

from identikey.exceptions import MalformedRecord


# Hash field names inside a user record
NAME_FIELD = "name"
PASSWORD_HASH_FIELD = "password_hash"
LEGACY_PASSWORD_FIELD = "pass"


@dataclass
class UserRecord:
    """Registered user

    Attributes:
        uid: String-encoded integer identifier, stable for the user's lifetime
        name: Unique handle chosen at registration
        password_hash: Encoded salted hash (None for legacy records)
        legacy_password: Plaintext credential written by older deployments
    """
    uid: str
    name: str
    password_hash: Optional[str] = None
    legacy_password: Optional[str] = None

    def to_hash(self) -> Dict[str, str]:
        """Convert to the field map stored in the engine"""
        fields = {NAME_FIELD: self.name}
        if self.password_hash is not None:
            fields[PASSWORD_HASH_FIELD] = self.password_hash
        if self.legacy_password is not None:
            fields[LEGACY_PASSWORD_FIELD] = self.legacy_password
        return fields

    @classmethod
    def from_hash(cls, uid: str, data: Dict[str, str]) -> "UserRecord":
        """Create from a stored field map

        Raises:
            MalformedRecord: If the ``name`` field is missing
        """
        name = data.get(NAME_FIELD)
        if not name:
            raise MalformedRecord(
                f"User record {uid} has no '{NAME_FIELD}' field",
                context={"uid": uid, "field": NAME_FIELD}
            )
        return cls(
            uid=uid,
            name=name,
            password_hash=data.get(PASSWORD_HASH_FIELD),
            legacy_password=data.get(LEGACY_PASSWORD_FIELD),
        )


@dataclass(frozen=True)
class AuthSession:
    """Issued bearer credential for a user

    Attributes:
        name: User handle the token belongs to
        token: Opaque bearer token
        uid: Owner uid when known to the issuer
    """
    name: str
    token: str
    uid: Optional[str] = None
