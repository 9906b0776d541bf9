"""Identity store interface contract.

Services depend on this interface rather than on the Redis implementation
so that alternative engines can be injected.

Implemented by:
- RedisIdentityStore
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class IIdentityStore(ABC):
    """Interface for user identity and session-token storage"""

    @abstractmethod
    async def exists_by_name(self, name: str) -> bool:
        """Return True if a user with this name is registered"""
        pass

    @abstractmethod
    async def add_user(self, name: str, password: str) -> str:
        """
        Register a user and issue their first token.

        Args:
            name: Unique user handle
            password: Plaintext password (hashed before storage)

        Returns:
            Freshly issued authentication token
        """
        pass

    @abstractmethod
    async def find_uid(self, name: str) -> Optional[str]:
        """Resolve a name to its uid, None if unknown"""
        pass

    @abstractmethod
    async def issue_auth(self, name: str) -> str:
        """
        Issue a new authentication token for a registered user.

        Raises:
            NoSuchUser: If the name is not registered
        """
        pass

    @abstractmethod
    async def authenticate(self, name: str, password: str) -> bool:
        """Check a name/password pair; unknown users yield False"""
        pass

    @abstractmethod
    async def find_uid_for_token(self, token: str) -> Optional[str]:
        """Resolve a token to the owning user's uid, None if not live"""
        pass

    @abstractmethod
    async def find_name_for_token(self, token: str) -> Optional[str]:
        """Resolve a token to the owning user's name, None if not live"""
        pass

    @abstractmethod
    async def revoke_auth(self, name: str) -> None:
        """
        Delete the user's current token pair.

        Raises:
            NoSuchUser: If the name is not registered
        """
        pass

    @abstractmethod
    async def list_users(self, offset: int = 0, limit: int = 50) -> List[str]:
        """Page through registered names, most recent first"""
        pass
