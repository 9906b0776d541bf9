"""Auth Service Module

Purpose: Caller-side registration and login workflow over IIdentityStore

Core Responsibilities:
- Input validation for user handles and passwords
- Advisory name-uniqueness check before registration
- Login (credential check + token issuance), logout, token resolution

NOT Responsible For:
- Key layout or engine access (owned by the identity store)
- Transport, rate limiting, access-control annotations
"""

from typing import Optional

from identikey.config.settings import SecuritySettings
from identikey.exceptions import (
    DataValidationError,
    InvalidCredentials,
    NoSuchUser,
    UserAlreadyExists,
)
from identikey.infrastructure.logging import RequestContext, get_logger
from identikey.models.auth import AuthSession
from identikey.models.interfaces import IIdentityStore


class AuthService:
    """Service for user registration and session-token management

    The existence check in ``register`` is advisory: two concurrent
    registrations of the same name can both pass it. Enable
    ``enforce_unique_names`` on the store for a hard guarantee.
    """

    def __init__(self, identity_store: IIdentityStore, settings: Optional[SecuritySettings] = None):
        """Initialize Auth Service

        Args:
            identity_store: Identity persistence store (IIdentityStore interface)
            settings: Credential policy (validation limits)
        """
        self.identity_store = identity_store
        self.settings = settings or SecuritySettings()
        self.logger = get_logger(__name__)

    def _validate_name(self, name: str) -> str:
        if not isinstance(name, str):
            raise DataValidationError("Username must be a string")
        name = name.strip()
        length = len(name)
        if length < self.settings.username_min_length or length > self.settings.username_max_length:
            raise DataValidationError(
                f"Username must be between {self.settings.username_min_length} and "
                f"{self.settings.username_max_length} characters",
                context={"length": length}
            )
        if any(ch.isspace() for ch in name):
            raise DataValidationError("Username must not contain whitespace")
        return name

    def _validate_password(self, password: str) -> None:
        if not isinstance(password, str):
            raise DataValidationError("Password must be a string")
        length = len(password)
        if length < self.settings.password_min_length or length > self.settings.password_max_length:
            raise DataValidationError(
                f"Password must be between {self.settings.password_min_length} and "
                f"{self.settings.password_max_length} characters",
                context={"length": length}
            )

    async def register(self, name: str, password: str) -> AuthSession:
        """Register a new user and return their first session

        Raises:
            DataValidationError: Invalid name or password
            UserAlreadyExists: Name is already registered
        """
        name = self._validate_name(name)
        self._validate_password(password)

        with RequestContext(user_name=name, operation="register"):
            if await self.identity_store.exists_by_name(name):
                self.logger.info("Registration rejected, name taken")
                raise UserAlreadyExists(f"User '{name}' already exists", context={"name": name})

            token = await self.identity_store.add_user(name, password)
            uid = await self.identity_store.find_uid_for_token(token)
            self.logger.info("User registered", uid=uid)
            return AuthSession(name=name, token=token, uid=uid)

    async def login(self, name: str, password: str) -> AuthSession:
        """Check credentials and issue a fresh token

        Raises:
            InvalidCredentials: Unknown user or wrong password
        """
        name = self._validate_name(name)

        with RequestContext(user_name=name, operation="login"):
            if not await self.identity_store.authenticate(name, password):
                self.logger.info("Login failed")
                raise InvalidCredentials("Invalid username or password")

            token = await self.identity_store.issue_auth(name)
            self.logger.info("Login succeeded")
            return AuthSession(name=name, token=token)

    async def logout(self, name: str) -> None:
        """Revoke the user's current token

        Raises:
            NoSuchUser: Name is not registered
        """
        name = self._validate_name(name)
        with RequestContext(user_name=name, operation="logout"):
            await self.identity_store.revoke_auth(name)
            self.logger.info("Logout completed")

    async def whoami(self, token: str) -> str:
        """Resolve a bearer token to its user's name

        Raises:
            NoSuchUser: Token is unknown, revoked or stale
        """
        with RequestContext(operation="whoami"):
            name = await self.identity_store.find_name_for_token(token)
            if not name:
                raise NoSuchUser("Token does not belong to any user")
            return name
