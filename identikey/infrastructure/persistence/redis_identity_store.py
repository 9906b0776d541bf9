"""Redis Identity Store Implementation

Purpose: Redis implementation of IIdentityStore

Stores users, the name index, the user roster and bidirectional
authentication-token mappings in a shared Redis instance. The store keeps
no local state; Redis is the single source of truth across processes.

Redis Key Schema (defaults, see KeySchema):
- uid:{uid}          -> Hash (name, password_hash)
- user:{name}        -> String (uid)
- uid:{uid}:auth     -> String (current token)
- auth:{token}       -> String (uid)
- global:uid         -> Integer counter (INCR)
- users              -> List (LPUSH, newest first)

Consistency:
- uid allocation is a single INCR and is unique under concurrency
- add_user is a best-effort multi-step sequence; a crash between steps
  can leave a uid without a name index entry
- revoke_auth removes both token directions with a single DEL
- issue_auth swaps the forward entry (SET ... GET, Redis 6.2+) and writes the
  new reverse entry in one MULTI/EXEC transaction, then deletes the
  reverse entry of the token it displaced
"""

import asyncio
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Union

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from identikey.config.settings import IdentiKeySettings, SecuritySettings, get_settings
from identikey.exceptions import (
    EngineError,
    EngineUnavailable,
    MalformedRecord,
    NoSuchUser,
    UserAlreadyExists,
)
from identikey.infrastructure.auth.password_hasher import PasswordHasher
from identikey.infrastructure.logging import get_logger
from identikey.infrastructure.persistence.keys import KeySchema
from identikey.infrastructure.redis_client import RedisClientFactory, create_redis_client
from identikey.models.auth import UserRecord
from identikey.models.interfaces import IIdentityStore

logger = get_logger(__name__)


class RedisIdentityStore(IIdentityStore):
    """
    Redis implementation of user identity and session-token storage.

    Every public operation is a pass-through to Redis. Engine connection
    faults surface as EngineUnavailable, other engine failures as
    EngineError; missing fields and dangling pointers are absorbed into
    "not found" / False results.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        keys: Optional[KeySchema] = None,
        hasher: Optional[PasswordHasher] = None,
        security: Optional[SecuritySettings] = None
    ):
        """
        Initialize Redis identity store.

        Args:
            redis_client: Async Redis client instance
            keys: Key naming scheme (defaults to the standard layout)
            hasher: Password hasher (built from ``security`` if omitted)
            security: Credential and token policy settings
        """
        security = security or SecuritySettings()
        self.redis = redis_client
        self.keys = keys or KeySchema()
        self.hasher = hasher or PasswordHasher(security)
        self.revoke_previous_token = security.revoke_previous_token
        self.enforce_unique_names = security.enforce_unique_names
        self.accept_legacy_plaintext = security.accept_legacy_plaintext_passwords

    @asynccontextmanager
    async def _engine_call(self, operation: str, **context) -> AsyncIterator[None]:
        """Map redis-py failures raised inside the block onto the error taxonomy"""
        try:
            yield
        except (RedisConnectionError, RedisTimeoutError) as e:
            logger.error("Key-value engine unavailable", operation=operation, error=str(e), **context)
            raise EngineUnavailable(
                f"Redis operation '{operation}' failed: {e}",
                context={"operation": operation, **context}
            ) from e
        except RedisError as e:
            logger.error("Key-value engine error", operation=operation, error=str(e), **context)
            raise EngineError(
                f"Redis operation '{operation}' failed: {e}",
                context={"operation": operation, **context}
            ) from e

    @staticmethod
    def _decode(value: Union[str, bytes, None]) -> Optional[str]:
        if isinstance(value, bytes):
            value = value.decode('utf-8')
        return value or None

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def exists_by_name(self, name: str) -> bool:
        async with self._engine_call("exists_by_name", name=name):
            return await self.redis.exists(self.keys.name_index(name)) > 0

    async def add_user(self, name: str, password: str) -> str:
        """
        Register a user and issue their first token.

        Process:
        1. INCR the uid counter
        2. Write the user hash
        3. Write the name index entry
        4. Prepend the name to the roster
        5. Issue a token for the new uid

        With ``enforce_unique_names`` the name index is claimed with SET NX
        right after step 1 and nothing else is written if it is taken.

        Raises:
            UserAlreadyExists: Name taken while unique names are enforced
        """
        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        name_key = self.keys.name_index(name)

        async with self._engine_call("add_user", name=name):
            uid = str(await self.redis.incr(self.keys.uid_counter))

            if self.enforce_unique_names:
                claimed = await self.redis.set(name_key, uid, nx=True)
                if not claimed:
                    logger.info("Registration rejected, name taken", name=name, burned_uid=uid)
                    raise UserAlreadyExists(
                        f"User '{name}' already exists",
                        context={"name": name}
                    )

            record = UserRecord(uid=uid, name=name, password_hash=password_hash)
            await self.redis.hset(self.keys.user_record(uid), mapping=record.to_hash())

            if not self.enforce_unique_names:
                await self.redis.set(name_key, uid)

            await self.redis.lpush(self.keys.user_roster, name)

        logger.info("User registered", uid=uid, name=name)
        return await self._issue_token(uid)

    async def find_uid(self, name: str) -> Optional[str]:
        async with self._engine_call("find_uid", name=name):
            return self._decode(await self.redis.get(self.keys.name_index(name)))

    async def _load_user(self, uid: str) -> UserRecord:
        """
        Read the user hash for ``uid``.

        Raises:
            MalformedRecord: If the hash is missing or has no name field
        """
        async with self._engine_call("load_user", uid=uid):
            data = await self.redis.hgetall(self.keys.user_record(uid))
        decoded = {self._decode(k): self._decode(v) for k, v in (data or {}).items()}
        return UserRecord.from_hash(uid, decoded)

    async def list_users(self, offset: int = 0, limit: int = 50) -> List[str]:
        """Page through the roster, most recently registered first"""
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if limit <= 0:
            return []
        async with self._engine_call("list_users", offset=offset, limit=limit):
            names = await self.redis.lrange(self.keys.user_roster, offset, offset + limit - 1)
        return [self._decode(n) for n in names]

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    async def authenticate(self, name: str, password: str) -> bool:
        uid = await self.find_uid(name)
        if not uid:
            return False

        try:
            record = await self._load_user(uid)
            return await self._verify_credential(record, password)
        except MalformedRecord as e:
            logger.warning("Authentication against malformed user record", uid=uid, error=e.message)
            return False

    async def _verify_credential(self, record: UserRecord, password: str) -> bool:
        if record.password_hash:
            return await asyncio.to_thread(self.hasher.verify, password, record.password_hash)
        if record.legacy_password is not None and self.accept_legacy_plaintext:
            return self.hasher.verify_legacy(password, record.legacy_password)
        raise MalformedRecord(
            f"User record {record.uid} has no usable credential field",
            context={"uid": record.uid}
        )

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    async def issue_auth(self, name: str) -> str:
        uid = await self.find_uid(name)
        if not uid:
            raise NoSuchUser(f"User '{name}' not found", context={"name": name})
        return await self._issue_token(uid)

    async def _issue_token(self, uid: str) -> str:
        """
        Swap in a fresh token for ``uid``.

        The forward entry is replaced with SET ... GET in the same MULTI/EXEC
        that writes the new reverse entry, so each issuer sees exactly the
        token it displaced. That token's reverse entry is deleted right
        after, which leaves one reverse entry per user under concurrency.
        """
        token = str(uuid.uuid4())
        forward_key = self.keys.forward_token(uid)

        async with self._engine_call("issue_auth", uid=uid):
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.set(forward_key, token, get=True)
                pipe.set(self.keys.reverse_token(token), uid)
                displaced, _ = await pipe.execute()

            previous = self._decode(displaced)
            if previous and self.revoke_previous_token:
                await self.redis.delete(self.keys.reverse_token(previous))

        logger.info("Token issued", uid=uid, replaced_previous=bool(previous))
        return token

    async def find_uid_for_token(self, token: str) -> Optional[str]:
        """
        Resolve a token to its owner's uid.

        The reverse entry is trusted only while the owner's forward entry
        still holds the same token.

        Returns:
            The uid, or None for an empty, unknown or superseded token
        """
        if not token:
            return None

        async with self._engine_call("find_uid_for_token"):
            uid = self._decode(await self.redis.get(self.keys.reverse_token(token)))
            if not uid:
                return None
            current = self._decode(await self.redis.get(self.keys.forward_token(uid)))

        if current != token:
            logger.warning("Ignoring stale token", uid=uid)
            return None
        return uid

    async def find_name_for_token(self, token: str) -> Optional[str]:
        """
        Resolve a token to its owner's name.

        Returns:
            The name, or None (never an empty string) when the token is
            empty, unknown, superseded or points at a record without a name
        """
        uid = await self.find_uid_for_token(token)
        if not uid:
            return None

        try:
            record = await self._load_user(uid)
        except MalformedRecord as e:
            logger.warning("Token points at malformed user record", uid=uid, error=e.message)
            return None
        return record.name

    async def revoke_auth(self, name: str) -> None:
        uid = await self.find_uid(name)
        if not uid:
            raise NoSuchUser(f"User '{name}' not found", context={"name": name})

        forward_key = self.keys.forward_token(uid)
        async with self._engine_call("revoke_auth", uid=uid):
            token = self._decode(await self.redis.get(forward_key))
            doomed = [forward_key]
            if token:
                doomed.append(self.keys.reverse_token(token))
            await self.redis.delete(*doomed)

        logger.info("Token revoked", uid=uid, had_token=bool(token))

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    async def ping(self) -> bool:
        """Return True if Redis answers PING"""
        return await RedisClientFactory.test_connection(self.redis)


def create_identity_store(
    settings: Optional[IdentiKeySettings] = None,
    redis_client: Optional[redis.Redis] = None
) -> RedisIdentityStore:
    """
    Wire settings, client, key schema and hasher into a store.

    Args:
        settings: Application settings (defaults to the global instance)
        redis_client: Pre-built client; created from settings if omitted
    """
    settings = settings or get_settings()
    client = redis_client or create_redis_client(settings)
    return RedisIdentityStore(
        client,
        keys=KeySchema.from_settings(settings.keys),
        security=settings.security,
    )
