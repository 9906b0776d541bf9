"""
Redis client configuration for IdentiKey.

Builds async Redis clients from settings with connection pooling,
decoded string responses and masked credentials in log output.
"""

from typing import Optional
from urllib.parse import urlparse

import redis.asyncio as redis
from redis.exceptions import RedisError

from identikey.config.settings import IdentiKeySettings, get_settings
from identikey.exceptions import EngineUnavailable
from identikey.infrastructure.logging import get_logger

logger = get_logger(__name__)


class RedisClientFactory:
    """Factory for creating configured Redis clients."""

    @staticmethod
    def create_client(settings: Optional[IdentiKeySettings] = None, **kwargs) -> redis.Redis:
        """
        Create a Redis client with proper configuration.

        Args:
            settings: Application settings (defaults to the global instance)
            **kwargs: Additional Redis client parameters

        Returns:
            Configured Redis client
        """
        settings = settings or get_settings()
        db = settings.database

        pool_kwargs = {
            'max_connections': kwargs.pop('max_connections', db.redis_max_connections),
            'socket_connect_timeout': kwargs.pop('socket_connect_timeout', db.redis_socket_connect_timeout),
            'socket_timeout': kwargs.pop('socket_timeout', db.redis_socket_timeout),
            'decode_responses': kwargs.pop('decode_responses', True),
        }

        if db.redis_url:
            client = redis.from_url(db.redis_url, **pool_kwargs, **kwargs)
            logger.info("Redis client created from URL", url=RedisClientFactory._mask_url(db.redis_url))
        else:
            password = db.redis_password.get_secret_value() if db.redis_password else None
            client = redis.Redis(
                host=db.redis_host,
                port=db.redis_port,
                db=db.redis_db,
                password=password,
                **pool_kwargs,
                **kwargs
            )
            logger.info(
                "Redis client created",
                host=db.redis_host,
                port=db.redis_port,
                db=db.redis_db,
                auth='yes' if password else 'no'
            )

        return client

    @staticmethod
    def _mask_url(url: str) -> str:
        """Mask password in URL for logging."""
        parsed = urlparse(url)
        if parsed.password:
            masked_netloc = parsed.netloc.replace(parsed.password, '***')
            return url.replace(parsed.netloc, masked_netloc)
        return url

    @staticmethod
    async def test_connection(client: redis.Redis) -> bool:
        """
        Test Redis connection health.

        Args:
            client: Redis client to test

        Returns:
            True if connection is healthy
        """
        try:
            response = await client.ping()
        except RedisError as e:
            logger.error("Redis connection test failed", error=str(e))
            return False
        if not response:
            logger.error("Redis ping returned a falsy response")
            return False
        logger.debug("Redis connection test successful")
        return True


def create_redis_client(settings: Optional[IdentiKeySettings] = None, **kwargs) -> redis.Redis:
    """
    Convenience function to create a Redis client.

    Usage:
        # Settings from environment / .env
        client = create_redis_client()

        # Explicit settings
        client = create_redis_client(IdentiKeySettings(database=DatabaseSettings(redis_url="redis://localhost:6379/0")))
    """
    return RedisClientFactory.create_client(settings, **kwargs)


async def validate_redis_connection(client: redis.Redis) -> None:
    """
    Validate Redis connection and log results.

    Args:
        client: Redis client to validate

    Raises:
        EngineUnavailable: If Redis is not accessible
    """
    is_healthy = await RedisClientFactory.test_connection(client)
    if not is_healthy:
        raise EngineUnavailable("Redis connection validation failed")
