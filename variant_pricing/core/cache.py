"""
Redis counter store for the rate limiter.

Only request counters live here; variant prices and availability are
computed on every call and never stored.
"""

from typing import Optional
import logging
from redis import asyncio as aioredis
from redis.asyncio import Redis
from redis.exceptions import RedisError
from variant_pricing import config

logger = logging.getLogger(__name__)


class RedisCounterStore:
    """
    Async Redis wrapper with a single shared connection pool.

    When Redis is not connected every operation degrades to a no-op so the
    API keeps serving quotes.
    """

    _instance: Optional['RedisCounterStore'] = None
    _redis_client: Optional[Redis] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(RedisCounterStore, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        # Only initialize once
        if not hasattr(self, '_initialized'):
            self.host = config.REDIS_HOST
            self.port = config.REDIS_PORT
            self.db = config.REDIS_DB
            self.password = config.REDIS_PASSWORD
            self._initialized = True
            logger.info(f"Redis counter store configured: {self.host}:{self.port}, DB={self.db}")

    @property
    def connected(self) -> bool:
        return self._redis_client is not None

    async def connect(self) -> None:
        """
        Establish async connection to Redis.
        A failed connection is logged and leaves the store disconnected.
        """
        if self._redis_client is not None:
            return
        client = aioredis.from_url(
            f"redis://{self.host}:{self.port}/{self.db}",
            password=self.password if self.password else None,
            encoding="utf-8",
            decode_responses=True,
            max_connections=10
        )
        try:
            await client.ping()
        except RedisError as e:
            logger.error(f"Failed to connect to Redis, rate limiting disabled: {str(e)}")
            await client.aclose()
            return
        self._redis_client = client
        logger.info("Redis connection established successfully")

    async def disconnect(self) -> None:
        if self._redis_client:
            await self._redis_client.aclose()
            self._redis_client = None
            logger.info("Redis connection closed")

    async def increment(self, key: str, ttl: int) -> Optional[int]:
        """
        Increment a counter, setting its TTL when it is first created.

        Args:
            key: Counter key
            ttl: Time-to-live in seconds

        Returns:
            New counter value, or None if Redis is unavailable
        """
        if not self._redis_client:
            return None

        try:
            async with self._redis_client.pipeline(transaction=True) as pipe:
                # SET NX creates the counter with its TTL only once
                pipe.set(key, 0, ex=ttl, nx=True)
                pipe.incr(key)
                _, count = await pipe.execute()
            logger.debug(f"Counter INCR: {key} -> {count}")
            return int(count)
        except RedisError as e:
            logger.error(f"Redis INCR error for key '{key}': {str(e)}")
            return None

    def get_key(self, prefix: str, *identifiers: str) -> str:
        """
        Generate standardized key, e.g. "rate_limit:abc:2024-01-01-10-00".
        """
        return ":".join([prefix, *identifiers])


# Singleton instance
counter_store = RedisCounterStore()
