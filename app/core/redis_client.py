"""
Redis client for the change feed and orphaned-object bookkeeping

Features:
1. Change signals (one pub/sub channel per table)
2. Change listening (async iterator for streaming endpoints)
3. Orphan set (object keys whose deletion failed)
"""

import json
from typing import AsyncIterator, Dict, Iterable, List, Optional
import logging

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.core.config import settings
from app.db.base import utcnow

logger = logging.getLogger(__name__)

ORPHANS_KEY = "objects:orphans"


class RedisClient:
    """
    Redis client wrapper with helper methods for change signals

    Usage:
        redis_client = RedisClient()
        await redis_client.connect()
        await redis_client.publish_change("items")
    """

    def __init__(self):
        self.redis: Optional[Redis] = None

    async def connect(self) -> None:
        """Initialize Redis connection pool"""
        try:
            self.redis = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
                max_connections=settings.redis_max_connections,
                retry_on_timeout=True,
                socket_connect_timeout=5,
            )

            # Test connection
            await self.redis.ping()
            logger.info("✅ Redis connected successfully")

        except Exception as e:
            logger.error(f"❌ Redis connection failed: {e}")
            raise

    async def disconnect(self) -> None:
        """Close Redis connection"""
        if self.redis:
            await self.redis.close()
            logger.info("Redis connection closed")

    async def health_check(self) -> bool:
        """Check if Redis is healthy"""
        try:
            client = await self._client()
            await client.ping()
            return True
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def _client(self) -> Redis:
        if not self.redis:
            await self.connect()
        return self.redis

    # === CHANGE FEED ===

    @staticmethod
    def channel(table: str) -> str:
        return f"{settings.change_channel_prefix}:{table}"

    async def publish_change(self, table: str) -> bool:
        """
        Publish a change signal for a table

        The signal carries no row data; subscribers re-fetch the collection.
        A failed publish is logged and reported, the mutation it follows
        has already been committed.

        Returns:
            True if the signal was published
        """
        message = json.dumps({"table": table, "at": utcnow().isoformat()})
        try:
            client = await self._client()
            await client.publish(self.channel(table), message)
        except (RedisError, OSError) as e:
            logger.warning(f"Change signal for {table} not published: {e}")
            return False

        logger.debug(f"Change signal published: {table}")
        return True

    async def listen(self, tables: Iterable[str]) -> AsyncIterator[Dict[str, str]]:
        """
        Yield change signals for the given tables until cancelled

        Args:
            tables: Table names to subscribe to
        """
        client = await self._client()
        pubsub = client.pubsub()
        await pubsub.subscribe(*[self.channel(table) for table in tables])
        try:
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                try:
                    yield json.loads(message["data"])
                except (TypeError, ValueError):
                    logger.warning(f"Ignoring malformed change signal: {message['data']!r}")
        finally:
            await pubsub.unsubscribe()
            await pubsub.close()

    # === ORPHANED OBJECTS ===

    async def add_orphan(self, key: str) -> None:
        """
        Record an object key whose deletion failed

        Args:
            key: Object key left behind in the store
        """
        client = await self._client()
        await client.sadd(ORPHANS_KEY, key)
        logger.debug(f"Orphaned object recorded: {key}")

    async def get_orphans(self) -> List[str]:
        """Get all recorded orphaned object keys"""
        client = await self._client()
        return sorted(await client.smembers(ORPHANS_KEY))

    async def remove_orphan(self, key: str) -> bool:
        """
        Forget an orphaned object key

        Returns:
            True if the key was recorded
        """
        client = await self._client()
        removed = await client.srem(ORPHANS_KEY, key)
        return bool(removed)


# Global Redis client instance
redis_client = RedisClient()


async def get_redis() -> RedisClient:
    """
    Dependency function for FastAPI

    Usage:
        @app.post("/endpoint")
        async def endpoint(redis: RedisClient = Depends(get_redis)):
            await redis.publish_change("items")

    The connection is opened lazily by the first command, so an
    unavailable Redis only affects the change feed.
    """
    return redis_client


async def init_redis() -> None:
    """Initialize Redis connection on app startup"""
    await redis_client.connect()


async def close_redis() -> None:
    """Close Redis connection on app shutdown"""
    await redis_client.disconnect()
