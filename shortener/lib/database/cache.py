"""Redis cache layer for URL records."""

import json
import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .models import UrlRecord


class RedisCache:
    """Redis read-through cache keyed by short code.

    Records never change after creation, so entries only leave the cache
    through TTL expiry. Cache failures are logged and treated as misses.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
        client: Optional[redis.Redis] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: TTL for cached records
            logger: Optional logger instance
            client: Pre-built client (skips connecting from redis_url)
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.client = client
        self.enabled = redis_url is not None or client is not None

    async def connect(self) -> None:
        """Connect to Redis."""
        if not self.enabled or self.client is not None:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info(f"Redis cache enabled with TTL={self.ttl_seconds}s")
        except (RedisError, OSError) as e:
            self.logger.error(f"Failed to connect to Redis, caching disabled: {e}")
            self.enabled = False

    async def get(self, token: str) -> Optional[UrlRecord]:
        """Get a cached record.

        Args:
            token: Short code

        Returns:
            Cached record or None
        """
        if not self.enabled or not self.client:
            return None

        try:
            value = await self.client.get(self.get_cache_key(token))
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache get error: {e}")
            return None

        if value is None:
            return None

        try:
            return UrlRecord.from_dict(json.loads(value))
        except (ValueError, KeyError, TypeError) as e:
            self.logger.error(f"Discarding unreadable cache entry for {token}: {e}")
            return None

    async def set(self, record: UrlRecord) -> bool:
        """Cache a record.

        Args:
            record: Record to cache under its short code

        Returns:
            True if successful
        """
        if not self.enabled or not self.client:
            return False

        try:
            await self.client.setex(
                self.get_cache_key(record.shortened),
                self.ttl_seconds,
                json.dumps(record.to_dict()),
            )
            return True
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        """Check the Redis connection."""
        if not self.enabled or not self.client:
            return True

        try:
            await self.client.ping()
            return True
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")

    def get_cache_key(self, token: str) -> str:
        """Generate cache key for short code."""
        return f"shortener:url:{token}"
