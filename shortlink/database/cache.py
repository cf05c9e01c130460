"""Short code cache layer for URL shortener.

The cache only accelerates the redirect path. It never expires or evicts
entries and is not kept consistent with the store, so a mapping that was
deleted or has expired may still be served from here until overwritten.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional, Dict

import redis.asyncio as redis


class URLCacheBase(ABC):
    """Short code to original URL cache."""

    @abstractmethod
    async def get(self, short_code: str) -> Optional[str]:
        """Get the cached URL for a short code, or None on a miss."""
        pass

    @abstractmethod
    async def put(self, short_code: str, url: str) -> None:
        """Store a URL for a short code, overwriting any previous value."""
        pass

    async def close(self) -> None:
        """Release cache resources."""

    async def health_check(self) -> bool:
        return True


class MemoryCache(URLCacheBase):
    """Process-local cache guarded by a single lock."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._entries: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def get(self, short_code: str) -> Optional[str]:
        async with self._lock:
            return self._entries.get(short_code)

    async def put(self, short_code: str, url: str) -> None:
        async with self._lock:
            self._entries[short_code] = url

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache(URLCacheBase):
    """Redis-backed cache shared between worker processes.

    Redis failures are logged and treated as a miss, the store stays
    authoritative.
    """

    KEY_PREFIX = "shortlink:url:"

    def __init__(
        self,
        redis_url: str,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Connect to Redis."""
        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except Exception as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.client = None

    async def get(self, short_code: str) -> Optional[str]:
        if not self.client:
            return None

        try:
            return await self.client.get(self.get_cache_key(short_code))
        except Exception as e:
            self.logger.error(f"Cache get error: {e}")
            return None

    async def put(self, short_code: str, url: str) -> None:
        if not self.client:
            return

        try:
            await self.client.set(self.get_cache_key(short_code), url)
        except Exception as e:
            self.logger.error(f"Cache set error: {e}")

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")

    async def health_check(self) -> bool:
        if not self.client:
            return False
        try:
            await self.client.ping()
            return True
        except Exception:
            return False

    def get_cache_key(self, short_code: str) -> str:
        """Generate cache key for short code.

        Args:
            short_code: The short code

        Returns:
            Cache key
        """
        return f"{self.KEY_PREFIX}{short_code}"
