"""Construct store and cache backends from configuration."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import URLStoreBase
from .cache import URLCacheBase, MemoryCache, RedisCache
from .memory import InMemoryURLStore
from .postgres import PostgresURLStore


POSTGRES_SCHEMES = ("postgres", "postgresql")


def create_store(config, logger: Optional[logging.Logger] = None) -> URLStoreBase:
    """Pick the store backend from the scheme of ``config.database_url``.

    Raises:
        ValueError: If the scheme is not supported
    """
    scheme = urlparse(config.database_url).scheme

    if scheme == "memory":
        return InMemoryURLStore(config.database_url, logger=logger)

    if scheme in POSTGRES_SCHEMES:
        return PostgresURLStore(
            db_config=config.database_url,
            pool_max_size=config.database_pool_max_size,
            connection_timeout_seconds=config.database_timeout_seconds,
            create_tables=config.database_create_tables,
            logger=logger,
        )

    raise ValueError(f"Unsupported database URL scheme: {scheme!r}")


async def create_cache(config, logger: Optional[logging.Logger] = None) -> URLCacheBase:
    """Redis-backed cache when ``config.redis_url`` is set, in-process otherwise."""
    if config.redis_url:
        cache = RedisCache(redis_url=config.redis_url, logger=logger)
        await cache.connect()
        return cache

    return MemoryCache(logger=logger)
