"""Storage layer for URL shortener."""

from .base import URLStoreBase
from .cache import URLCacheBase, MemoryCache, RedisCache
from .factory import create_cache, create_store
from .memory import InMemoryURLStore
from .models import URLMapping
from .postgres import PostgresURLStore

__all__ = [
    "URLStoreBase",
    "URLCacheBase",
    "MemoryCache",
    "RedisCache",
    "InMemoryURLStore",
    "PostgresURLStore",
    "URLMapping",
    "create_cache",
    "create_store",
]
