"""In-process store implementation for URL shortener."""

import asyncio
import logging
from typing import Optional, Dict
from datetime import datetime

from .base import URLStoreBase, single_filter
from .models import URLMapping
from ..errors import DuplicateKeyError


class InMemoryURLStore(URLStoreBase):
    """Dictionary-backed store with the same uniqueness rules as the database.

    Both indexes are updated under one lock, so two concurrent inserts for
    the same short code or original URL admit exactly one winner. Data lives
    for the lifetime of the process.
    """

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._by_code: Dict[str, URLMapping] = {}
        self._by_url: Dict[str, URLMapping] = {}
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        self.logger.info("Using in-memory URL store")

    async def find_by_short_code(self, short_code: str) -> Optional[URLMapping]:
        return self._by_code.get(short_code)

    async def find_by_original_url(self, original_url: str) -> Optional[URLMapping]:
        return self._by_url.get(original_url)

    async def find_one(
        self,
        short_code: Optional[str] = None,
        original_url: Optional[str] = None,
    ) -> Optional[URLMapping]:
        if short_code:
            mapping = self._by_code.get(short_code)
        elif original_url:
            mapping = self._by_url.get(original_url)
        else:
            return None

        if mapping is None:
            return None
        if original_url and mapping.original_url != original_url:
            return None
        return mapping

    async def insert(self, mapping: URLMapping) -> None:
        async with self._lock:
            if mapping.short_code in self._by_code:
                raise DuplicateKeyError(f"Duplicate short_code: {mapping.short_code}")
            if mapping.original_url in self._by_url:
                raise DuplicateKeyError(f"Duplicate original_url: {mapping.original_url}")

            self._by_code[mapping.short_code] = mapping
            self._by_url[mapping.original_url] = mapping

    async def delete_one(
        self,
        short_code: Optional[str] = None,
        original_url: Optional[str] = None,
    ) -> int:
        column, value = single_filter(short_code, original_url)

        async with self._lock:
            index = self._by_code if column == "short_code" else self._by_url
            mapping = index.get(value)
            if mapping is None:
                return 0
            self._remove(mapping)
            return 1

    async def delete_expired(self, now: datetime) -> int:
        async with self._lock:
            expired = [m for m in self._by_code.values() if m.is_expired(now)]
            for mapping in expired:
                self._remove(mapping)
            return len(expired)

    async def close(self) -> None:
        pass

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._by_code)

    def _remove(self, mapping: URLMapping) -> None:
        self._by_code.pop(mapping.short_code, None)
        self._by_url.pop(mapping.original_url, None)
