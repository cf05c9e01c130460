"""Business logic service for URL shortener."""

import logging
from typing import Callable, Optional, Dict, Any
from datetime import datetime, timedelta

from .shortcode import ShortCodeGenerator
from .database.base import URLStoreBase
from .database.cache import URLCacheBase, MemoryCache
from .database.models import URLMapping, utcnow
from .errors import ConflictError, DuplicateKeyError, NotFoundError, ValidationError
from .common.validators import clean_optional, is_valid_alias, normalize_url


DEFAULT_RETENTION = timedelta(days=7)


class URLShortenerService:
    """Service layer for URL shortening business logic.

    Owns the mapping lifecycle: lookup-before-create, alias collision
    checks, expiration stamping and the cached redirect path.
    """

    def __init__(
        self,
        store: URLStoreBase,
        cache: Optional[URLCacheBase] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        short_code_length: int = 8,
        retention: timedelta = DEFAULT_RETENTION,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize URL shortener service.

        Args:
            store: Mapping store
            cache: Short code cache (a fresh in-process cache if omitted)
            short_code_generator: Optional short code generator
            logger: Optional logger
            short_code_length: Length of generated short codes
            retention: How long a mapping lives after creation
            clock: Returns the current UTC time
        """
        if retention <= timedelta(0):
            raise ValueError("retention must be positive")

        self.store = store
        self.cache = cache if cache is not None else MemoryCache()
        self.generator = short_code_generator or ShortCodeGenerator(short_code_length)
        self.logger = logger or logging.getLogger(__name__)
        self.short_code_length = short_code_length
        self.retention = retention
        self.clock = clock

    async def shorten(
        self,
        long_url: str,
        custom_alias: Optional[str] = None,
    ) -> Dict[str, str]:
        """Create a short code for a URL, or return the existing one.

        Args:
            long_url: The URL to shorten, with or without scheme
            custom_alias: Optional user-chosen short code

        Returns:
            Dictionary with short_code and original_url

        Raises:
            ValidationError: If the URL is empty or the alias is malformed
            ConflictError: If the URL already has a different short code,
                the alias is taken, or a concurrent insert won the race
        """
        long_url = clean_optional(long_url)
        if not long_url:
            raise ValidationError("URL is required")

        custom_alias = clean_optional(custom_alias)
        if custom_alias:
            is_valid, error = is_valid_alias(custom_alias)
            if not is_valid:
                raise ValidationError(f"Invalid alias: {error}")

        original_url = normalize_url(long_url)

        existing = await self.store.find_by_original_url(original_url)
        if existing:
            if custom_alias and custom_alias != existing.short_code:
                self.logger.warning(
                    f"Rejected alias {custom_alias!r}: {original_url} is already {existing.short_code}"
                )
                raise ConflictError("A short URL for this link already exists")
            return self._result(existing)

        if custom_alias:
            if await self.store.find_by_short_code(custom_alias):
                self.logger.warning(f"Rejected alias {custom_alias!r}: already in use")
                raise ConflictError("Custom alias already in use")
            short_code = custom_alias
        else:
            # TODO: bounded retry on a generated-code collision; today it surfaces as ConflictError
            short_code = self.generator.generate(self.short_code_length)

        created_at = self.clock()
        mapping = URLMapping(
            short_code=short_code,
            original_url=original_url,
            created_at=created_at,
            expiration_date=created_at + self.retention,
        )

        try:
            await self.store.insert(mapping)
        except DuplicateKeyError as e:
            self.logger.warning(f"Duplicate insert for {short_code} -> {original_url}: {e}")
            raise ConflictError("A short URL for this link or alias already exists") from e

        self.logger.info(f"Created short URL: {short_code} -> {original_url}")
        return self._result(mapping)

    async def lookup(
        self,
        short_code: Optional[str] = None,
        original_url: Optional[str] = None,
    ) -> URLMapping:
        """Find the mapping matching every supplied identifier.

        Identifiers are matched as given, without URL normalization.

        Raises:
            ValidationError: If neither identifier is supplied
            NotFoundError: If nothing matches
        """
        short_code = clean_optional(short_code)
        original_url = clean_optional(original_url)
        if not short_code and not original_url:
            raise ValidationError("URL or Custom Alias must be provided")

        mapping = await self.store.find_one(short_code=short_code, original_url=original_url)
        if mapping is None:
            raise NotFoundError("No matching URL or Short Code found")
        return mapping

    async def delete(
        self,
        short_code: Optional[str] = None,
        original_url: Optional[str] = None,
    ) -> URLMapping:
        """Delete a mapping by original URL or by short code.

        The original URL is normalized the same way as in ``shorten`` and
        wins when both identifiers are supplied. Cached redirects for the
        deleted code are left in place.

        Returns:
            The deleted mapping

        Raises:
            ValidationError: If neither identifier is supplied
            NotFoundError: If nothing matches
        """
        short_code = clean_optional(short_code)
        original_url = clean_optional(original_url)
        if not short_code and not original_url:
            raise ValidationError("Either URL or Short Code must be provided")

        if original_url:
            filters = {"original_url": normalize_url(original_url)}
        else:
            filters = {"short_code": short_code}

        existing = await self.store.find_one(**filters)
        if existing is None:
            raise NotFoundError("No matching URL or Short Code found")

        deleted = await self.store.delete_one(**filters)
        if deleted == 0:
            # Removed concurrently between the check and the delete
            raise NotFoundError("No matching URL or Short Code found")

        self.logger.info(f"Deleted short URL: {existing.short_code} -> {existing.original_url}")
        return existing

    async def resolve(self, short_code: str) -> str:
        """Get the redirect target for a short code.

        Checks the cache first and writes store hits through to it.
        Expiration is not checked here; a mapping resolves until the
        janitor removes it from the store.

        Raises:
            NotFoundError: If the short code is unknown
        """
        cached_url = await self.cache.get(short_code)
        if cached_url:
            self.logger.debug(f"Cache hit for {short_code}")
            return cached_url

        mapping = await self.store.find_by_short_code(short_code)
        if mapping is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFoundError(f"Short code '{short_code}' not found")

        await self.cache.put(short_code, mapping.original_url)
        self.logger.debug(f"Cache miss for {short_code}, stored {mapping.original_url}")
        return mapping.original_url

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()
        cache_healthy = await self.cache.health_check()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        await self.cache.close()

    @staticmethod
    def _result(mapping: URLMapping) -> Dict[str, Any]:
        return {
            "short_code": mapping.short_code,
            "original_url": mapping.original_url,
        }
