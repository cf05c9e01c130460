"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime

from .models import URLMapping


class URLStoreBase(ABC):
    """Abstract base class for URL mapping storage.

    A store keeps at most one mapping per short code and at most one mapping
    per original URL. Uniqueness is enforced by the store itself, so a racing
    duplicate insert is rejected even when the caller pre-checked.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Store connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def connect(self) -> None:
        """Open connections and ensure the schema exists.

        Raises:
            StorageError: If the store is unreachable
        """
        pass

    @abstractmethod
    async def find_by_short_code(self, short_code: str) -> Optional[URLMapping]:
        """Look up a mapping by short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_original_url(self, original_url: str) -> Optional[URLMapping]:
        """Look up a mapping by original URL.

        Args:
            original_url: The normalized original URL

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_one(
        self,
        short_code: Optional[str] = None,
        original_url: Optional[str] = None,
    ) -> Optional[URLMapping]:
        """Look up a mapping matching every supplied identifier.

        Args:
            short_code: Optional short code to match
            original_url: Optional original URL to match

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, mapping: URLMapping) -> None:
        """Persist a new mapping.

        Args:
            mapping: The mapping to store

        Raises:
            DuplicateKeyError: If the short code or original URL is taken
        """
        pass

    @abstractmethod
    async def delete_one(
        self,
        short_code: Optional[str] = None,
        original_url: Optional[str] = None,
    ) -> int:
        """Delete the mapping matching exactly one identifier.

        Args:
            short_code: Short code to delete by
            original_url: Original URL to delete by

        Returns:
            Number of mappings removed (0 or 1)

        Raises:
            ValueError: Unless exactly one identifier is given
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every mapping whose expiration date is before ``now``.

        Args:
            now: Reference timestamp

        Returns:
            Number of mappings removed
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass


def single_filter(short_code: Optional[str], original_url: Optional[str]) -> tuple:
    """Return the (column, value) pair for a delete that names exactly one identifier."""
    if bool(short_code) == bool(original_url):
        raise ValueError("Exactly one of short_code or original_url must be given")
    if short_code:
        return "short_code", short_code
    return "original_url", original_url
