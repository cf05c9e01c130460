"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class URLMapping:
    """Represents a short code to original URL mapping in the store.

    Mappings are immutable once created. ``expiration_date`` may be missing
    on records written by older deployments; such records never expire.
    """

    short_code: str
    original_url: str
    created_at: datetime
    expiration_date: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Whether the mapping is logically dead at ``now``."""
        if self.expiration_date is None:
            return False
        return self.expiration_date < _as_utc(now)

    def to_dict(self) -> dict:
        """Convert to the persisted record layout."""
        return {
            "short_code": self.short_code,
            "original_url": self.original_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "expiration_date": self.expiration_date.isoformat() if self.expiration_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "URLMapping":
        """Create from a persisted record (dict, asyncpg Record, or the output of ``to_dict``)."""
        created_at = data["created_at"]
        if not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)

        expiration_date = data.get("expiration_date")
        if expiration_date is not None and not isinstance(expiration_date, datetime):
            expiration_date = datetime.fromisoformat(expiration_date)

        return cls(
            short_code=data["short_code"],
            original_url=data["original_url"],
            created_at=_as_utc(created_at),
            expiration_date=_as_utc(expiration_date),
        )
