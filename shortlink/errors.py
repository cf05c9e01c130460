"""Exception hierarchy for the URL shortener."""


class ShortlinkError(Exception):
    """Base exception for all application-specific errors."""

    error_code = "app:shortlink_error"


class ValidationError(ShortlinkError):
    """Raised when required input is missing or malformed."""

    error_code = "app:validation_error"


class ConflictError(ShortlinkError):
    """Raised when a mapping would violate a uniqueness rule.

    Covers a taken alias, an already shortened URL, and a duplicate insert
    that lost a race against a concurrent request.
    """

    error_code = "app:conflict_error"


class NotFoundError(ShortlinkError):
    """Raised when no mapping matches the given identifiers."""

    error_code = "app:not_found_error"


class EntropyError(ShortlinkError):
    """Raised when the random source cannot produce a short code."""

    error_code = "app:entropy_error"


class StorageError(ShortlinkError):
    """Raised when the store encounters an I/O or connection failure."""

    error_code = "store:storage_error"


class DuplicateKeyError(StorageError):
    """Raised by a store when a unique index rejects an insert."""

    error_code = "store:duplicate_key_error"
