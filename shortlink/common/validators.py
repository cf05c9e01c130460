"""Validation and normalization utilities for URL shortener."""

import re
from typing import Optional, Tuple


ALIAS_MAX_LENGTH = 64
# Characters that cannot appear unescaped in the /r/{short_code} path segment
_ALIAS_FORBIDDEN = re.compile(r"[/?#%\s\x00-\x1f\x7f]")


def normalize_url(url: str) -> str:
    """Prefix a URL with ``http://`` unless it already names http or https.

    ``www.example.com`` and ``example.com`` both become ``http://...``; the
    input is otherwise stored as given.

    Args:
        url: The URL as submitted

    Returns:
        Normalized URL
    """
    if url.startswith("www."):
        return "http://" + url
    if not url.startswith(("http://", "https://")):
        return "http://" + url
    return url


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Strip a form/query value and turn blank strings into None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def is_valid_alias(alias: str, max_length: int = ALIAS_MAX_LENGTH) -> Tuple[bool, str]:
    """Validate a custom alias.

    Args:
        alias: The alias to validate
        max_length: Maximum length for the alias

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not alias or not isinstance(alias, str):
        return False, "Alias is required"

    if len(alias) > max_length:
        return False, f"Alias must be at most {max_length} characters"

    if _ALIAS_FORBIDDEN.search(alias):
        return False, "Alias cannot contain slashes, whitespace, control characters, or any of ?#%"

    return True, ""
