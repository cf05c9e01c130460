"""Common utilities for URL shortener."""

from .validators import normalize_url, is_valid_alias, clean_optional
from .logging_config import setup_logging, get_logger

__all__ = [
    "normalize_url",
    "is_valid_alias",
    "clean_optional",
    "setup_logging",
    "get_logger",
]
