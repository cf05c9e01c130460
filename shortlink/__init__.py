"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService
from .janitor import ExpiredURLJanitor

__all__ = ["ShortCodeGenerator", "URLShortenerService", "ExpiredURLJanitor"]
