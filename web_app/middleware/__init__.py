"""Middleware for URL shortener web app."""

from .deadline import DeadlineMiddleware
from .logging import LoggingMiddleware

__all__ = ["DeadlineMiddleware", "LoggingMiddleware"]
