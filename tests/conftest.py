"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from httpx import ASGITransport, AsyncClient

from config import Config
from shortlink.database.cache import MemoryCache
from shortlink.database.memory import InMemoryURLStore
from shortlink.service import URLShortenerService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from web_app import create_app


class FakeClock:
    """Settable clock; call it to read the current time."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(logger):
    return InMemoryURLStore(logger=logger)


@pytest.fixture
def cache(logger):
    return MemoryCache(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=8)


@pytest.fixture
def service(store, cache, short_code_generator, logger, clock) -> URLShortenerService:
    """Create service instance over the in-memory store."""
    return URLShortenerService(
        store=store,
        cache=cache,
        short_code_generator=short_code_generator,
        logger=logger,
        clock=clock,
    )


@pytest.fixture
def config():
    return Config(database_url="memory://", redis_url=None)


@pytest.fixture
def app(store, cache, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        cache_instance=cache,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
