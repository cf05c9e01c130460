#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: each request runs as its own task on the uvicorn event loop
(FastAPI + asyncpg connection pool). The expired-mapping janitor runs as one
background task for the life of the process. Set WORKERS > 1 for
multi-process scaling; each worker then has its own pool, in-process cache
and janitor.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL, or memory:// for an in-process store
    DATABASE_CREATE_TABLES - Create table and unique indexes on startup (default true)
    REDIS_URL - Redis connection URL (optional, in-process cache otherwise)
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    RETENTION_DAYS - Days before a mapping expires (default 7)
    CLEANUP_INTERVAL_SECONDS - Seconds between janitor runs (default 86400)
    REQUEST_TIMEOUT_SECONDS - Per-request deadline (default 10)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager
from datetime import timedelta

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlink.database import create_cache, create_store
from shortlink.janitor import ExpiredURLJanitor
from shortlink.service import URLShortenerService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    # A store that cannot be reached aborts startup
    store = create_store(config, logger=logger)
    await store.connect()

    cache = await create_cache(config, logger=logger)

    generator = ShortCodeGenerator(default_length=config.short_code_length)
    service = URLShortenerService(
        store=store,
        cache=cache,
        short_code_generator=generator,
        logger=logger,
        short_code_length=config.short_code_length,
        retention=timedelta(days=config.retention_days),
    )

    janitor = ExpiredURLJanitor(
        store=store,
        interval_seconds=config.cleanup_interval_seconds,
        logger=logger,
    )
    janitor.start()

    app.state.store = store
    app.state.cache = cache
    app.state.service = service
    app.state.janitor = janitor

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down URL shortener service...")
        await janitor.stop()
        await service.close()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    # Instances are created in the lifespan, once the event loop is running
    app = create_app(
        store_instance=None,
        cache_instance=None,
        service_instance=None,
        config=config,
    )

    app.state.config = config
    app.state.logger = logger

    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
