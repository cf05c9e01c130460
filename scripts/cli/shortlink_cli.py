#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Works directly against the store, bypassing the HTTP server.

Usage:
    python shortlink_cli.py shorten <url> [--alias ALIAS]
    python shortlink_cli.py resolve <short_code>
    python shortlink_cli.py check [--url URL] [--alias ALIAS]
    python shortlink_cli.py delete [--url URL] [--short-code CODE]
    python shortlink_cli.py purge-expired
    python shortlink_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from datetime import timedelta
from typing import Optional

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import Config
from shortlink.database import create_cache, create_store
from shortlink.errors import NotFoundError, ShortlinkError
from shortlink.janitor import ExpiredURLJanitor
from shortlink.service import URLShortenerService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging


def _print_success(payload: dict) -> int:
    print(json.dumps({"success": True, **payload}, indent=2, default=str))
    return 0


def _print_error(message: str) -> int:
    print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)
    return 1


class ShortlinkCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, config: Config, verbose: bool = False):
        """Initialize CLI."""
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store = None
        self.service = None

    async def initialize(self):
        """Initialize store and service."""
        self.store = create_store(self.config, logger=self.logger)
        await self.store.connect()

        cache = await create_cache(self.config, logger=self.logger)

        self.service = URLShortenerService(
            store=self.store,
            cache=cache,
            short_code_generator=ShortCodeGenerator(self.config.short_code_length),
            logger=self.logger,
            short_code_length=self.config.short_code_length,
            retention=timedelta(days=self.config.retention_days),
        )

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()
        elif self.store:
            await self.store.close()

    async def shorten(self, url: str, alias: Optional[str] = None):
        """Shorten a URL."""
        try:
            result = await self.service.shorten(url, alias)
        except ShortlinkError as e:
            return _print_error(str(e))

        return _print_success({
            "shortCode": result["short_code"],
            "originalURL": result["original_url"],
        })

    async def resolve(self, short_code: str):
        """Get original URL for a short code."""
        try:
            original_url = await self.service.resolve(short_code)
        except ShortlinkError as e:
            return _print_error(str(e))

        return _print_success({"shortCode": short_code, "originalURL": original_url})

    async def check(self, url: Optional[str], alias: Optional[str]):
        """Report whether a mapping exists for a URL and/or alias."""
        try:
            mapping = await self.service.lookup(short_code=alias, original_url=url)
        except NotFoundError:
            return _print_success({"exists": False})
        except ShortlinkError as e:
            return _print_error(str(e))

        return _print_success({"exists": True, "mapping": mapping.to_dict()})

    async def delete(self, url: Optional[str], short_code: Optional[str]):
        """Delete a mapping by URL or short code."""
        try:
            mapping = await self.service.delete(short_code=short_code, original_url=url)
        except ShortlinkError as e:
            return _print_error(str(e))

        return _print_success({"deleted": mapping.to_dict()})

    async def purge_expired(self):
        """Run one janitor cycle."""
        janitor = ExpiredURLJanitor(self.store, logger=self.logger)
        try:
            deleted = await janitor.run_once()
        except ShortlinkError as e:
            return _print_error(str(e))

        return _print_success({"deleted": deleted})

    async def health(self):
        """Check service health."""
        health_status = await self.service.health_check()
        print(json.dumps({"success": health_status["overall"], "health": health_status}, indent=2))
        return 0 if health_status["overall"] else 1


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten example.com/long/url

  # Shorten with a custom alias
  %(prog)s shorten example.com/long/url --alias promo

  # Resolve a short code
  %(prog)s resolve promo

  # Delete by short code
  %(prog)s delete --short-code promo

  # Remove expired mappings now
  %(prog)s purge-expired
        """
    )

    parser.add_argument(
        "--db-url",
        default=None,
        help="Store connection URL (default: from DATABASE_URL env or config)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--alias", help="Custom alias")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL")
    resolve_parser.add_argument("short_code", help="Short code to lookup")

    check_parser = subparsers.add_parser("check", help="Check whether a URL or alias exists")
    check_parser.add_argument("--url", help="Original URL")
    check_parser.add_argument("--alias", help="Short code")

    delete_parser = subparsers.add_parser("delete", help="Delete a mapping")
    delete_parser.add_argument("--url", help="Original URL")
    delete_parser.add_argument("--short-code", help="Short code")

    subparsers.add_parser("purge-expired", help="Delete expired mappings now")
    subparsers.add_parser("health", help="Check service health")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    overrides = {"database_url": args.db_url} if args.db_url else {}
    cli = ShortlinkCLI(config=Config(**overrides), verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url, args.alias)
        elif args.command == "resolve":
            return await cli.resolve(args.short_code)
        elif args.command == "check":
            return await cli.check(args.url, args.alias)
        elif args.command == "delete":
            return await cli.delete(args.url, args.short_code)
        elif args.command == "purge-expired":
            return await cli.purge_expired()
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    except ShortlinkError as e:
        return _print_error(str(e))

    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
