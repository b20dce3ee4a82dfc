"""
Command-line interface for URL shortener.

Usage:
    shortener-cli create <url>
    shortener-cli get <short_code>
    shortener-cli get --id <id>
    shortener-cli list
    shortener-cli init-db
    shortener-cli health
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from .app import build_registry
from .config import load_config
from .lib.common.logging_config import setup_logging
from .lib.errors import ShortenerError


class ShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, database_url: str, redis_url: Optional[str] = None, verbose: bool = False):
        self.config = load_config().model_copy(
            update={"database_url": database_url, "redis_url": redis_url}
        )
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.registry = None

    async def initialize(self, create_tables: bool = False):
        """Initialize store and registry."""
        if create_tables:
            self.config = self.config.model_copy(update={"create_tables": True})
        self.registry = await build_registry(self.config, self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.registry:
            await self.registry.close()

    def _print_error(self, error: Exception) -> int:
        print(json.dumps({"success": False, "error": str(error)}, indent=2), file=sys.stderr)
        return 1

    async def create(self, url: str) -> int:
        """Create a short code for a URL."""
        try:
            record = await self.registry.create(url)
        except ShortenerError as e:
            return self._print_error(e)

        print(json.dumps({"success": True, **record.to_dict()}, indent=2))
        return 0

    async def get(self, key: str, by_id: bool = False) -> int:
        """Resolve a short code (or an id) to its record."""
        try:
            if by_id:
                record = await self.registry.get_by_id(key)
            else:
                record = await self.registry.get_by_token(key)
        except ShortenerError as e:
            return self._print_error(e)

        print(json.dumps({"success": True, **record.to_dict()}, indent=2))
        return 0

    async def list_urls(self) -> int:
        """List all records."""
        try:
            records = await self.registry.list_all()
        except ShortenerError as e:
            return self._print_error(e)

        print(json.dumps({
            "success": True,
            "count": len(records),
            "urls": [record.to_dict() for record in records],
        }, indent=2))
        return 0

    async def health(self) -> int:
        """Check store and cache health."""
        health_status = await self.registry.health_check()

        print(json.dumps({"success": health_status["overall"], "health": health_status}, indent=2))
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    config = load_config()

    parser = argparse.ArgumentParser(
        prog="shortener-cli",
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s create https://example.com/long/url
  %(prog)s get 3f2a9c1b7d4e
  %(prog)s get --id 01927c5e-8d1a-7b3e-9f10-5c2d3e4f5a6b
  %(prog)s list
  %(prog)s init-db
        """
    )

    parser.add_argument(
        "--database-url",
        default=config.database_url,
        help="Database URL (default: DATABASE_URL env or local PostgreSQL)"
    )
    parser.add_argument(
        "--redis-url",
        default=config.redis_url,
        help="Redis connection URL (optional, default: REDIS_URL env)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    create_parser = subparsers.add_parser("create", help="Shorten a URL")
    create_parser.add_argument("url", help="URL to shorten")

    get_parser = subparsers.add_parser("get", help="Look up a record")
    get_parser.add_argument("key", help="Short code (or id with --id)")
    get_parser.add_argument("--id", dest="by_id", action="store_true", help="Look up by internal id")

    subparsers.add_parser("list", help="List all records")
    subparsers.add_parser("init-db", help="Create the url table")
    subparsers.add_parser("health", help="Check store health")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = ShortenerCLI(
        database_url=args.database_url,
        redis_url=args.redis_url,
        verbose=args.verbose,
    )

    try:
        await cli.initialize(create_tables=args.command == "init-db")

        if args.command == "create":
            return await cli.create(args.url)
        elif args.command == "get":
            return await cli.get(args.key, by_id=args.by_id)
        elif args.command == "list":
            return await cli.list_urls()
        elif args.command in ("init-db", "health"):
            return await cli.health()
        else:
            parser.print_help()
            return 1
    except ShortenerError as e:
        return cli._print_error(e)
    finally:
        await cli.cleanup()


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
