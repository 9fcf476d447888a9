#!/usr/bin/env python3
"""
KV-Helpers Command Line

Small admin tool over the Redis access layer.

Usage:
    python -m kv_helpers.cli info                    # Server INFO
    python -m kv_helpers.cli get visits              # Read a data key
    python -m kv_helpers.cli set visits 10 --ttl 60  # Write a data key
    python -m kv_helpers.cli keys "example.com*"     # List data keys
    python -m kv_helpers.cli clean "example.com*"    # Delete data keys

Environment Variables:
    REDIS_HOST          - Redis host
    REDIS_PORT          - Redis port
    REDIS_URL           - Redis URL (wins over host/port)
    KV_HELPERS_PREFIX   - Data key prefix
    KV_HELPERS_DEBUG    - Enable debug mode (true/false)
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from redis.exceptions import RedisError

from .cache.store import RedisStore
from .config.settings import settings
from .exceptions import KVHelpersError

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="KV-Helpers: Redis key-value helpers",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("--host", type=str, default=settings.HOST, help="Redis host")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Redis port")
    parser.add_argument("--url", type=str, default=settings.URL, help="Redis URL")
    parser.add_argument("--prefix", type=str, default=settings.DATA_PREFIX, help="Data key prefix")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    get_cmd = commands.add_parser("get", help="Read a data key")
    get_cmd.add_argument("key")

    set_cmd = commands.add_parser("set", help="Write a data key")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")
    set_cmd.add_argument("--ttl", type=int, default=0, help="Lifetime in seconds (0 = none)")

    keys_cmd = commands.add_parser("keys", help="List data keys matching a pattern")
    keys_cmd.add_argument("pattern")

    clean_cmd = commands.add_parser("clean", help="Delete data keys matching a pattern")
    clean_cmd.add_argument("pattern")

    commands.add_parser("info", help="Show server info")

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug or settings.DEBUG else settings.LOG_LEVEL.upper()

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


async def run(args: argparse.Namespace, store: RedisStore) -> List[str]:
    """Execute one command and return the lines to print."""
    try:
        await store.initialize({
            "host": args.host,
            "port": args.port,
            "url": args.url,
            "data_prefix": args.prefix,
        })
        if args.command == "get":
            return [repr(await store.get_value(args.key))]
        if args.command == "set":
            stored = await store.set_value(args.key, args.value, args.ttl or None)
            return ["OK" if stored else "NOT STORED"]
        if args.command == "keys":
            return await store.get_keys_by_pattern(args.pattern, clean=True)
        if args.command == "clean":
            return [f"deleted {await store.clean_by_key_pattern(args.pattern)}"]
        info = await store.get_info()
        return [f"{name}: {value}" for name, value in info.items()]
    finally:
        await store.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    logger.debug(f"Running {args.command} against {args.url or f'{args.host}:{args.port}'}")

    try:
        lines = asyncio.run(run(args, RedisStore()))
    except (RedisError, KVHelpersError, ValueError) as e:
        logger.error(f"Command failed: {e}")
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
