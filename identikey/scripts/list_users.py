#!/usr/bin/env python3
"""List User Accounts

Prints registered user names from the roster, newest first.

Usage:
    identikey-list-users
    identikey-list-users --offset 50 --limit 50
"""

import argparse
import asyncio
import sys
from typing import Optional

from identikey.config.settings import IdentiKeySettings, get_settings
from identikey.exceptions import IdentiKeyError
from identikey.infrastructure.logging import configure_logging
from identikey.infrastructure.persistence import create_identity_store


async def list_users(offset: int = 0, limit: int = 50, settings: Optional[IdentiKeySettings] = None, store=None) -> bool:
    """Print one page of the roster, returning True on success"""
    store = store or create_identity_store(settings or get_settings())

    try:
        names = await store.list_users(offset=offset, limit=limit)
    except IdentiKeyError as e:
        print(f"❌ {e}")
        return False

    if not names:
        print("No users found.")
        return True

    print(f"{'#':<6} {'USERNAME'}")
    print("-" * 40)
    for idx, name in enumerate(names, offset + 1):
        uid = await store.find_uid(name)
        print(f"{idx:<6} {name}  (uid {uid or '?'})")
    return True


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(description="List IdentiKey user accounts")
    parser.add_argument('--offset', type=int, default=0, help='Number of entries to skip')
    parser.add_argument('--limit', type=int, default=50, help='Maximum entries to print')

    args = parser.parse_args(argv)
    if args.offset < 0:
        parser.error("--offset must be >= 0")

    settings = get_settings()
    configure_logging(settings.logging)

    success = asyncio.run(list_users(args.offset, args.limit, settings))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
