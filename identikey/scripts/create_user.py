#!/usr/bin/env python3
"""Create New User Account

Registers a user in the identity store and prints the issued token.

Usage:
    # Prompt for the password
    identikey-create-user --username alice

    # Non-interactive
    identikey-create-user --username alice --password secret
"""

import argparse
import asyncio
import getpass
import sys
from typing import Optional

from identikey.config.settings import IdentiKeySettings, get_settings
from identikey.exceptions import IdentiKeyError
from identikey.infrastructure.logging import configure_logging
from identikey.infrastructure.persistence import create_identity_store
from identikey.services import AuthService


async def create_user(username: str, password: str, settings: Optional[IdentiKeySettings] = None, store=None) -> bool:
    """Register a user, returning True on success"""
    settings = settings or get_settings()
    store = store or create_identity_store(settings)
    service = AuthService(store, settings.security)

    print(f"Creating user '{username}'...")
    try:
        session = await service.register(username, password)
    except IdentiKeyError as e:
        print(f"❌ {e}")
        return False

    print("✅ User created successfully!")
    print()
    print("User Details:")
    print(f"  UID: {session.uid}")
    print(f"  Username: {session.name}")
    print(f"  Token: {session.token}")
    return True


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(description="Create a new IdentiKey user account")
    parser.add_argument('--username', '-u', required=True, help='Username')
    parser.add_argument('--password', '-p', help='Password (prompted if omitted)')

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.logging)

    password = args.password
    if password is None:
        password = getpass.getpass("Password: ")
        if password != getpass.getpass("Confirm password: "):
            print("❌ Passwords do not match")
            sys.exit(1)

    success = asyncio.run(create_user(args.username, password, settings))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
