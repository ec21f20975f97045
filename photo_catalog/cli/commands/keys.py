"""Secret key management commands.

Example:bash
    photo-catalog keys add            # generate and store a new key
    photo-catalog keys add my-key     # store a chosen key
    photo-catalog keys revoke my-key
"""

import secrets
import sys

import click

from photo_catalog.cli.utils import coro, error, info, success, warning
from photo_catalog.core.database import StorageError


@click.group(name="keys")
def keys() -> None:
    """Secret key management commands."""


@keys.command()
@click.argument("key", required=False)
@coro
async def add(key: str | None) -> None:
    """Store a secret key (generated when KEY is omitted)."""
    from photo_catalog.features.secret_keys import get_secret_key_repository
    from photo_catalog.infra.database import close_database, get_async_session

    key = key or secrets.token_urlsafe(32)
    try:
        async with get_async_session() as session:
            added = await get_secret_key_repository().add(session, key)
    except StorageError as e:
        error(f"Could not store key: {e}")
        sys.exit(1)
    finally:
        await close_database()

    if added:
        success("Secret key stored")
        click.echo(key)
    else:
        warning("Secret key already exists")


@keys.command()
@click.argument("key")
@coro
async def revoke(key: str) -> None:
    """Remove a secret key."""
    from photo_catalog.features.secret_keys import get_secret_key_repository
    from photo_catalog.infra.database import close_database, get_async_session

    try:
        async with get_async_session() as session:
            removed = await get_secret_key_repository().remove(session, key)
    except StorageError as e:
        error(f"Could not revoke key: {e}")
        sys.exit(1)
    finally:
        await close_database()

    if removed:
        success("Secret key revoked")
    else:
        info("No such key")
