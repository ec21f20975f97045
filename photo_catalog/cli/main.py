"""Main CLI entry point for photo-catalog management commands."""

import click

from photo_catalog.cli.commands import database, keys, server
from photo_catalog.infra.logging import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="photo-catalog")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Photo Catalog CLI - management commands for the catalog service.

    \b
    Command Groups:
      db         Database connectivity, schema and migrations
      keys       Secret keys that unlock unpublished photos and writes
      server     Run the API server

    \b
    Quick Start:
      photo-catalog db upgrade          # Apply migrations
      photo-catalog keys add            # Create an API key
      photo-catalog server run          # Serve the API
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(keys.keys)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
