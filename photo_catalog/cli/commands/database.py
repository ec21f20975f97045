"""Database management commands.

Example:bash
    # Check connectivity
    photo-catalog db check

    # Apply all pending migrations (PostgreSQL)
    photo-catalog db upgrade

    # Create tables directly (local SQLite)
    photo-catalog db create-schema
"""

import sys
from pathlib import Path

import click
from sqlalchemy.exc import SQLAlchemyError

from photo_catalog.cli.utils import coro, error, info, success
from photo_catalog.utils.retry import RetryError

ALEMBIC_INI = Path(__file__).resolve().parents[3] / "alembic.ini"


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def check() -> None:
    """Verify database connectivity."""
    from photo_catalog.infra.database import close_database, init_database

    info("Checking database connection...")
    try:
        await init_database()
    except RetryError as e:
        error(f"Failed to connect to database: {e.last_exception}")
        sys.exit(1)
    finally:
        await close_database()
    success("Database connected successfully")


@db.command("create-schema")
@coro
async def create_schema() -> None:
    """Create catalog tables that do not exist yet."""
    from photo_catalog.infra.database import close_database
    from photo_catalog.infra.database import create_schema as _create_schema

    try:
        await _create_schema()
    except SQLAlchemyError as e:
        error(f"Schema creation failed: {e}")
        sys.exit(1)
    finally:
        await close_database()
    success("Schema created")


@db.command()
@click.option("--revision", default="head", show_default=True, help="Target revision")
def upgrade(revision: str) -> None:
    """Apply Alembic migrations."""
    from alembic import command
    from alembic.config import Config

    if not ALEMBIC_INI.exists():
        error(f"alembic.ini not found at {ALEMBIC_INI}")
        sys.exit(1)

    info(f"Upgrading database to {revision}...")
    command.upgrade(Config(str(ALEMBIC_INI)), revision)
    success("Migrations applied")
