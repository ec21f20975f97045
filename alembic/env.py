"""Alembic migration environment with async psycopg3 support.

Enhanced with:
- compare_type support for detecting column type changes
- Batch mode auto-detection for SQLite compatibility
- StringArray rendering for the photos.tags column
- Object filtering to exclude system tables
- Empty migration detection to skip no-op revisions
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig
from typing import TYPE_CHECKING, Any

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context
from photo_catalog.core.database.base import Base
from photo_catalog.core.database.types import StringArray
from photo_catalog.core.settings import get_db_settings

# Register mapped classes on Base.metadata
from photo_catalog.features.photos import models as _photo_models  # noqa: F401
from photo_catalog.features.secret_keys import models as _key_models  # noqa: F401

if TYPE_CHECKING:
    from collections.abc import Iterable

    from alembic.autogenerate.api import AutogenContext
    from alembic.operations.ops import MigrationScript
    from alembic.runtime.migration import MigrationContext
    from sqlalchemy.engine import Connection

# Alembic Config object
config = context.config

# Setup Python logging from alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# Target metadata for autogenerate
target_metadata = Base.metadata

# Override URL from settings
db_settings = get_db_settings()
if db_settings.is_configured:
    config.set_main_option("sqlalchemy.url", db_settings.url.replace("%", "%%"))


def include_object(
    obj: Any,
    name: str | None,
    type_: str,
    reflected: bool,
    compare_to: Any,
) -> bool:
    """Skip alembic's own table and PostgreSQL system schemas."""
    _ = reflected, compare_to
    if type_ == "table" and name == "alembic_version":
        return False
    return not (hasattr(obj, "schema") and obj.schema in ("pg_catalog", "information_schema"))


def render_item(type_: str, obj: Any, autogen_context: AutogenContext) -> str | bool:
    """Render StringArray with its import so revisions stay importable."""
    if type_ == "type" and isinstance(obj, StringArray):
        autogen_context.imports.add("from photo_catalog.core.database.types import StringArray")
        return "StringArray()"
    return False


def process_revision_directives(
    context: MigrationContext,
    revision: str | tuple[str, ...] | Iterable[str | None] | Iterable[str],
    directives: list[MigrationScript],
) -> None:
    """Skip creating a revision when autogenerate detects no changes."""
    _ = context, revision
    if getattr(config.cmd_opts, "autogenerate", False) and directives:
        script = directives[0]
        if script.upgrade_ops is not None and script.upgrade_ops.is_empty():
            directives[:] = []
            print("No changes detected, skipping migration creation")


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (generate SQL only)."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        include_object=include_object,
        render_item=render_item,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Configure and run migrations on ``connection`` (batch mode on SQLite)."""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        include_object=include_object,
        render_item=render_item,
        render_as_batch=connection.dialect.name == "sqlite",
        process_revision_directives=process_revision_directives,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations with an async engine built from the Alembic config."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
