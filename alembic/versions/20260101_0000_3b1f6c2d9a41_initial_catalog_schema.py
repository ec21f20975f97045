"""initial catalog schema

Revision ID: 3b1f6c2d9a41
Revises:
Create Date: 2026-01-01 00:00:00+00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op
from photo_catalog.core.database.types import StringArray

# revision identifiers, used by Alembic.
revision: str = "3b1f6c2d9a41"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "photos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("file_stem", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=True),
        sa.Column("taken_timestamp", sa.String(length=100), nullable=True),
        sa.Column("height_offset", sa.Integer(), server_default=sa.text("50"), nullable=False),
        sa.Column("tags", StringArray(), nullable=False),
        sa.Column("published", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.CheckConstraint(
            "height_offset >= 0 AND height_offset <= 100",
            name=op.f("ck_photos_height_offset_range"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_photos")),
        sa.UniqueConstraint("file_stem", name=op.f("uq_photos_file_stem")),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_photos_tags", "photos", ["tags"], unique=False, postgresql_using="gin")

    op.create_table(
        "sources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("photo_id", sa.Integer(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=False),
        sa.Column("height", sa.Integer(), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.CheckConstraint("width > 0 AND width < 10000", name=op.f("ck_sources_width_range")),
        sa.CheckConstraint("height > 0 AND height < 10000", name=op.f("ck_sources_height_range")),
        sa.ForeignKeyConstraint(
            ["photo_id"],
            ["photos.id"],
            name=op.f("fk_sources_photo_id_photos"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_sources")),
        sa.UniqueConstraint("photo_id", "width", "height", name=op.f("uq_sources_photo_id")),
        sa.UniqueConstraint("url", name=op.f("uq_sources_url")),
    )
    op.create_index(op.f("ix_sources_photo_id"), "sources", ["photo_id"], unique=False)

    op.create_table(
        "secret_keys",
        sa.Column("secret_key", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("secret_key", name=op.f("pk_secret_keys")),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("secret_keys")
    op.drop_index(op.f("ix_sources_photo_id"), table_name="sources")
    op.drop_table("sources")
    op.drop_index("ix_photos_tags", table_name="photos")
    op.drop_table("photos")
