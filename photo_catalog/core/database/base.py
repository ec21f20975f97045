"""Declarative base for catalog models.

Provides:
- Consistent constraint naming via NAMING_CONVENTION
- IntegerPKMixin for auto-assigned, monotonically increasing ids

Example:
    class Photo(Base, IntegerPKMixin):
        __tablename__ = "photos"
        file_stem: Mapped[str] = mapped_column(String, unique=True)
"""

from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

# Consistent naming convention for database constraints
# Ensures predictable names for migrations and schema management
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with naming convention and default table names.

    The automatic table naming can be overridden by setting __tablename__
    explicitly on the model class.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Auto-derive table name from class name (lowercase)."""
        return cls.__name__.lower()


class IntegerPKMixin:
    """Integer auto-increment primary key.

    Ids are assigned by the store on insert and never reused.

    Provides:
        id: Auto-incrementing integer primary key
    """

    __allow_unmapped__ = True

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )


__all__ = ["NAMING_CONVENTION", "Base", "IntegerPKMixin"]
