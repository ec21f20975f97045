"""Custom column types."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from sqlalchemy import String, Text, TypeDecorator
from sqlalchemy.dialects.postgresql import ARRAY

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect
    from sqlalchemy.sql.type_api import TypeEngine


class StringArray(TypeDecorator):
    """Cross-database type for ordered string arrays.

    Uses native ``VARCHAR[]`` in PostgreSQL and a JSON-encoded Text column
    elsewhere (SQLite in tests). Element order is preserved either way.
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        """Return native ARRAY for Postgres, Text for other dialects."""
        if dialect.name == "postgresql":
            return dialect.type_descriptor(ARRAY(String))
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> Any:
        """Serialize the array before binding to the database."""
        if value is None:
            return value
        if dialect.name == "postgresql":
            return list(value)
        return json.dumps(list(value))

    def process_result_value(self, value: Any, dialect: Dialect) -> list[str]:
        """Deserialize the stored array back into Python list."""
        if value is None:
            return []
        if dialect.name == "postgresql":
            return list(value)
        return json.loads(value) if value else []


__all__ = ["StringArray"]
