"""SQLAlchemy model for API secret keys."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from photo_catalog.core.database import Base


class SecretKey(Base):
    """A key that unlocks unpublished photos and write access."""

    __tablename__ = "secret_keys"

    secret_key: Mapped[str] = mapped_column(String(255), primary_key=True)

    def __repr__(self) -> str:
        # Never log the key itself.
        return f"<SecretKey({self.secret_key[:4]}…)>"
