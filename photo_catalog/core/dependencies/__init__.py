"""FastAPI dependencies shared across features."""

from .database import DbSessionDep, get_db_session

__all__ = ["DbSessionDep", "get_db_session"]
