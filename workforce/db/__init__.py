"""Database helpers and SQLAlchemy session factories."""

from .engine import create_sync_engine, get_sqlalchemy_url
from .schema import create_schema, drop_schema
from .session import get_sessionmaker, session_scope

__all__ = [
    "create_schema",
    "create_sync_engine",
    "drop_schema",
    "get_sessionmaker",
    "get_sqlalchemy_url",
    "session_scope",
]
