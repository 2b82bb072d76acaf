"""Database engine factories."""
from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from workforce.core.config import get_settings
from workforce.core.logger import get_logger

LOGGER = get_logger(__name__)


def get_sqlalchemy_url() -> str:
    """Return the configured SQLAlchemy URL."""

    settings = get_settings()
    return settings.database.sqlalchemy_url


def _enable_case_sensitive_like(dbapi_connection, connection_record) -> None:
    # SQLite's LIKE ignores ASCII case unless told otherwise.
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA case_sensitive_like = ON")
        cursor.execute("PRAGMA foreign_keys = ON")
    finally:
        cursor.close()


def create_sync_engine(url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine using configured defaults."""

    settings = get_settings()
    resolved_url = url or settings.database.sqlalchemy_url

    options = dict(kwargs)
    options.setdefault("echo", settings.sqlalchemy_echo)

    LOGGER.debug(
        "Creating SQLAlchemy engine",
        extra={"url": resolved_url if url else settings.database.masked_url, "options": options},
    )
    engine = create_engine(resolved_url, **options)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_case_sensitive_like)
    return engine
