"""Opinionated SQLAlchemy session helpers."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .engine import create_sync_engine


def get_sessionmaker(
    url: str | None = None, *, engine: Engine | None = None, **kwargs
) -> sessionmaker[Session]:
    """Return a ``sessionmaker`` bound to ``engine`` or a freshly created one."""

    bind = engine if engine is not None else create_sync_engine(url, **kwargs)
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(
    factory: sessionmaker[Session] | None = None,
    *,
    commit: bool = False,
) -> Iterator[Session]:
    """Provide a unit of work that is always closed on exit.

    Read callers leave ``commit`` off; loaders pass ``commit=True`` so the
    session is committed when the block completes without error.
    """

    Session_ = factory or get_sessionmaker()
    session = Session_()
    try:
        yield session
        if commit:
            session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
