"""Shared helpers for read-only repositories."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import Select
from sqlalchemy.orm import Session

from workforce.core.logger import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")


class BaseRepository:
    """Base repository providing execution and conversion helpers.

    Repositories hold no session of their own; every call receives the
    caller's unit of work and leaves opening and closing it to the caller.
    """

    @staticmethod
    def _fetch_all(session: Session, statement: Select[tuple[T]], *, label: str) -> list[T]:
        """Execute ``statement`` and return the first column of every row."""

        rows: Sequence[T] = session.scalars(statement).all()
        LOGGER.debug("%s returned %d rows", label, len(rows))
        return list(rows)

    @staticmethod
    def _fetch_rows(session: Session, statement: Select[Any], *, label: str) -> list[Any]:
        rows = session.execute(statement).all()
        LOGGER.debug("%s returned %d rows", label, len(rows))
        return list(rows)

    @staticmethod
    def _to_optional_float(value: Any) -> float | None:
        if value is None:
            return None
        return float(value)
