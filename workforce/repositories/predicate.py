"""Composition of optional filter criteria into one SQL boolean expression."""
from __future__ import annotations

from collections.abc import Callable, Collection
from typing import Any, TypeVar

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

T = TypeVar("T")

PredicateFactory = Callable[[T], ColumnElement[bool]]


def _is_absent(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, Collection)):
        return len(value) == 0
    return False


class PredicateBuilder:
    """Collects predicates for the criteria that were actually supplied.

    ``add`` skips ``None`` and empty values without calling the factory, so
    call sites chain every optional criterion unconditionally::

        predicate = (
            PredicateBuilder()
            .add(filter.first_name, lambda value: User.firstname == value)
            .add(filter.last_name, lambda value: User.lastname == value)
            .build_and()
        )

    With nothing registered both ``build_and`` and ``build_or`` return
    ``true()``, so the result can always be passed to ``where``. A builder is
    meant for a single statement and is not safe to share between threads.
    """

    def __init__(self) -> None:
        self._predicates: list[ColumnElement[bool]] = []

    @property
    def predicates(self) -> tuple[ColumnElement[bool], ...]:
        """Registered predicates in insertion order."""

        return tuple(self._predicates)

    def add(self, value: T | None, factory: PredicateFactory[T]) -> "PredicateBuilder":
        if not _is_absent(value):
            self._predicates.append(factory(value))
        return self

    def build_and(self) -> ColumnElement[bool]:
        if not self._predicates:
            return true()
        return and_(*self._predicates)

    def build_or(self) -> ColumnElement[bool]:
        if not self._predicates:
            return true()
        return or_(*self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)
