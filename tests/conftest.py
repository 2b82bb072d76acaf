"""Shared fixtures: a fresh in-memory SQLite database per test."""
from __future__ import annotations

from datetime import date
from typing import Callable, Iterator, Sequence

import pytest

from workforce.core.logger import init_logging

# Quiet, file-less logging before any module grabs a logger.
init_logging(log_dir=None, console=False, queue=False, rich_tracebacks=False)

from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from workforce.db import create_schema, create_sync_engine, get_sessionmaker, session_scope  # noqa: E402
from workforce.etl import import_sample_data  # noqa: E402
from workforce.models import Birthday, Company, Payment, Role, User  # noqa: E402
from workforce.repositories import UserRepository  # noqa: E402


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_sync_engine("sqlite://", echo=False)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with session_scope(get_sessionmaker(engine=engine)) as session:
        yield session


@pytest.fixture
def sample_session(session: Session) -> Session:
    import_sample_data(session)
    return session


@pytest.fixture
def repository() -> UserRepository:
    return UserRepository()


@pytest.fixture
def make_user(session: Session) -> Callable[..., User]:
    """Create and flush a user with the given payments."""

    counter = iter(range(1, 10_000))

    def _make_user(
        firstname: str,
        lastname: str = "Doe",
        *,
        username: str | None = None,
        payments: Sequence[int] = (),
        company: Company | None = None,
        birth_date: date | None = None,
        role: Role = Role.USER,
    ) -> User:
        user = User(
            username=username or f"{firstname}{lastname}{next(counter)}",
            firstname=firstname,
            lastname=lastname,
            birth_date=Birthday(birth_date) if birth_date else None,
            role=role,
            company=company,
        )
        user.payments = [Payment(amount=amount) for amount in payments]
        session.add(user)
        session.flush()
        return user

    return _make_user
