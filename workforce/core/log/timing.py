"""Timing helpers to log duration and throughput of operations."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional

from sqlalchemy.orm import Session

_TRACKED_METHODS = ("execute", "scalar", "scalars")


class DatabaseCallTracker:
    """Counts ``execute``/``scalar``/``scalars`` calls made on a session."""

    def __init__(self) -> None:
        self.call_count = 0
        self._session: Session | None = None
        self._originals: dict[str, object] = {}

    def attach(self, session: Session) -> None:
        if self._session is not None:
            raise RuntimeError("tracker is already attached to a session")
        self._session = session
        for name in _TRACKED_METHODS:
            original = getattr(session, name)
            self._originals[name] = original
            setattr(session, name, self._wrap(original))

    def detach(self) -> None:
        if self._session is None:
            return
        # Drop the instance attributes so the class methods show through again.
        for name in self._originals:
            self._session.__dict__.pop(name, None)
        self._originals.clear()
        self._session = None

    def _wrap(self, method):
        def tracked(*args, **kwargs):
            self.call_count += 1
            return method(*args, **kwargs)

        return tracked


@dataclass
class _Timer:
    label: str
    logger: logging.Logger
    level: int
    unit: str
    expected_total: Optional[int]
    count: int = 0
    start: float = field(default_factory=perf_counter)
    db_call_tracker: Optional[DatabaseCallTracker] = None

    def add(self, amount: int = 1) -> None:
        self.count += amount

    def set_total(self, total: int) -> None:
        self.expected_total = total

    def _resolved_total(self) -> Optional[int]:
        return self.expected_total if self.expected_total is not None else self.count

    @property
    def db_calls(self) -> int:
        return self.db_call_tracker.call_count if self.db_call_tracker else 0

    def finish(self, success: bool = True) -> None:
        elapsed = perf_counter() - self.start
        total = self._resolved_total()

        if success:
            message = f"{self.label} completed in {elapsed:.2f}s"
            if total is not None:
                message += f" ({total:,} {self.unit}"
                if elapsed > 0 and total:
                    rate = total / elapsed
                    message += f" @ {rate:,.0f} {self.unit}/s"
                message += ")"
            if self.db_call_tracker is not None:
                message += f" ({self.db_calls:,} DB calls)"
            self.logger.log(self.level, message)
        else:
            fail_message = f"{self.label} failed after {elapsed:.2f}s"
            if total:
                fail_message += f" ({total:,} {self.unit})"
            if self.db_call_tracker is not None:
                fail_message += f" ({self.db_calls:,} DB calls)"
            self.logger.error(fail_message)


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    unit: str = "rows",
    total: Optional[int] = None,
    session: Optional[Session] = None,
) -> Iterator[_Timer]:
    """Time the wrapped block and log the outcome.

    Args:
        label: Description of the operation being timed
        logger: Logger instance to use (defaults to "workforce.timer")
        level: Logging level for the success message
        unit: Unit for throughput calculation (e.g., "rows", "users")
        total: Expected total count for throughput calculation
        session: When given, database calls made on it inside the block are counted
    """
    log = logger or logging.getLogger("workforce.timer")
    tracker = DatabaseCallTracker() if session is not None else None
    timer = _Timer(
        label=label,
        logger=log,
        level=level,
        unit=unit,
        expected_total=total,
        db_call_tracker=tracker,
    )

    if tracker is not None:
        tracker.attach(session)
    try:
        yield timer
    except Exception:
        timer.finish(success=False)
        raise
    else:
        timer.finish(success=True)
    finally:
        if tracker is not None:
            tracker.detach()
