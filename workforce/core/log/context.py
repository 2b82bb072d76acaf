"""Per-task key/value pairs that prefix every log line emitted inside a block."""
from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator, Mapping

_bound: contextvars.ContextVar[Mapping[str, object]] = contextvars.ContextVar(
    "workforce_log_context", default={}
)


class LogContext:
    @contextmanager
    def scoped(self, **values: object) -> Iterator[None]:
        """Add ``values`` (``None`` ones dropped) until the block exits."""

        merged = {**_bound.get(), **{k: v for k, v in values.items() if v is not None}}
        token = _bound.set(merged)
        try:
            yield
        finally:
            _bound.reset(token)

    def as_dict(self) -> dict[str, object]:
        return dict(_bound.get())


class ContextFilter(logging.Filter):
    """Stores the bound pairs as ``record.context`` (``"k=v "`` or empty)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = "".join(f"{k}={v} " for k, v in _bound.get().items())
        return True


log_context = LogContext()
