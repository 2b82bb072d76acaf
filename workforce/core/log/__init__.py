"""Process-wide logging driven by ``Settings.log_level`` and ``Settings.log_dir``.

Library modules only call ``get_logger``; the first call configures the root
logger from the environment. Scripts and tests call ``init_logging`` with
keyword overrides (``level``, ``log_dir``, ``console``, ``queue``,
``rich_tracebacks``) to replace that configuration.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock
from typing import Optional

from rich.traceback import install as install_rich_traceback

from workforce.core.config import Settings, get_settings

from .context import ContextFilter, log_context
from .handlers import console_handler, file_handler
from .timing import timeit

__all__ = [
    "LoggingConfig",
    "get_logger",
    "init_logging",
    "log_context",
    "shutdown_logging",
    "timeit",
]

ROOT_LOGGER_NAME = "workforce"


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    parsed = logging.getLevelName(str(level).upper())
    if not isinstance(parsed, int):
        raise ValueError(f"Unknown log level {level!r}")
    return parsed


@dataclass(frozen=True)
class LoggingConfig:
    level: int = logging.INFO
    log_dir: Optional[Path] = None
    console: bool = True
    rich_tracebacks: bool = True
    queue: bool = True

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> "LoggingConfig":
        config = cls(level=_parse_level(settings.log_level), log_dir=settings.log_dir)
        if "level" in overrides:
            overrides["level"] = _parse_level(overrides["level"])  # type: ignore[arg-type]
        if overrides.get("log_dir") is not None:
            overrides["log_dir"] = Path(overrides["log_dir"])  # type: ignore[arg-type]
        return replace(config, **overrides)


class _LoggingState:
    """The active configuration plus whatever must be stopped to replace it."""

    def __init__(self) -> None:
        self.lock = RLock()
        self.config: LoggingConfig | None = None
        self.listener: QueueListener | None = None
        self.installed: list[logging.Handler] = []
        self.context_filter = ContextFilter()

    def apply(self, config: LoggingConfig) -> None:
        if config == self.config:
            return
        self.reset()

        if config.rich_tracebacks:
            install_rich_traceback(show_locals=False)

        handlers: list[logging.Handler] = []
        if config.console:
            handlers.append(
                console_handler(config.level, self.context_filter, rich_tracebacks=config.rich_tracebacks)
            )
        if config.log_dir is not None:
            handlers.append(file_handler(config.log_dir, config.level, self.context_filter))

        root = logging.getLogger()
        root.setLevel(config.level)
        if config.queue and handlers:
            # Context is rendered before the record crosses threads.
            queue: SimpleQueue = SimpleQueue()
            front = QueueHandler(queue)
            front.setLevel(config.level)
            front.addFilter(self.context_filter)
            self.installed.append(front)
            self.listener = QueueListener(queue, *handlers, respect_handler_level=True)
            self.listener.start()
        else:
            self.installed.extend(handlers)
        for handler in self.installed:
            root.addHandler(handler)
        self.config = config

    def reset(self) -> None:
        if self.listener is not None:
            self.listener.stop()
            for handler in self.listener.handlers:
                handler.close()
        self.listener = None
        self.config = None
        root = logging.getLogger()
        for handler in self.installed:
            root.removeHandler(handler)
            handler.close()
        self.installed = []


_state = _LoggingState()


def init_logging(**overrides: object) -> LoggingConfig:
    """Configure logging from the current settings plus ``overrides``.

    Calling again with an identical result is a no-op.
    """

    config = LoggingConfig.from_settings(get_settings(), **overrides)
    with _state.lock:
        _state.apply(config)
    return config


def shutdown_logging() -> None:
    """Stop the queue listener and detach the handlers ``init_logging`` added."""

    with _state.lock:
        _state.reset()


def get_logger(name: str | None = None) -> logging.Logger:
    with _state.lock:
        if _state.config is None:
            init_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
