"""Handler factories for console and file output."""
from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .context import ContextFilter

LOG_FILE_NAME = "workforce.log"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s"


def console_handler(level: int, context_filter: ContextFilter, *, rich_tracebacks: bool) -> RichHandler:
    """Rich stderr handler; bound context is prefixed to the message."""

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=rich_tracebacks,
        show_path=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
    handler.addFilter(context_filter)
    return handler


def file_handler(log_dir: Path, level: int, context_filter: ContextFilter) -> TimedRotatingFileHandler:
    """``<log_dir>/workforce.log`` rolled over at midnight, two weeks kept."""

    log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        log_dir / LOG_FILE_NAME, when="midnight", backupCount=14, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(context_filter)
    return handler
