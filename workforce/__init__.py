"""Read-only query layer over companies, users, payments and chats."""

from .core import get_logger, get_settings

__all__ = ["get_logger", "get_settings"]
