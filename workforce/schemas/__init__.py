"""Schema definitions exchanged with catalog callers."""

from .filters import PaymentFilter, UserFilter

__all__ = ["PaymentFilter", "UserFilter"]
