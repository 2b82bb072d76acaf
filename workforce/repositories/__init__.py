"""Read-only repositories and the predicate builder they share."""

from .predicate import PredicateBuilder
from .user_repository import (
    CompanyAveragePayment,
    UserAveragePayment,
    UserChatRow,
    UserRepository,
)

__all__ = [
    "CompanyAveragePayment",
    "PredicateBuilder",
    "UserAveragePayment",
    "UserChatRow",
    "UserRepository",
]
