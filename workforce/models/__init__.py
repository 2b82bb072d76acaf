"""Database models for the workforce domain."""
from __future__ import annotations

from .base import Base
from .chats import Chat, UserChat
from .companies import Company
from .payments import Payment
from .profiles import Language, Profile
from .users import Birthday, BirthdayType, PersonalInfo, Role, User

__all__ = [
    "Base",
    "Birthday",
    "BirthdayType",
    "Chat",
    "Company",
    "Language",
    "Payment",
    "PersonalInfo",
    "Profile",
    "Role",
    "User",
    "UserChat",
]
