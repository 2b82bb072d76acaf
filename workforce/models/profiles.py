"""ORM model for the optional per-user profile."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum as SQLEnum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, _ID_TYPE

if TYPE_CHECKING:  # pragma: no cover
    from .users import User


class Language(str, Enum):
    """Preferred programming language recorded on a profile."""

    JAVA = "JAVA"
    GO = "GO"
    KOTLIN = "KOTLIN"
    PYTHON = "PYTHON"


class Profile(Base):
    """Street address and language preference owned by exactly one user."""

    __tablename__ = "profile"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    language: Mapped[Language] = mapped_column(
        SQLEnum(Language, native_enum=False, length=16), nullable=False
    )
    street: Mapped[str | None] = mapped_column(String(255))

    user: Mapped["User"] = relationship(back_populates="profile")
