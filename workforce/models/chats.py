"""Chat rooms and the membership edge linking them to users."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, _ID_TYPE

if TYPE_CHECKING:  # pragma: no cover
    from .users import User


class Chat(Base):
    """A named chat room."""

    __tablename__ = "chat"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(160), nullable=False)


class UserChat(Base):
    """Membership of a user in a chat.

    The edge owns both references; neither ``User`` nor ``Chat`` keeps a
    collection of memberships. Duplicate (user, chat) pairs are allowed.
    """

    __tablename__ = "users_chat"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    chat_id: Mapped[int] = mapped_column(
        ForeignKey("chat.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship()
    chat: Mapped[Chat] = relationship()
