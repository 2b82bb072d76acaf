"""ORM model representing employers."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, _ID_TYPE

if TYPE_CHECKING:  # pragma: no cover
    from .users import User


class Company(Base):
    """An organisation employing zero or more users."""

    __tablename__ = "company"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(160), unique=True, nullable=False)

    users: Mapped[list["User"]] = relationship(back_populates="company")
