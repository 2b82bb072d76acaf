"""ORM model for payments received by users."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .base import Base, _ID_TYPE

if TYPE_CHECKING:  # pragma: no cover
    from .users import User


class Payment(Base):
    """A single payment with exactly one receiving user."""

    __tablename__ = "payment"
    __table_args__ = (CheckConstraint("amount >= 0", name="ck_payment_amount_non_negative"),)

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    receiver_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    receiver: Mapped["User"] = relationship(back_populates="payments")

    @validates("amount")
    def _validate_amount(self, key: str, value: int) -> int:
        if value is None or value < 0:
            raise ValueError(f"Payment amount must be non-negative, got {value!r}")
        return value
