"""ORM model for users and their personal-information value objects."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import Date, Enum as SQLEnum, ForeignKey, String
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from .base import Base, _ID_TYPE

if TYPE_CHECKING:  # pragma: no cover
    from .companies import Company
    from .payments import Payment
    from .profiles import Profile


class Role(str, Enum):
    """Closed set of user roles."""

    ADMIN = "ADMIN"
    USER = "USER"

    @classmethod
    def parse(cls, value: "Role | str") -> "Role":
        """Return the member for ``value``; anything but an exact value raises ``ValueError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown role {value!r}; expected one of: {allowed}") from None


@dataclass(frozen=True, order=True)
class Birthday:
    """Birth date that is never later than the current day."""

    value: date

    def __post_init__(self) -> None:
        if self.value > date.today():
            raise ValueError(f"Birthday {self.value.isoformat()} is in the future")

    def age(self, on: Optional[date] = None) -> int:
        """Full years elapsed between the birthday and ``on`` (default: today)."""

        today = on or date.today()
        before_anniversary = (today.month, today.day) < (self.value.month, self.value.day)
        return today.year - self.value.year - int(before_anniversary)


class BirthdayType(TypeDecorator):
    """Stores ``Birthday`` values in a plain DATE column."""

    impl = Date
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> date | None:
        if value is None:
            return None
        if isinstance(value, Birthday):
            return value.value
        return Birthday(value).value

    def process_result_value(self, value: Any, dialect) -> Birthday | None:
        if value is None:
            return None
        return Birthday(value)


@dataclass(frozen=True)
class PersonalInfo:
    firstname: str | None
    lastname: str | None
    birth_date: Birthday | None


class User(Base):
    """An employee; may belong to a company, receive payments and join chats."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    firstname: Mapped[str | None] = mapped_column(String(64))
    lastname: Mapped[str | None] = mapped_column(String(64))
    birth_date: Mapped[Birthday | None] = mapped_column(BirthdayType())
    role: Mapped[Role] = mapped_column(
        SQLEnum(Role, native_enum=False, length=16), nullable=False, default=Role.USER
    )
    company_id: Mapped[int | None] = mapped_column(
        ForeignKey("company.id", ondelete="SET NULL"), nullable=True, index=True
    )

    personal_info: Mapped[PersonalInfo] = composite(
        PersonalInfo, "firstname", "lastname", "birth_date"
    )

    company: Mapped["Company | None"] = relationship(back_populates="users")
    payments: Mapped[list["Payment"]] = relationship(
        back_populates="receiver", cascade="all, delete-orphan"
    )
    profile: Mapped["Profile | None"] = relationship(
        back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
