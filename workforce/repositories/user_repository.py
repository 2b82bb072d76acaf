"""Read-only query catalog over users, companies, payments and chats."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Float, bindparam, func, select
from sqlalchemy.orm import Session

from workforce.core.logger import get_logger
from workforce.models import Chat, Company, Payment, Profile, Role, User, UserChat
from workforce.schemas import PaymentFilter, UserFilter

from .base import BaseRepository
from .predicate import PredicateBuilder

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CompanyAveragePayment:
    company_name: str
    average: float


@dataclass(frozen=True)
class UserAveragePayment:
    user: User
    average: float


@dataclass(frozen=True)
class UserChatRow:
    username: str
    chat_name: str


def _avg_amount():
    return func.avg(Payment.amount, type_=Float)


def _above_average_statement(global_average):
    """Users grouped with their average payment, kept when it beats ``global_average``.

    ``global_average`` is bound exactly as the database returned it so a
    DECIMAL average is compared without a float round trip.
    """

    personal_average = _avg_amount()
    return (
        select(User, personal_average.label("average"))
        .join(User.payments)
        .group_by(User.id)
        .having(personal_average > bindparam("global_average", global_average))
        .order_by(User.firstname.asc(), User.id.asc())
    )


class UserRepository(BaseRepository):
    """Named queries used by reporting and admin tooling.

    Every method takes the caller's ``Session`` and only reads from it.
    """

    def find_all(self, session: Session) -> list[User]:
        """Return every user in storage order."""

        return self._fetch_all(session, select(User), label="find_all")

    def find_all_by_first_name(self, session: Session, first_name: str) -> list[User]:
        """Return users whose first name equals ``first_name`` exactly."""

        statement = select(User).where(User.firstname == first_name)
        return self._fetch_all(session, statement, label="find_all_by_first_name")

    def find_limited_users_ordered_by_birthday(self, session: Session, limit: int) -> list[User]:
        """Return the ``limit`` oldest users, earliest birth date first.

        Users without a birth date sort last; equal dates keep insertion
        order. A non-positive ``limit`` yields an empty list.
        """

        if limit <= 0:
            LOGGER.debug("Skipping birthday scan for non-positive limit=%s", limit)
            return []

        statement = (
            select(User)
            .order_by(User.birth_date.is_(None), User.birth_date.asc(), User.id.asc())
            .limit(limit)
        )
        return self._fetch_all(session, statement, label="find_limited_users_ordered_by_birthday")

    def find_all_by_company_name(self, session: Session, company_name: str) -> list[User]:
        """Return the employees of the company called ``company_name``."""

        statement = (
            select(User)
            .select_from(Company)
            .join(Company.users)
            .where(Company.name == company_name)
        )
        return self._fetch_all(session, statement, label="find_all_by_company_name")

    def find_all_payments_by_company_name(
        self, session: Session, company_name: str
    ) -> list[Payment]:
        """Return payments received by a company's employees.

        Sorted by the receiver's first name, then by amount.
        """

        statement = (
            select(Payment)
            .select_from(Company)
            .join(Company.users)
            .join(User.payments)
            .where(Company.name == company_name)
            .order_by(User.firstname.asc(), Payment.amount.asc(), Payment.id.asc())
        )
        return self._fetch_all(session, statement, label="find_all_payments_by_company_name")

    def find_average_payment_amount_by_first_and_last_names(
        self, session: Session, payment_filter: PaymentFilter
    ) -> float | None:
        """Average payment amount of users matching the optional names.

        Returns ``None`` when no payment matches.
        """

        predicate = (
            PredicateBuilder()
            .add(payment_filter.first_name, lambda value: User.firstname == value)
            .add(payment_filter.last_name, lambda value: User.lastname == value)
            .build_and()
        )
        statement = (
            select(_avg_amount())
            .select_from(User)
            .join(User.payments)
            .where(predicate)
        )
        average = self._to_optional_float(session.scalar(statement))
        LOGGER.debug(
            "Average payment for first_name=%s last_name=%s is %s",
            payment_filter.first_name,
            payment_filter.last_name,
            average,
        )
        return average

    def find_company_names_with_avg_user_payments(
        self, session: Session
    ) -> list[CompanyAveragePayment]:
        """Average payment per company, lowest average first.

        Companies without employees or without any payments do not appear.
        """

        average = _avg_amount()
        statement = (
            select(Company.name, average.label("average"))
            .select_from(Company)
            .join(Company.users)
            .join(User.payments)
            .group_by(Company.id, Company.name)
            .order_by(average.asc(), Company.name.asc())
        )
        rows = self._fetch_rows(session, statement, label="find_company_names_with_avg_user_payments")
        return [CompanyAveragePayment(company_name=name, average=float(avg)) for name, avg in rows]

    def find_users_with_avg_payment_above_global_average(
        self, session: Session
    ) -> list[UserAveragePayment]:
        """Users whose own average payment is strictly above the overall average.

        Runs as two statements: the overall average first, then the grouped
        comparison against that value. When there are no payments at all the
        result is empty. Sorted by first name.
        """

        global_average = session.scalar(select(func.avg(Payment.amount)))
        if global_average is None:
            LOGGER.debug("No payments recorded; nothing can exceed the global average")
            return []

        rows = self._fetch_rows(
            session,
            _above_average_statement(global_average),
            label="find_users_with_avg_payment_above_global_average",
        )
        return [UserAveragePayment(user=user, average=float(avg)) for user, avg in rows]

    def find_all_user_chats(self, session: Session, user_filter: UserFilter) -> list[UserChatRow]:
        """(username, chat name) pairs for chats the matching users belong to.

        The name criteria apply to the user side only. Repeated memberships
        of the same user in the same chat collapse into one row.
        """

        predicate = (
            PredicateBuilder()
            .add(user_filter.first_name, lambda value: User.firstname == value)
            .add(user_filter.last_name, lambda value: User.lastname == value)
            .build_and()
        )
        statement = (
            select(User.username, Chat.name)
            .select_from(UserChat)
            .join(UserChat.user)
            .join(UserChat.chat)
            .where(predicate)
            .group_by(User.id, User.username, Chat.id, Chat.name)
            .order_by(User.username.asc(), Chat.name.asc())
        )
        rows = self._fetch_rows(session, statement, label="find_all_user_chats")
        return [UserChatRow(username=username, chat_name=chat_name) for username, chat_name in rows]

    def find_all_by_username_fragment(self, session: Session, fragment: str) -> list[User]:
        """Users whose username contains ``fragment`` as a plain substring.

        Matching is case-sensitive and ``%``/``_`` are taken literally. An
        empty fragment matches every user.
        """

        if fragment is None:
            raise ValueError("fragment must be a string, not None")

        statement = select(User).where(User.username.contains(fragment, autoescape=True))
        return self._fetch_all(session, statement, label="find_all_by_username_fragment")

    def find_all_by_role(self, session: Session, role: Role | str) -> list[User]:
        """Users holding ``role``; unknown role values raise ``ValueError``."""

        resolved = Role.parse(role)
        statement = select(User).where(User.role == resolved)
        return self._fetch_all(session, statement, label=f"find_all_by_role[{resolved.value}]")

    def find_admins(self, session: Session) -> list[User]:
        return self.find_all_by_role(session, Role.ADMIN)

    def find_regular_users(self, session: Session) -> list[User]:
        return self.find_all_by_role(session, Role.USER)

    def find_all_by_street(self, session: Session, street: str) -> list[User]:
        """Users whose profile lists ``street`` as their address."""

        statement = select(User).join(User.profile).where(Profile.street == street)
        return self._fetch_all(session, statement, label="find_all_by_street")
