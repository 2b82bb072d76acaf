"""Reference dataset used by the sample loader and the test-suite."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from workforce.core.logger import get_logger
from workforce.models import (
    Birthday,
    Chat,
    Company,
    Language,
    Payment,
    Profile,
    Role,
    User,
    UserChat,
)

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class _UserSeed:
    firstname: str
    lastname: str
    birth_date: date
    company: str
    role: Role
    language: Language
    street: str
    payments: tuple[int, ...]


COMPANIES = ("Microsoft", "Apple", "Google")

USERS = (
    _UserSeed("Bill", "Gates", date(1955, 10, 28), "Microsoft", Role.USER,
              Language.GO, "10 Downing Street", (100, 300, 500)),
    _UserSeed("Steve", "Jobs", date(1955, 2, 24), "Apple", Role.ADMIN,
              Language.KOTLIN, "500 South Great Room Trail", (250, 600, 500)),
    _UserSeed("Sergey", "Brin", date(1973, 8, 21), "Google", Role.USER,
              Language.PYTHON, "123 Main Street", (500, 500, 500)),
    _UserSeed("Tim", "Cook", date(1960, 11, 1), "Apple", Role.ADMIN,
              Language.JAVA, "1600 Pennsylvania Ave.", (400, 300)),
    _UserSeed("Diane", "Greene", date(1955, 1, 1), "Google", Role.USER,
              Language.JAVA, "1600 Pennsylvania Ave.", (300, 300, 300)),
)

# (username, chat name)
CHAT_MEMBERSHIPS = (("TimCook", "Working chat in telegram"),)


def import_sample_data(session: Session) -> dict[str, User]:
    """Add the reference companies, users, profiles, payments and chats.

    Objects are flushed but not committed; the caller owns the transaction.
    Returns the created users keyed by username.
    """

    companies = {name: Company(name=name) for name in COMPANIES}
    session.add_all(companies.values())

    users: dict[str, User] = {}
    for seed in USERS:
        user = User(
            username=f"{seed.firstname}{seed.lastname}",
            firstname=seed.firstname,
            lastname=seed.lastname,
            birth_date=Birthday(seed.birth_date),
            role=seed.role,
            company=companies[seed.company],
        )
        user.profile = Profile(language=seed.language, street=seed.street)
        user.payments = [Payment(amount=amount) for amount in seed.payments]
        session.add(user)
        users[user.username] = user

    chats: dict[str, Chat] = {}
    for username, chat_name in CHAT_MEMBERSHIPS:
        chat = chats.setdefault(chat_name, Chat(name=chat_name))
        session.add(UserChat(user=users[username], chat=chat))

    session.flush()
    LOGGER.info(
        "Imported sample data: %d companies, %d users, %d chats",
        len(companies),
        len(users),
        len(chats),
    )
    return users
