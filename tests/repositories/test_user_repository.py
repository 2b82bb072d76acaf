"""Catalog queries against the reference dataset."""
from __future__ import annotations

import pytest

from workforce.models import Chat, Company, Role, UserChat
from workforce.repositories import CompanyAveragePayment, UserChatRow
from workforce.schemas import PaymentFilter, UserFilter

GLOBAL_AVERAGE = 5350 / 14


def _names(users) -> list[str]:
    return [user.username for user in users]


def test_find_all_returns_every_user(sample_session, repository) -> None:
    users = repository.find_all(sample_session)

    assert sorted(_names(users)) == [
        "BillGates",
        "DianeGreene",
        "SergeyBrin",
        "SteveJobs",
        "TimCook",
    ]


def test_find_all_by_first_name(sample_session, repository) -> None:
    assert _names(repository.find_all_by_first_name(sample_session, "Bill")) == ["BillGates"]
    assert repository.find_all_by_first_name(sample_session, "Linus") == []


@pytest.mark.parametrize("limit", [0, -1, -10])
def test_birthday_scan_with_non_positive_limit_is_empty(sample_session, repository, limit) -> None:
    assert repository.find_limited_users_ordered_by_birthday(sample_session, limit) == []


def test_birthday_scan_orders_before_limiting(sample_session, repository) -> None:
    users = repository.find_limited_users_ordered_by_birthday(sample_session, 3)

    assert _names(users) == ["DianeGreene", "SteveJobs", "BillGates"]


def test_birthday_scan_is_non_decreasing(sample_session, repository) -> None:
    users = repository.find_limited_users_ordered_by_birthday(sample_session, 10)

    dates = [user.birth_date for user in users]
    assert len(users) == 5
    assert dates == sorted(dates)


def test_birthday_scan_puts_missing_dates_last(sample_session, repository, make_user) -> None:
    make_user("Ada", "Unknown", username="NoBirthday")

    users = repository.find_limited_users_ordered_by_birthday(sample_session, 10)

    assert users[-1].username == "NoBirthday"
    assert users[0].username == "DianeGreene"


def test_find_all_by_company_name(sample_session, repository) -> None:
    users = repository.find_all_by_company_name(sample_session, "Google")

    assert sorted(_names(users)) == ["DianeGreene", "SergeyBrin"]


def test_company_without_users_yields_no_rows(sample_session, repository) -> None:
    sample_session.add(Company(name="Empty Corp"))
    sample_session.flush()

    assert repository.find_all_by_company_name(sample_session, "Empty Corp") == []
    assert repository.find_all_by_company_name(sample_session, "Nobody Inc") == []


def test_payments_by_company_sorted_by_first_name_then_amount(sample_session, repository) -> None:
    payments = repository.find_all_payments_by_company_name(sample_session, "Apple")

    assert [(p.receiver.firstname, p.amount) for p in payments] == [
        ("Steve", 250),
        ("Steve", 500),
        ("Steve", 600),
        ("Tim", 300),
        ("Tim", 400),
    ]


@pytest.mark.parametrize(
    ("payment_filter", "expected"),
    [
        (PaymentFilter(first_name="Bill", last_name="Gates"), 300.0),
        (PaymentFilter(first_name="Steve"), 450.0),
        (PaymentFilter(last_name="Cook"), 350.0),
        (PaymentFilter(), pytest.approx(GLOBAL_AVERAGE)),
    ],
)
def test_average_payment_by_names(sample_session, repository, payment_filter, expected) -> None:
    average = repository.find_average_payment_amount_by_first_and_last_names(
        sample_session, payment_filter
    )

    assert average == expected


def test_average_payment_without_matches_is_none(sample_session, repository) -> None:
    average = repository.find_average_payment_amount_by_first_and_last_names(
        sample_session, PaymentFilter(first_name="Bill", last_name="Cook")
    )

    assert average is None


def test_company_averages_ordered_by_average(sample_session, repository) -> None:
    rows = repository.find_company_names_with_avg_user_payments(sample_session)

    assert rows == [
        CompanyAveragePayment(company_name="Microsoft", average=300.0),
        CompanyAveragePayment(company_name="Google", average=400.0),
        CompanyAveragePayment(company_name="Apple", average=410.0),
    ]


def test_users_above_global_average(sample_session, repository) -> None:
    rows = repository.find_users_with_avg_payment_above_global_average(sample_session)

    assert [(row.user.username, row.average) for row in rows] == [
        ("SergeyBrin", 500.0),
        ("SteveJobs", 450.0),
    ]


def test_user_chats_without_criteria(sample_session, repository) -> None:
    rows = repository.find_all_user_chats(sample_session, UserFilter())

    assert rows == [UserChatRow(username="TimCook", chat_name="Working chat in telegram")]


def test_user_chats_filter_applies_to_user_side(sample_session, repository) -> None:
    assert repository.find_all_user_chats(sample_session, UserFilter(first_name="Tim")) == [
        UserChatRow(username="TimCook", chat_name="Working chat in telegram")
    ]
    assert repository.find_all_user_chats(sample_session, UserFilter(first_name="Bill")) == []
    assert (
        repository.find_all_user_chats(
            sample_session, UserFilter(first_name="Tim", last_name="Gates")
        )
        == []
    )


def test_user_chats_collapse_duplicate_memberships(sample_session, repository) -> None:
    users = {user.username: user for user in repository.find_all(sample_session)}
    chat = Chat(name="Board room")
    sample_session.add_all(
        [
            UserChat(user=users["SteveJobs"], chat=chat),
            UserChat(user=users["SteveJobs"], chat=chat),
            UserChat(user=users["TimCook"], chat=chat),
        ]
    )
    sample_session.flush()

    rows = repository.find_all_user_chats(sample_session, UserFilter())

    assert rows == [
        UserChatRow(username="SteveJobs", chat_name="Board room"),
        UserChatRow(username="TimCook", chat_name="Board room"),
        UserChatRow(username="TimCook", chat_name="Working chat in telegram"),
    ]


def test_username_fragment_is_case_sensitive(sample_session, repository) -> None:
    assert _names(repository.find_all_by_username_fragment(sample_session, "Cook")) == ["TimCook"]
    assert repository.find_all_by_username_fragment(sample_session, "cook") == []


def test_username_fragment_treats_wildcards_literally(sample_session, repository) -> None:
    assert repository.find_all_by_username_fragment(sample_session, "%") == []
    assert repository.find_all_by_username_fragment(sample_session, "_") == []


def test_username_fragment_none_is_rejected(sample_session, repository) -> None:
    with pytest.raises(ValueError):
        repository.find_all_by_username_fragment(sample_session, None)


def test_find_all_by_role(sample_session, repository) -> None:
    assert sorted(_names(repository.find_all_by_role(sample_session, Role.ADMIN))) == [
        "SteveJobs",
        "TimCook",
    ]
    assert len(repository.find_all_by_role(sample_session, "USER")) == 3


def test_role_shortcuts(sample_session, repository) -> None:
    assert sorted(_names(repository.find_admins(sample_session))) == ["SteveJobs", "TimCook"]
    assert sorted(_names(repository.find_regular_users(sample_session))) == [
        "BillGates",
        "DianeGreene",
        "SergeyBrin",
    ]


def test_unknown_role_is_a_caller_error(sample_session, repository) -> None:
    with pytest.raises(ValueError, match="Unknown role"):
        repository.find_all_by_role(sample_session, "MANAGER")


def test_role_value_must_match_exactly(sample_session, repository) -> None:
    with pytest.raises(ValueError, match="Unknown role"):
        repository.find_all_by_role(sample_session, "admin")


def test_find_all_by_street(sample_session, repository) -> None:
    users = repository.find_all_by_street(sample_session, "1600 Pennsylvania Ave.")

    assert sorted(_names(users)) == ["DianeGreene", "TimCook"]
    assert repository.find_all_by_street(sample_session, "Baker Street") == []
