from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from budgetplanner.services.errors import ValidationError
from budgetplanner.services.ledger import (
    compute_budget_summary,
    daily_allowance,
    days_left_in_month,
    record_expense,
    upsert_budget,
)


@dataclass
class Row:
    user_id: int
    amount: Optional[Decimal]
    month: str = ""
    spent_on: Optional[date] = None


def budget(amount, month="2024-06", user_id=1):
    return Row(user_id=user_id, amount=amount, month=month)


def expense(amount, day, user_id=1):
    return Row(user_id=user_id, amount=Decimal(amount), spent_on=day)


class FakeRepo:
    def __init__(self):
        self.budgets = {}
        self.expenses = []

    def upsert_budget(self, user_id, month, amount):
        self.budgets[(user_id, month)] = amount
        return budget(amount, month, user_id)

    def add_expense(self, user_id, amount, description, spent_on):
        row = Row(user_id=user_id, amount=amount, spent_on=spent_on)
        row.description = description
        self.expenses.append(row)
        return row


NOW = datetime(2024, 6, 10, 12, 0)


def test_june_scenario():
    rows = [expense("100.00", date(2024, 6, 1)), expense("150.00", date(2024, 6, 9))]
    s = compute_budget_summary(1, budget(Decimal("1000")), rows, NOW)

    assert s.total_budget == Decimal("1000")
    assert s.total_expenses == Decimal("250.00")
    assert s.remaining == Decimal("750.00")
    assert s.days_left == 21
    assert s.daily_budget_rounded == Decimal("35.71")
    assert s.to_dict()["dailyBudget"] == 35.71


def test_remaining_is_budget_minus_this_months_expenses():
    rows = [
        expense("12.35", date(2024, 6, 3)),
        expense("0.65", date(2024, 6, 10)),
        expense("99.99", date(2024, 5, 31)),  # previous month
        expense("40.00", date(2024, 7, 1)),  # next month
    ]
    s = compute_budget_summary(1, budget(Decimal("500.50")), rows, NOW)

    assert s.total_expenses == Decimal("13.00")
    assert s.remaining == Decimal("487.50")


def test_expenses_today_only_counts_reference_date():
    rows = [expense("5.00", date(2024, 6, 10)), expense("7.50", date(2024, 6, 10)), expense("3.00", date(2024, 6, 9))]
    s = compute_budget_summary(1, budget(Decimal("100")), rows, NOW)
    assert s.expenses_today == Decimal("12.50")


def test_missing_budget_counts_as_zero_and_overspend_is_negative():
    s = compute_budget_summary(1, None, [expense("30.00", date(2024, 6, 2))], NOW)
    assert s.total_budget == 0
    assert s.remaining == Decimal("-30.00")
    assert s.daily_budget < 0


def test_unset_budget_amount_counts_as_zero():
    s = compute_budget_summary(1, budget(None), [], NOW)
    assert s.total_budget == 0
    assert s.daily_budget == 0


def test_rows_from_other_users_or_months_are_ignored():
    rows = [expense("20.00", date(2024, 6, 10), user_id=2)]
    s = compute_budget_summary(1, budget(Decimal("300"), user_id=2), rows, NOW)
    assert s.total_budget == 0
    assert s.total_expenses == 0

    s = compute_budget_summary(1, budget(Decimal("300"), month="2024-05"), [], NOW)
    assert s.total_budget == 0


def test_last_day_of_month_counts_today():
    s = compute_budget_summary(1, budget(Decimal("90")), [], datetime(2024, 6, 30, 23, 0))
    assert s.days_left == 1
    assert s.daily_budget == Decimal("90")


@pytest.mark.parametrize("day,expected", [
    (date(2024, 2, 1), 29),
    (date(2023, 2, 28), 1),
    (date(2024, 12, 15), 17),
])
def test_days_left_in_month(day, expected):
    assert days_left_in_month(day) == expected


@pytest.mark.parametrize("days_left", [0, -3])
def test_daily_allowance_is_zero_without_days_left(days_left):
    assert daily_allowance(Decimal("750"), days_left) == 0


def test_upsert_budget_validates_input():
    repo = FakeRepo()
    upsert_budget(repo, 1, "2024-06", "1000")
    upsert_budget(repo, 1, "2024-06", 1200.5)
    assert repo.budgets == {(1, "2024-06"): Decimal("1200.50")}

    with pytest.raises(ValidationError):
        upsert_budget(repo, 1, "2024-13", 10)
    with pytest.raises(ValidationError):
        upsert_budget(repo, 1, "2024-06", -1)
    with pytest.raises(ValidationError):
        upsert_budget(repo, 1, "2024-06", "lots")


def test_record_expense_defaults_to_reference_date():
    repo = FakeRepo()
    record_expense(repo, 1, "9.99", "  coffee ", NOW)
    record_expense(repo, 1, 3, None, NOW, spent_on="2024-06-01")

    first, second = repo.expenses
    assert first.spent_on == date(2024, 6, 10)
    assert first.description == "coffee"
    assert first.amount == Decimal("9.99")
    assert second.spent_on == date(2024, 6, 1)
    assert second.description is None


def test_record_expense_rejects_bad_input():
    repo = FakeRepo()
    with pytest.raises(ValidationError):
        record_expense(repo, 1, None, "x", NOW)
    with pytest.raises(ValidationError):
        record_expense(repo, 1, "-2", "x", NOW)
    with pytest.raises(ValidationError):
        record_expense(repo, 1, "2", "x", NOW, spent_on="10/06/2024")
    assert repo.expenses == []


@pytest.mark.parametrize("amount", ["1e30", 1e30, "100000000", "99999999.995"])
def test_amounts_outside_column_range_are_rejected(amount):
    repo = FakeRepo()
    with pytest.raises(ValidationError) as exc:
        record_expense(repo, 1, amount, "x", NOW)
    assert exc.value.field == "amount"
    with pytest.raises(ValidationError):
        upsert_budget(repo, 1, "2024-06", amount)
    assert repo.expenses == []
    assert repo.budgets == {}


def test_largest_amount_is_accepted():
    repo = FakeRepo()
    record_expense(repo, 1, "99999999.99", "x", NOW)
    assert repo.expenses[0].amount == Decimal("99999999.99")
