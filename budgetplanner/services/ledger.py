import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .errors import ValidationError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Amount columns are Numeric(10, 2)
MAX_AMOUNT = Decimal("1e8")
MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def month_key(day) -> str:
    return day.strftime("%Y-%m")


def to_money(value) -> Decimal:
    """Coerce a stored or submitted amount to Decimal; None counts as zero."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"invalid amount: {value!r}", field="amount") from None


def days_left_in_month(day: date) -> int:
    """Days remaining in ``day``'s month, today included."""
    days_in_month = calendar.monthrange(day.year, day.month)[1]
    return days_in_month - day.day + 1


def daily_allowance(remaining: Decimal, days_left: int) -> Decimal:
    """Remaining budget spread evenly over the days left; 0 when none are left."""
    if days_left <= 0:
        return Decimal("0")
    return remaining / days_left


@dataclass(frozen=True)
class DerivedSummary:
    total_budget: Decimal
    total_expenses: Decimal
    remaining: Decimal
    expenses_today: Decimal
    days_left: int
    daily_budget: Decimal

    @property
    def daily_budget_rounded(self) -> Decimal:
        return self.daily_budget.quantize(CENT, rounding=ROUND_HALF_UP)

    def to_dict(self):
        return {
            "totalBudget": float(self.total_budget),
            "totalExpenses": float(self.total_expenses),
            "remaining": float(self.remaining),
            "expensesToday": float(self.expenses_today),
            "dailyBudget": float(self.daily_budget_rounded),
            "daysLeft": self.days_left,
        }


def compute_budget_summary(user_id, budget, expenses, now: datetime) -> DerivedSummary:
    """Summarize the caller's month as of ``now``.

    ``budget`` is the caller's Budget row for the current month (or None) and
    ``expenses`` any of the caller's Expense rows; rows from other months or
    other users are ignored. Overspending gives a negative ``remaining``.
    """
    today = now.date() if isinstance(now, datetime) else now
    current_month = month_key(today)

    total_budget = Decimal("0")
    if budget is not None and budget.user_id == user_id and budget.month == current_month:
        total_budget = to_money(budget.amount)

    total_expenses = Decimal("0")
    expenses_today = Decimal("0")
    for expense in expenses:
        if expense.user_id != user_id:
            continue
        spent_on = expense.spent_on
        if (spent_on.year, spent_on.month) != (today.year, today.month):
            continue
        amount = to_money(expense.amount)
        total_expenses += amount
        if spent_on == today:
            expenses_today += amount

    remaining = total_budget - total_expenses
    days_left = days_left_in_month(today)
    daily_budget = daily_allowance(remaining, days_left)

    return DerivedSummary(
        total_budget=total_budget,
        total_expenses=total_expenses,
        remaining=remaining,
        expenses_today=expenses_today,
        days_left=days_left,
        daily_budget=daily_budget,
    )


def budget_summary_for(repo, user_id, now: datetime) -> DerivedSummary:
    today = now.date()
    budget = repo.get_budget(user_id, month_key(today))
    expenses = repo.expenses_for_month(user_id, today.year, today.month)
    return compute_budget_summary(user_id, budget, expenses, now)


def _validate_amount(amount) -> Decimal:
    if amount is None or amount == "":
        raise ValidationError("amount is required", field="amount")
    if isinstance(amount, bool):
        raise ValidationError(f"invalid amount: {amount!r}", field="amount")
    value = to_money(amount)
    if not value.is_finite():
        raise ValidationError(f"invalid amount: {amount!r}", field="amount")
    if value < 0:
        raise ValidationError("amount must not be negative", field="amount")
    try:
        value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"invalid amount: {amount!r}", field="amount") from None
    if value >= MAX_AMOUNT:
        raise ValidationError(f"amount must be below {MAX_AMOUNT:,.0f}", field="amount")
    return value


def upsert_budget(repo, user_id, month: str, amount):
    """Set the caller's budget for ``month`` ("YYYY-MM"); last write wins."""
    if not isinstance(month, str) or not MONTH_RE.match(month):
        raise ValidationError(f"month must look like YYYY-MM, got {month!r}", field="month")
    value = _validate_amount(amount)
    budget = repo.upsert_budget(user_id, month, value)
    logger.info("Budget for user %s month %s set to %s", user_id, month, value)
    return budget


def record_expense(repo, user_id, amount, description, now: datetime, spent_on=None):
    """Insert an expense; ``spent_on`` defaults to the reference date."""
    value = _validate_amount(amount)
    if spent_on is None or spent_on == "":
        spent_on = now.date()
    elif isinstance(spent_on, str):
        try:
            spent_on = date.fromisoformat(spent_on)
        except ValueError:
            raise ValidationError(f"invalid date: {spent_on!r}", field="date") from None
    elif isinstance(spent_on, datetime):
        spent_on = spent_on.date()
    elif not isinstance(spent_on, date):
        raise ValidationError(f"invalid date: {spent_on!r}", field="date")
    description = str(description).strip() if description is not None else ""
    expense = repo.add_expense(user_id, value, description or None, spent_on)
    logger.info("Expense of %s recorded for user %s on %s", value, user_id, spent_on)
    return expense
