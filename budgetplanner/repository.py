"""Database access for the planner, always scoped to one user id.

The services in ``budgetplanner.services`` never query the database
themselves; routes hand them a ``Repository`` (for writes) or the rows it
returns (for reads).
"""

import logging
from datetime import date

from .extensions import db
from .models import Activity, Budget, Expense

logger = logging.getLogger(__name__)


class Repository:
    def __init__(self, session=None):
        self.session = session or db.session

    def _commit(self):
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    # Budgets

    def get_budget(self, user_id, month):
        return Budget.query.filter_by(user_id=user_id, month=month).first()

    def upsert_budget(self, user_id, month, amount):
        b = self.get_budget(user_id, month)
        if b:
            b.amount = amount
        else:
            b = Budget(user_id=user_id, month=month, amount=amount)
            self.session.add(b)
        self._commit()
        return b

    # Expenses

    def add_expense(self, user_id, amount, description, spent_on):
        exp = Expense(user_id=user_id, amount=amount, description=description, spent_on=spent_on)
        self.session.add(exp)
        self._commit()
        return exp

    def expenses_for_month(self, user_id, year, month):
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        return (
            Expense.query.filter(
                Expense.user_id == user_id,
                Expense.spent_on >= start,
                Expense.spent_on < end,
            )
            .order_by(Expense.spent_on.desc(), Expense.id.desc())
            .all()
        )

    def recent_expenses(self, user_id, limit=5):
        return (
            Expense.query.filter_by(user_id=user_id)
            .order_by(Expense.spent_on.desc(), Expense.id.desc())
            .limit(limit)
            .all()
        )

    # Activities

    def activities_for(self, user_id):
        # Schedule order: fixed by start time, then recurring by weekday and time
        return (
            Activity.query.filter_by(user_id=user_id)
            .order_by(Activity.kind, Activity.starts_at, Activity.weekday, Activity.time_of_day, Activity.id)
            .all()
        )

    def add_activity(self, user_id, title, schedule, duration_minutes):
        act = Activity(user_id=user_id, title=title, duration_minutes=duration_minutes)
        act.schedule = schedule
        self.session.add(act)
        self._commit()
        return act

    def delete_activity(self, activity_id, user_id) -> bool:
        """Delete the activity only if ``user_id`` owns it; report whether a row went away."""
        act = Activity.query.filter_by(id=activity_id, user_id=user_id).first()
        if act is None:
            logger.info("Refusing to delete activity %s for user %s: not found or not owned", activity_id, user_id)
            return False
        self.session.delete(act)
        self._commit()
        return True
