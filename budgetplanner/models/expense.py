from datetime import date
from ..extensions import db


class Expense(db.Model):
    __tablename__ = "expenses"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    description = db.Column(db.String(255))
    spent_on = db.Column(db.Date, default=date.today, nullable=False)

    __table_args__ = (
        db.CheckConstraint("amount >= 0", name="ck_expense_amount_non_negative"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "amount": float(self.amount),
            "description": self.description,
            "date": self.spent_on.isoformat(),
        }
