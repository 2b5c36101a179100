from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ... import clock
from ...repository import Repository
from ...services.ledger import record_expense


expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")


@expenses_bp.route("", methods=["POST"])
@login_required
def create_expense():
    data = request.get_json(silent=True) or request.form
    exp = record_expense(
        Repository(),
        current_user.id,
        data.get("amount"),
        data.get("description"),
        clock.now(),
        spent_on=data.get("date"),
    )
    return jsonify({"ok": True, "expense": exp.to_dict()}), 201


@expenses_bp.route("", methods=["GET"])
@login_required
def recent_expenses():
    rows = Repository().recent_expenses(current_user.id, limit=5)
    return jsonify([e.to_dict() for e in rows])


@expenses_bp.route("/month", methods=["GET"])
@login_required
def month_expenses():
    today = clock.now().date()
    rows = Repository().expenses_for_month(current_user.id, today.year, today.month)
    return jsonify([e.to_dict() for e in rows])
