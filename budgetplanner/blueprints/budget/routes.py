from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ... import clock
from ...repository import Repository
from ...services.ledger import budget_summary_for, upsert_budget, month_key

budget_bp = Blueprint("budget", __name__, url_prefix="/api/budget")


@budget_bp.route("", methods=["GET"])
@login_required
def summary():
    s = budget_summary_for(Repository(), current_user.id, clock.now())
    return jsonify(s.to_dict())


@budget_bp.route("", methods=["POST"])
@login_required
def set_budget():
    data = request.get_json(silent=True) or request.form
    month = data.get("month") or month_key(clock.now())
    b = upsert_budget(Repository(), current_user.id, month, data.get("amount"))
    return jsonify({"ok": True, "month": b.month, "amount": float(b.amount)})
