from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from ... import clock
from ...repository import Repository
from ...services.errors import ValidationError
from ...services.schedule import parse_schedule, resolve_next_occurrence
from ...services.upcoming import select_upcoming
from ...services.slots import suggest_slots

activities_bp = Blueprint("activities", __name__, url_prefix="/api")

DEFAULT_DURATION = 60


def _duration(raw):
    if raw is None or raw == "":
        return DEFAULT_DURATION
    try:
        duration = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"invalid duration: {raw!r}", field="duration") from None
    if isinstance(raw, bool) or duration <= 0:
        raise ValidationError("duration must be a positive number of minutes", field="duration")
    return duration


@activities_bp.route("/activities", methods=["GET"])
@login_required
def list_activities():
    now = clock.now()
    rows = []
    for act in Repository().activities_for(current_user.id):
        item = act.to_dict()
        occurs_at = resolve_next_occurrence(act, now)
        item["next_occurrence"] = occurs_at.isoformat() if occurs_at else None
        rows.append(item)
    return jsonify(rows)


@activities_bp.route("/activities", methods=["POST"])
@login_required
def create_activity():
    data = request.get_json(silent=True) or request.form
    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("title is required", field="title")
    title = title.strip()
    schedule = parse_schedule(data.get("kind"), data.get("schedule"), zone=clock.reference_zone())
    act = Repository().add_activity(current_user.id, title, schedule, _duration(data.get("duration")))
    current_app.logger.info("Activity %s added for user %s", act.id, current_user.id)
    return jsonify({"ok": True, "activity": act.to_dict()}), 201


@activities_bp.route("/activities/<int:activity_id>", methods=["DELETE"])
@login_required
def delete_activity(activity_id):
    if not Repository().delete_activity(activity_id, current_user.id):
        return jsonify({"ok": False, "message": "Activity not found"}), 404
    current_app.logger.info("Activity %s deleted for user %s", activity_id, current_user.id)
    return jsonify({"ok": True})


@activities_bp.route("/next-activity", methods=["GET"])
@login_required
def next_activity():
    now = clock.now()
    upcoming = select_upcoming(
        current_user.id,
        Repository().activities_for(current_user.id),
        now,
        locale=current_app.config["PLANNER_LOCALE"],
    )
    return jsonify({"activities": [u.to_dict() for u in upcoming]})


@activities_bp.route("/suggest-slot", methods=["POST"])
@login_required
def suggest_slot():
    data = request.get_json(silent=True) or {}
    slots = suggest_slots(_duration(data.get("duration")), clock.now(), locale=current_app.config["PLANNER_LOCALE"])
    return jsonify([s.to_dict() for s in slots])
