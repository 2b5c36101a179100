from datetime import datetime
from zoneinfo import ZoneInfo

from flask import current_app


def reference_zone():
    return ZoneInfo(current_app.config.get("PLANNER_TIMEZONE", "UTC"))


def now():
    """Current instant in the configured planner timezone."""
    return datetime.now(reference_zone())
