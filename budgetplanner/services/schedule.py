"""Activity schedules and next-occurrence resolution.

An activity is either anchored to an absolute date-time (``FixedSchedule``)
or repeats every week on a weekday at a wall-clock time
(``RecurringSchedule``). The textual descriptors accepted at the API boundary
are ``"2024-01-20T14:00"`` and ``"Monday 14:00"`` respectively.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Optional, Union

from .errors import ValidationError

logger = logging.getLogger(__name__)

FIXED = "fixed"
RECURRING = "recurring"
KINDS = (FIXED, RECURRING)

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_WEEKDAY_LOOKUP = {name.lower(): index for index, name in enumerate(WEEKDAY_NAMES)}


@dataclass(frozen=True)
class FixedSchedule:
    starts_at: datetime


@dataclass(frozen=True)
class RecurringSchedule:
    weekday: int  # 0 = Monday ... 6 = Sunday
    at: time


Schedule = Union[FixedSchedule, RecurringSchedule]


def parse_schedule(kind: str, text: str, zone=None) -> Schedule:
    """Turn a (kind, descriptor) pair into a schedule or raise ValidationError.

    Aware fixed timestamps are converted to ``zone`` and stored as naive
    wall-clock time.
    """
    if kind not in KINDS:
        raise ValidationError(f"kind must be one of {', '.join(KINDS)}", field="kind")
    text = str(text).strip() if text is not None else ""
    if not text:
        raise ValidationError("schedule is required", field="schedule")

    if kind == FIXED:
        try:
            starts_at = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"invalid date-time: {text!r}", field="schedule") from None
        if starts_at.tzinfo is not None:
            if zone is not None:
                starts_at = starts_at.astimezone(zone)
            starts_at = starts_at.replace(tzinfo=None)
        return FixedSchedule(starts_at)

    parts = text.split()
    if len(parts) != 2:
        raise ValidationError(f"expected '<Weekday> HH:MM', got {text!r}", field="schedule")
    day_name, clock = parts
    weekday = _WEEKDAY_LOOKUP.get(day_name.lower())
    if weekday is None:
        raise ValidationError(f"unknown weekday: {day_name!r}", field="schedule")
    try:
        at = datetime.strptime(clock, "%H:%M").time()
    except ValueError:
        raise ValidationError(f"invalid time of day: {clock!r}", field="schedule") from None
    return RecurringSchedule(weekday, at)


def format_schedule(schedule: Schedule) -> str:
    if isinstance(schedule, FixedSchedule):
        return schedule.starts_at.isoformat(timespec="minutes")
    return f"{WEEKDAY_NAMES[schedule.weekday]} {schedule.at.strftime('%H:%M')}"


def to_utc(moment: datetime) -> datetime:
    """Aware datetimes in UTC so that comparisons and deltas use elapsed time.

    Datetimes sharing a tzinfo are otherwise compared on wall-clock fields,
    which is wrong across DST changes. Naive values are returned unchanged.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc)


def _next_fixed(schedule: FixedSchedule, now: datetime) -> Optional[datetime]:
    starts_at = schedule.starts_at
    if starts_at.tzinfo is None and now.tzinfo is not None:
        starts_at = starts_at.replace(tzinfo=now.tzinfo)
    elif starts_at.tzinfo is not None and now.tzinfo is None:
        starts_at = starts_at.replace(tzinfo=None)
    return starts_at if to_utc(starts_at) > to_utc(now) else None


def _next_recurring(schedule: RecurringSchedule, now: datetime) -> Optional[datetime]:
    if not 0 <= schedule.weekday <= 6:
        return None
    candidate = datetime.combine(now.date(), schedule.at.replace(tzinfo=None), tzinfo=now.tzinfo)
    diff = schedule.weekday - now.weekday()
    if diff < 0 or (diff == 0 and to_utc(candidate) <= to_utc(now)):
        diff += 7
    return candidate + timedelta(days=diff)


def resolve_next_occurrence(activity, now: datetime) -> Optional[datetime]:
    """Next occurrence strictly after ``now``, or None.

    ``activity`` may be an Activity (anything with a ``schedule`` attribute)
    or a bare schedule. Past fixed events and malformed schedules resolve to
    None.
    """
    schedule = getattr(activity, "schedule", activity)
    try:
        if isinstance(schedule, FixedSchedule):
            return _next_fixed(schedule, now)
        if isinstance(schedule, RecurringSchedule):
            return _next_recurring(schedule, now)
    except (TypeError, ValueError, AttributeError) as exc:
        logger.debug("Skipping malformed schedule %r: %s", schedule, exc)
        return None
    logger.debug("Skipping activity without a usable schedule: %r", activity)
    return None
