from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List

from . import labels
from .schedule import resolve_next_occurrence, to_utc

UPCOMING_LIMIT = 3


@dataclass(frozen=True)
class UpcomingActivity:
    title: str
    occurs_at: datetime
    time: str
    date_label: str
    days_until: int
    days_until_label: str

    @property
    def timestamp(self) -> int:
        """Epoch milliseconds."""
        return int(self.occurs_at.timestamp() * 1000)

    def to_dict(self):
        return {
            "title": self.title,
            "occurs_at": self.occurs_at.isoformat(),
            "timestamp": self.timestamp,
            "time": self.time,
            "date_label": self.date_label,
            "days_until": self.days_until_label,
        }


def select_upcoming(user_id, activities: Iterable, now: datetime,
                    limit: int = UPCOMING_LIMIT, locale: str = labels.DEFAULT_LOCALE) -> List[UpcomingActivity]:
    """Return the caller's next ``limit`` occurrences, soonest first.

    Activities belonging to other users, past fixed activities and activities
    whose schedule can't be resolved are left out. The day count is the whole
    number of 24h periods until the occurrence, so an event 20 hours away is
    "today" and one 30 hours away is "tomorrow".
    """
    upcoming = []
    for activity in activities:
        if activity.user_id != user_id:
            continue
        occurs_at = resolve_next_occurrence(activity, now)
        if occurs_at is None or to_utc(occurs_at) <= to_utc(now):
            continue
        days = (to_utc(occurs_at) - to_utc(now)) // timedelta(days=1)
        upcoming.append(UpcomingActivity(
            title=activity.title,
            occurs_at=occurs_at,
            time=occurs_at.strftime("%H:%M"),
            date_label=labels.short_date(occurs_at, locale),
            days_until=days,
            days_until_label=labels.relative_days(days, locale),
        ))

    upcoming.sort(key=lambda entry: to_utc(entry.occurs_at))
    return upcoming[:limit]
