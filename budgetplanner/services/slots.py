from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List

from . import labels

# Simplified heuristic: fixed afternoon and evening candidates on each of the
# next few days. Existing activities are not consulted.
SLOT_DAYS = 3
SLOT_TIMES = ("14:00", "18:00")


@dataclass(frozen=True)
class Slot:
    date: date
    time: str
    label: str

    def to_dict(self):
        return {"date": self.date.isoformat(), "time": self.time, "label": self.label}


def suggest_slots(duration_minutes, now: datetime, locale: str = labels.DEFAULT_LOCALE) -> List[Slot]:
    """Candidate windows for a new activity of ``duration_minutes``.

    The duration is accepted for API compatibility but does not change the
    result.
    """
    slots = []
    for offset in range(1, SLOT_DAYS + 1):
        day = now.date() + timedelta(days=offset)
        for clock in SLOT_TIMES:
            slots.append(Slot(date=day, time=clock, label=labels.slot_label(day, clock, locale)))
    return slots
