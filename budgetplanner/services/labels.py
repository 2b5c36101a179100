"""Localized labels for dates shown next to activities and slots."""

LABELS = {
    "en": {
        "weekdays": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
        "weekdays_short": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
        "today": "Today",
        "tomorrow": "Tomorrow",
        "in_days": "In {n} days",
        "slot": "{weekday}, {time}",
    },
    "ro": {
        "weekdays": ("luni", "marți", "miercuri", "joi", "vineri", "sâmbătă", "duminică"),
        "weekdays_short": ("lun.", "mar.", "mie.", "joi", "vin.", "sâm.", "dum."),
        "today": "Azi",
        "tomorrow": "Mâine",
        "in_days": "În {n} zile",
        "slot": "{weekday}, ora {time}",
    },
}
DEFAULT_LOCALE = "en"


def _table(locale):
    return LABELS.get(locale) or LABELS[DEFAULT_LOCALE]


def weekday_name(day, locale=DEFAULT_LOCALE):
    return _table(locale)["weekdays"][day.weekday()]


def short_date(day, locale=DEFAULT_LOCALE):
    # e.g. "Mon 17"
    return f"{_table(locale)['weekdays_short'][day.weekday()]} {day.day}"


def relative_days(days, locale=DEFAULT_LOCALE):
    table = _table(locale)
    if days == 0:
        return table["today"]
    if days == 1:
        return table["tomorrow"]
    return table["in_days"].format(n=days)


def slot_label(day, clock, locale=DEFAULT_LOCALE):
    return _table(locale)["slot"].format(weekday=weekday_name(day, locale), time=clock)
