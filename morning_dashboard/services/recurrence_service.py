"""Weekly recurrence helpers for departure times."""

from __future__ import annotations

import datetime
from typing import Iterable

from morning_dashboard.models import WEEKDAY_NAMES, DepartureTime


def weekday_name(date_value: datetime.date) -> str:
    return WEEKDAY_NAMES[date_value.weekday()]


def normalize_applicable_days(raw_days) -> frozenset[str]:
    """Return the valid lowercase weekday names in ``raw_days``.

    Anything that is not a list of strings yields an empty set, which callers
    treat as "never recurs".
    """
    if isinstance(raw_days, str) or not isinstance(raw_days, Iterable):
        return frozenset()
    days = set()
    for value in raw_days:
        if isinstance(value, str) and value.strip().lower() in WEEKDAY_NAMES:
            days.add(value.strip().lower())
    return frozenset(days)


def applies_to_date(departure: DepartureTime, date_value: datetime.date) -> bool:
    return weekday_name(date_value) in normalize_applicable_days(departure.applicable_days)


def next_occurrence(
    departure: DepartureTime, now: datetime.datetime | None = None
) -> datetime.datetime | None:
    """Next local datetime at which ``departure`` fires, or None."""
    now = now or datetime.datetime.now()
    if not departure.is_active or departure.departure_time is None:
        return None

    days = normalize_applicable_days(departure.applicable_days)
    if not days:
        return None

    time_of_day = departure.departure_time.replace(microsecond=0)
    today_departure = datetime.datetime.combine(now.date(), time_of_day)
    if weekday_name(now.date()) in days and today_departure > now:
        return today_departure

    # 日本語: 翌日から最大7日先まで走査 / English: Scan forward from tomorrow, at most one week
    for offset in range(1, 8):
        candidate_date = now.date() + datetime.timedelta(days=offset)
        if weekday_name(candidate_date) in days:
            return datetime.datetime.combine(candidate_date, time_of_day)
    return None


def seconds_remaining(
    departure: DepartureTime, now: datetime.datetime | None = None
) -> int | None:
    now = now or datetime.datetime.now()
    occurrence = next_occurrence(departure, now)
    if occurrence is None:
        return None
    return int((occurrence - now).total_seconds())


__all__ = [
    "weekday_name",
    "normalize_applicable_days",
    "applies_to_date",
    "next_occurrence",
    "seconds_remaining",
]
