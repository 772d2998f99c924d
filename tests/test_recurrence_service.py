import datetime
from types import SimpleNamespace

import pytest

from morning_dashboard.services.recurrence_service import (
    applies_to_date,
    next_occurrence,
    normalize_applicable_days,
    seconds_remaining,
)


def _departure(days, at=datetime.time(8, 0), is_active=True):
    return SimpleNamespace(applicable_days=days, departure_time=at, is_active=is_active)


MON_WED_FRI = ["monday", "wednesday", "friday"]


def test_next_occurrence_is_later_today_when_applicable():
    departure = _departure(MON_WED_FRI)
    now = datetime.datetime(2026, 10, 19, 6, 0)

    assert next_occurrence(departure, now) == datetime.datetime(2026, 10, 19, 8, 0)


def test_next_occurrence_skips_to_next_applicable_weekday_after_departure_passed():
    departure = _departure(MON_WED_FRI)
    now = datetime.datetime(2026, 10, 19, 10, 0)

    assert next_occurrence(departure, now) == datetime.datetime(2026, 10, 21, 8, 0)


def test_departure_at_exactly_now_is_not_today():
    departure = _departure(MON_WED_FRI)
    now = datetime.datetime(2026, 10, 19, 8, 0)

    assert next_occurrence(departure, now) == datetime.datetime(2026, 10, 21, 8, 0)


def test_single_weekday_wraps_to_next_week():
    departure = _departure(["monday"])
    now = datetime.datetime(2026, 10, 19, 9, 0)

    assert next_occurrence(departure, now) == datetime.datetime(2026, 10, 26, 8, 0)


@pytest.mark.parametrize(
    "departure",
    [
        _departure(MON_WED_FRI, is_active=False),
        _departure([]),
        _departure(None),
        _departure("monday"),
        _departure(["someday", 3]),
    ],
)
def test_inactive_or_empty_day_set_never_recurs(departure):
    for hour in (0, 7, 12, 23):
        now = datetime.datetime(2026, 10, 19, hour, 0)
        assert next_occurrence(departure, now) is None
        assert seconds_remaining(departure, now) is None


def test_normalize_applicable_days_ignores_case_and_unknown_values():
    assert normalize_applicable_days([" Monday", "FRIDAY", "funday", None]) == frozenset({"monday", "friday"})


def test_applies_to_date_uses_weekday_name():
    departure = _departure(["saturday"])

    assert applies_to_date(departure, datetime.date(2026, 10, 24)) is True
    assert applies_to_date(departure, datetime.date(2026, 10, 19)) is False


def test_seconds_remaining_counts_to_next_occurrence():
    departure = _departure(["monday"], at=datetime.time(7, 45))
    now = datetime.datetime(2026, 10, 19, 7, 0)

    assert seconds_remaining(departure, now) == 45 * 60
