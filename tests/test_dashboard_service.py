import datetime

import pytest

from morning_dashboard.models import EVENTABLE_DEPARTURE_TIME
from morning_dashboard.services.completion_service import mark_complete, preloaded_completion_lookup
from morning_dashboard.services.dashboard_service import build_dashboard, countdown_label, today_progress
from morning_dashboard.services.seed_service import seed_sample_data
from morning_dashboard.services.settings_service import SettingsCache, SettingsStore

NOW = datetime.datetime(2026, 10, 19, 7, 0)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (datetime.timedelta(days=9, hours=5), "9 days"),
        (datetime.timedelta(days=3, hours=4), "3 days, 4 hours"),
        (datetime.timedelta(days=1, hours=2), "1 day, 2 hours"),
        (datetime.timedelta(hours=5, minutes=12), "5 hours, 12 min"),
        (datetime.timedelta(minutes=45), "45 minutes"),
        (datetime.timedelta(0), "Past"),
        (-datetime.timedelta(hours=1), "Past"),
    ],
)
def test_countdown_label(delta, expected):
    assert countdown_label(NOW + delta, NOW) == expected


def test_today_progress_rounds_and_handles_empty(make_child, make_routine_item):
    child = make_child()
    items = [make_routine_item(child, name=f"Task {index}", display_order=index) for index in range(3)]
    done = {items[0].id, items[1].id}

    def lookup(item, _date):
        return item.id in done

    assert today_progress(items, lookup, NOW.date()) == 67
    assert today_progress([], preloaded_completion_lookup([]), NOW.date()) == 100


def test_build_dashboard_payload(db, now, make_child, make_routine_item, make_departure, make_event, make_event_item):
    emma = make_child(name="Emma", display_order=1)
    jack = make_child(name="Jack", display_order=0)
    brush = make_routine_item(emma, name="Brush teeth", display_order=0)
    make_routine_item(emma, name="Make bed", display_order=1)
    bus = make_departure(name="School Bus", departure_time=datetime.time(7, 45))
    backpack = make_event_item(EVENTABLE_DEPARTURE_TIME, bus.id, emma, name="Backpack")
    make_event(name="Party", starts_at=now + datetime.timedelta(days=3, hours=7), color="#EC4899")
    mark_complete(db, brush, now.date())
    mark_complete(db, backpack, now.date())

    store = SettingsStore(SettingsCache(ttl=0))
    store.set(db, "weather.enabled", True)

    payload = build_dashboard(db, store, now)

    assert payload["weather_enabled"] is True
    assert payload["next_departure"]["name"] == "School Bus"
    assert payload["next_departure"]["seconds_remaining"] == 45 * 60
    assert payload["next_event"]["name"] == "School Bus"
    assert [child["name"] for child in payload["children"]] == ["Jack", "Emma"]

    jack_payload, emma_payload = payload["children"]
    assert jack_payload["id"] == jack.id
    assert jack_payload["today_progress"] == 100
    assert jack_payload["event_routine_items"] == []
    assert emma_payload["today_progress"] == 50
    assert [(item["name"], item["is_completed"]) for item in emma_payload["routine_items"]] == [
        ("Brush teeth", True),
        ("Make bed", False),
    ]
    assert emma_payload["event_routine_items"] == [
        {"id": backpack.id, "name": "Backpack", "display_order": 0, "is_completed": True}
    ]

    (event,) = payload["upcoming_events"]
    assert event["name"] == "Party"
    assert event["countdown"] == "3 days, 7 hours"
    assert event["starts_at_formatted"] == "Oct 22, 2:00 PM"


def test_build_dashboard_with_empty_database(db, now):
    payload = build_dashboard(db, SettingsStore(SettingsCache(ttl=0)), now)

    assert payload["children"] == []
    assert payload["next_departure"] is None
    assert payload["next_event"] is None
    assert payload["upcoming_events"] == []
    assert payload["weather_enabled"] is False


def test_upcoming_event_limit_comes_from_config(db, now, make_event, monkeypatch):
    monkeypatch.setenv("DASHBOARD_UPCOMING_EVENT_LIMIT", "2")
    for day in range(1, 5):
        make_event(name=f"Event {day}", starts_at=now + datetime.timedelta(days=day))

    payload = build_dashboard(db, SettingsStore(SettingsCache(ttl=0)), now)

    assert [event["name"] for event in payload["upcoming_events"]] == ["Event 1", "Event 2"]


def test_seed_sample_data_runs_once(db, now):
    messages = seed_sample_data(db, now)

    assert messages
    payload = build_dashboard(db, SettingsStore(SettingsCache(ttl=0)), now)
    assert [child["name"] for child in payload["children"]] == ["Emma", "Jack"]
    assert payload["next_departure"]["name"] == "Bus arrives"
    assert len(payload["upcoming_events"]) == 3
    assert seed_sample_data(db, now) == []
