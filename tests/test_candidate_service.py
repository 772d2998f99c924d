import datetime

from morning_dashboard.models import EVENTABLE_CALENDAR_EVENT, EVENTABLE_DEPARTURE_TIME, DepartureTime
from morning_dashboard.services.candidate_service import (
    EventableRef,
    collect_candidates,
    effective_time,
    get_eventable,
    soonest_candidate,
)


def test_collect_candidates_orders_departures_and_events(db, now, make_departure, make_event):
    make_departure(name="Bus", departure_time=datetime.time(8, 0))
    make_event(name="Dentist", starts_at=now + datetime.timedelta(minutes=90))
    make_event(name="Party", starts_at=now + datetime.timedelta(days=2))

    names = [candidate.name for candidate in collect_candidates(db, now)]

    assert names == ["Bus", "Dentist", "Party"]


def test_past_events_and_inactive_departures_are_not_candidates(db, now, make_departure, make_event):
    make_departure(name="Inactive", is_active=False)
    make_event(name="Yesterday", starts_at=now - datetime.timedelta(days=1))
    # 日本語: 開始は未来でも出発時刻が過去なら対象外 / English: Future start but past departure is excluded
    make_event(
        name="Already left",
        starts_at=now + datetime.timedelta(minutes=30),
        departure_time=now - datetime.timedelta(minutes=5),
    )

    assert collect_candidates(db, now) == []


def test_event_effective_time_prefers_departure(db, now, make_event):
    event = make_event(
        starts_at=now + datetime.timedelta(hours=3),
        departure_time=now + datetime.timedelta(hours=2),
    )

    candidate = soonest_candidate(collect_candidates(db, now))

    assert effective_time(event) == now + datetime.timedelta(hours=2)
    assert candidate.effective_at == now + datetime.timedelta(hours=2)
    assert candidate.has_departure is True
    assert candidate.eventable == EventableRef(EVENTABLE_CALENDAR_EVENT, event.id)


def test_equal_times_resolve_deterministically(db, now, make_departure, make_event):
    departure = make_departure(name="Bus", departure_time=datetime.time(8, 0))
    make_event(name="Same time", starts_at=datetime.datetime.combine(now.date(), datetime.time(8, 0)))

    winners = {soonest_candidate(collect_candidates(db, now)).eventable for _ in range(5)}

    assert winners == {EventableRef.for_departure(departure)}


def test_equal_event_times_break_ties_by_id(db, now, make_event):
    starts_at = now + datetime.timedelta(hours=1)
    first = make_event(name="First", starts_at=starts_at)
    make_event(name="Second", starts_at=starts_at)

    assert soonest_candidate(collect_candidates(db, now)).eventable.id == first.id


def test_departure_with_malformed_days_is_skipped(db, now, make_departure):
    make_departure(name="Broken", applicable_days=["notaday"])
    good = make_departure(name="Good")

    candidates = collect_candidates(db, now)

    assert [candidate.eventable for candidate in candidates] == [EventableRef.for_departure(good)]


def test_get_eventable_dispatches_on_kind(db, make_departure, make_event):
    departure = make_departure()
    event = make_event()

    assert isinstance(get_eventable(db, EventableRef(EVENTABLE_DEPARTURE_TIME, departure.id)), DepartureTime)
    assert get_eventable(db, EventableRef(EVENTABLE_CALENDAR_EVENT, event.id)).name == event.name
    assert get_eventable(db, EventableRef("unknown", 1)) is None
    assert get_eventable(db, EventableRef(EVENTABLE_CALENDAR_EVENT, 999)) is None
