"""Admin operations for departure times, calendar events and event routines."""

from __future__ import annotations

import datetime
import logging
from typing import Any, List

from dateutil import parser as date_parser
from sqlmodel import Session, select

from morning_dashboard.models import (
    DEFAULT_APPLICABLE_DAYS,
    EVENTABLE_KINDS,
    WEEKDAY_NAMES,
    CalendarEvent,
    DepartureTime,
    EventRoutineItem,
)
from morning_dashboard.services.candidate_service import EventableRef, get_eventable
from morning_dashboard.services.errors import InvalidInputError, RecordNotFoundError
from morning_dashboard.services.household_admin_service import (
    _clean_color,
    _clean_name,
    _clean_order,
    _next_order,
    get_child,
)
from morning_dashboard.services.next_routine_service import list_event_routine_items

logger = logging.getLogger(__name__)

EVENT_CATEGORIES = (
    "birthday",
    "sports",
    "school",
    "appointment",
    "family",
    "holiday",
    "other",
)


def _parse_time_of_day(value: Any) -> datetime.time:
    if isinstance(value, datetime.time):
        return value.replace(microsecond=0)
    if isinstance(value, str):
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.datetime.strptime(value.strip(), fmt).time()
            except ValueError:
                continue
    raise InvalidInputError("departure_time must be in HH:MM format")


def _parse_datetime(value: Any, label: str) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.isoparse(value.strip())
        except ValueError:
            raise InvalidInputError(f"{label} must be an ISO 8601 datetime") from None
    else:
        raise InvalidInputError(f"{label} is required")
    # 日本語: ホストのローカル時刻で保持 / English: Stored as naive host-local time
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.replace(microsecond=0)


def _clean_applicable_days(value: Any) -> List[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)) or not value:
        raise InvalidInputError("applicable_days must be a non-empty list of weekday names")
    days = []
    for day in value:
        name = day.strip().lower() if isinstance(day, str) else None
        if name not in WEEKDAY_NAMES:
            raise InvalidInputError(f"Unknown weekday: {day!r}")
        if name not in days:
            days.append(name)
    # 日本語: 月曜始まりの順に並べ替え / English: Keep Monday-first week order
    return sorted(days, key=WEEKDAY_NAMES.index)


def _clean_category(value: Any) -> str | None:
    if value in (None, ""):
        return None
    if value not in EVENT_CATEGORIES:
        raise InvalidInputError(f"category must be one of: {', '.join(EVENT_CATEGORIES)}")
    return value


def delete_eventable_routines(db: Session, ref: EventableRef) -> int:
    """Delete every event routine item owned by ``ref``; completions go with them."""
    items = list_event_routine_items(db, ref)
    for item in items:
        db.delete(item)
    return len(items)


def get_departure(db: Session, departure_id: int) -> DepartureTime:
    departure = db.get(DepartureTime, departure_id)
    if departure is None:
        raise RecordNotFoundError(f"Departure time {departure_id} not found")
    return departure


def list_departures(db: Session) -> List[DepartureTime]:
    statement = select(DepartureTime).order_by(DepartureTime.departure_time, DepartureTime.id)
    return list(db.exec(statement).all())


def create_departure(
    db: Session,
    name: Any,
    departure_time: Any,
    applicable_days: Any = None,
    is_active: Any = True,
    display_order: Any = None,
) -> DepartureTime:
    days = list(DEFAULT_APPLICABLE_DAYS) if applicable_days is None else _clean_applicable_days(applicable_days)
    order = (
        _next_order(db, DepartureTime.display_order)
        if display_order is None
        else _clean_order(display_order)
    )
    departure = DepartureTime(
        name=_clean_name(name),
        departure_time=_parse_time_of_day(departure_time),
        applicable_days=days,
        is_active=bool(is_active),
        display_order=order,
    )
    db.add(departure)
    db.commit()
    db.refresh(departure)
    return departure


def update_departure(db: Session, departure_id: int, **changes: Any) -> DepartureTime:
    departure = get_departure(db, departure_id)
    if "name" in changes:
        departure.name = _clean_name(changes["name"])
    if "departure_time" in changes:
        departure.departure_time = _parse_time_of_day(changes["departure_time"])
    if "applicable_days" in changes:
        departure.applicable_days = _clean_applicable_days(changes["applicable_days"])
    if "is_active" in changes:
        departure.is_active = bool(changes["is_active"])
    if "display_order" in changes:
        departure.display_order = _clean_order(changes["display_order"])
    db.add(departure)
    db.commit()
    db.refresh(departure)
    return departure


def toggle_departure_active(db: Session, departure_id: int) -> DepartureTime:
    departure = get_departure(db, departure_id)
    departure.is_active = not departure.is_active
    db.add(departure)
    db.commit()
    db.refresh(departure)
    return departure


def delete_departure(db: Session, departure_id: int) -> None:
    departure = get_departure(db, departure_id)
    removed = delete_eventable_routines(db, EventableRef.for_departure(departure))
    db.delete(departure)
    db.commit()
    logger.info("Deleted departure time %s and %d event routine items", departure_id, removed)


def get_event(db: Session, event_id: int) -> CalendarEvent:
    event = db.get(CalendarEvent, event_id)
    if event is None:
        raise RecordNotFoundError(f"Calendar event {event_id} not found")
    return event


def list_events(db: Session, scope: str = "upcoming", now: datetime.datetime | None = None) -> List[CalendarEvent]:
    now = now or datetime.datetime.now()
    statement = select(CalendarEvent)
    if scope == "upcoming":
        statement = statement.where(CalendarEvent.starts_at > now).order_by(CalendarEvent.starts_at)
    elif scope == "past":
        statement = statement.where(CalendarEvent.starts_at <= now).order_by(CalendarEvent.starts_at.desc())
    elif scope == "all":
        statement = statement.order_by(CalendarEvent.starts_at)
    else:
        raise InvalidInputError("scope must be one of: upcoming, past, all")
    return list(db.exec(statement).all())


def list_upcoming_events(db: Session, limit: int, now: datetime.datetime | None = None) -> List[CalendarEvent]:
    now = now or datetime.datetime.now()
    statement = (
        select(CalendarEvent)
        .where(CalendarEvent.starts_at > now)
        .order_by(CalendarEvent.starts_at, CalendarEvent.id)
        .limit(limit)
    )
    return list(db.exec(statement).all())


def _check_departure_before_start(starts_at: datetime.datetime, departure_time: datetime.datetime | None) -> None:
    if departure_time is not None and departure_time >= starts_at:
        raise InvalidInputError("departure_time must be before starts_at")


def create_event(
    db: Session,
    name: Any,
    starts_at: Any,
    departure_time: Any = None,
    category: Any = None,
    color: Any = "#3B82F6",
) -> CalendarEvent:
    start = _parse_datetime(starts_at, "starts_at")
    departure = None if departure_time in (None, "") else _parse_datetime(departure_time, "departure_time")
    _check_departure_before_start(start, departure)
    event = CalendarEvent(
        name=_clean_name(name),
        starts_at=start,
        departure_time=departure,
        category=_clean_category(category),
        color=_clean_color(color, "color"),
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def update_event(db: Session, event_id: int, **changes: Any) -> CalendarEvent:
    event = get_event(db, event_id)
    start = _parse_datetime(changes["starts_at"], "starts_at") if "starts_at" in changes else event.starts_at
    if "departure_time" in changes:
        raw_departure = changes["departure_time"]
        departure = None if raw_departure in (None, "") else _parse_datetime(raw_departure, "departure_time")
    else:
        departure = event.departure_time
    _check_departure_before_start(start, departure)

    if "name" in changes:
        event.name = _clean_name(changes["name"])
    if "category" in changes:
        event.category = _clean_category(changes["category"])
    if "color" in changes:
        event.color = _clean_color(changes["color"], "color")
    event.starts_at = start
    event.departure_time = departure
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def delete_event(db: Session, event_id: int) -> None:
    event = get_event(db, event_id)
    removed = delete_eventable_routines(db, EventableRef.for_event(event))
    db.delete(event)
    db.commit()
    logger.info("Deleted calendar event %s and %d event routine items", event_id, removed)


def parse_eventable_ref(kind: Any, eventable_id: Any) -> EventableRef:
    if kind not in EVENTABLE_KINDS:
        raise InvalidInputError(f"eventable_type must be one of: {', '.join(EVENTABLE_KINDS)}")
    if isinstance(eventable_id, bool) or not isinstance(eventable_id, int):
        raise InvalidInputError("eventable_id must be an integer")
    return EventableRef(kind, eventable_id)


def _require_eventable(db: Session, ref: EventableRef):
    eventable = get_eventable(db, ref)
    if eventable is None:
        raise RecordNotFoundError(f"{ref.kind} {ref.id} not found")
    return eventable


def get_event_routine_item(db: Session, item_id: int) -> EventRoutineItem:
    item = db.get(EventRoutineItem, item_id)
    if item is None:
        raise RecordNotFoundError(f"Event routine item {item_id} not found")
    return item


def _ensure_unique_event_routine(
    db: Session, ref: EventableRef, child_id: int, name: str, exclude_id: int | None = None
) -> None:
    statement = select(EventRoutineItem).where(
        EventRoutineItem.eventable_type == ref.kind,
        EventRoutineItem.eventable_id == ref.id,
        EventRoutineItem.child_id == child_id,
        EventRoutineItem.name == name,
    )
    existing = db.exec(statement).first()
    if existing is not None and existing.id != exclude_id:
        raise InvalidInputError(f"'{name}' already exists for this child and event")


def list_event_routines(db: Session, ref: EventableRef, child_id: int | None = None) -> List[EventRoutineItem]:
    _require_eventable(db, ref)
    return list_event_routine_items(db, ref, child_id)


def add_event_routine_item(
    db: Session, ref: EventableRef, child_id: Any, name: Any, display_order: Any = None
) -> EventRoutineItem:
    _require_eventable(db, ref)
    if isinstance(child_id, bool) or not isinstance(child_id, int):
        raise InvalidInputError("child_id must be an integer")
    get_child(db, child_id)
    clean = _clean_name(name)
    _ensure_unique_event_routine(db, ref, child_id, clean)
    if display_order is None:
        order = _next_order(
            db,
            EventRoutineItem.display_order,
            EventRoutineItem.eventable_type == ref.kind,
            EventRoutineItem.eventable_id == ref.id,
        )
    else:
        order = _clean_order(display_order)
    item = EventRoutineItem(
        eventable_type=ref.kind,
        eventable_id=ref.id,
        child_id=child_id,
        name=clean,
        display_order=order,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_event_routine_item(db: Session, item_id: int, **changes: Any) -> EventRoutineItem:
    item = get_event_routine_item(db, item_id)
    ref = EventableRef(item.eventable_type, item.eventable_id)
    child_id = changes.get("child_id", item.child_id)
    if isinstance(child_id, bool) or not isinstance(child_id, int):
        raise InvalidInputError("child_id must be an integer")
    get_child(db, child_id)
    name = _clean_name(changes["name"]) if "name" in changes else item.name
    _ensure_unique_event_routine(db, ref, child_id, name, exclude_id=item.id)

    item.child_id = child_id
    item.name = name
    if "display_order" in changes:
        item.display_order = _clean_order(changes["display_order"])
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def delete_event_routine_item(db: Session, item_id: int) -> None:
    db.delete(get_event_routine_item(db, item_id))
    db.commit()


__all__ = [
    "EVENT_CATEGORIES",
    "delete_eventable_routines",
    "get_departure",
    "list_departures",
    "create_departure",
    "update_departure",
    "toggle_departure_active",
    "delete_departure",
    "get_event",
    "list_events",
    "list_upcoming_events",
    "create_event",
    "update_event",
    "delete_event",
    "parse_eventable_ref",
    "get_event_routine_item",
    "list_event_routines",
    "add_event_routine_item",
    "update_event_routine_item",
    "delete_event_routine_item",
]
