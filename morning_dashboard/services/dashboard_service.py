"""Dashboard payload assembly."""

from __future__ import annotations

import datetime
from typing import Any, Dict, List

from sqlmodel import Session

from morning_dashboard.core.config import get_upcoming_event_limit
from morning_dashboard.models import CalendarEvent, Child
from morning_dashboard.services.completion_service import (
    CompletionLookup,
    is_item_completed,
    load_completions_for_date,
    preloaded_completion_lookup,
)
from morning_dashboard.services.departure_service import resolve_next_departure
from morning_dashboard.services.household_admin_service import list_children
from morning_dashboard.services.next_routine_service import resolve_next_routines_for_children
from morning_dashboard.services.schedule_admin_service import list_upcoming_events
from morning_dashboard.services.settings_service import SettingsStore


def countdown_label(starts_at: datetime.datetime, now: datetime.datetime | None = None) -> str:
    """Human countdown such as "2 days, 3 hours" or "45 minutes"."""
    now = now or datetime.datetime.now()
    if starts_at <= now:
        return "Past"

    delta = starts_at - now
    days = delta.days
    hours, remainder = divmod(delta.seconds, 3600)
    minutes = remainder // 60

    if days > 7:
        return f"{days} days"
    if days >= 2:
        return f"{days} days, {hours} hours"
    if days == 1:
        return f"1 day, {hours} hours"
    if hours > 0:
        return f"{hours} hours, {minutes} min"
    return f"{minutes} minutes"


def today_progress(items: List[Any], lookup: CompletionLookup, today: datetime.date) -> int:
    # 日本語: 項目がない子は 100% 扱い / English: A child without items counts as fully done
    if not items:
        return 100
    completed = sum(1 for item in items if is_item_completed(item, lookup, today))
    return int(completed * 100 / len(items) + 0.5)


def _serialize_item(item, lookup: CompletionLookup, today: datetime.date) -> Dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "display_order": item.display_order,
        "is_completed": is_item_completed(item, lookup, today),
    }


def _format_starts_at(value: datetime.datetime) -> str:
    # 日本語: 例 "Jan 5, 2:00 PM" / English: e.g. "Jan 5, 2:00 PM"
    hour = value.hour % 12 or 12
    return f"{value.strftime('%b')} {value.day}, {hour}:{value.minute:02d} {value.strftime('%p')}"


def _serialize_event(event: CalendarEvent, now: datetime.datetime) -> Dict[str, Any]:
    return {
        "id": event.id,
        "name": event.name,
        "timestamp": int(event.starts_at.timestamp()),
        "starts_at": event.starts_at.isoformat(),
        "starts_at_formatted": _format_starts_at(event.starts_at),
        "color": event.color,
        "category": event.category,
        "countdown": countdown_label(event.starts_at, now),
    }


def serialize_child(
    child: Child,
    lookup: CompletionLookup,
    today: datetime.date,
    event_items: List[Any] | None = None,
) -> Dict[str, Any]:
    routine_items = sorted(child.routine_items, key=lambda item: (item.display_order, item.id))
    return {
        "id": child.id,
        "name": child.name,
        "avatar_color": child.avatar_color,
        "display_order": child.display_order,
        "today_progress": today_progress(routine_items, lookup, today),
        "routine_items": [_serialize_item(item, lookup, today) for item in routine_items],
        "event_routine_items": [_serialize_item(item, lookup, today) for item in event_items or []],
    }


def build_dashboard(
    db: Session,
    settings: SettingsStore,
    now: datetime.datetime | None = None,
) -> Dict[str, Any]:
    now = now or datetime.datetime.now()
    today = now.date()

    children = list_children(db)
    shared = resolve_next_routines_for_children(db, now)
    items_by_child = shared.items_by_child if shared else {}

    # 日本語: 本日の完了記録を一括取得して N+1 を回避 / English: Prefetch today's completions in bulk to avoid N+1 queries
    all_items: List[Any] = [item for child in children for item in child.routine_items]
    for event_items in items_by_child.values():
        all_items.extend(event_items)
    lookup = preloaded_completion_lookup(load_completions_for_date(db, all_items, today))

    next_departure = resolve_next_departure(db, now)
    upcoming = list_upcoming_events(db, get_upcoming_event_limit(), now)

    return {
        "now": now.isoformat(),
        "weather_enabled": settings.is_weather_enabled(db),
        "next_departure": next_departure.to_dict(now) if next_departure else None,
        "next_event": shared.event.to_dict() if shared else None,
        "upcoming_events": [_serialize_event(event, now) for event in upcoming],
        "children": [
            serialize_child(child, lookup, today, items_by_child.get(child.id)) for child in children
        ],
    }


__all__ = ["countdown_label", "today_progress", "serialize_child", "build_dashboard"]
