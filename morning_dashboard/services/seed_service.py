"""Sample household data for manual checks."""

from __future__ import annotations

import datetime
from typing import List

from sqlmodel import Session, select

from morning_dashboard.models import CalendarEvent, Child, DepartureTime, RoutineItem

_SAMPLE_ROUTINES = {
    "Emma": ["Brush teeth", "Wash face", "Get dressed", "Make bed", "Eat breakfast", "Pack backpack"],
    "Jack": ["Brush teeth", "Get dressed", "Eat breakfast", "Feed the dog", "Pack backpack", "Put on shoes"],
}
_SAMPLE_COLORS = ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6"]


def seed_sample_data(db: Session, now: datetime.datetime | None = None) -> List[str]:
    """Seed two children, a weekday bus and three upcoming events.

    Returns one message per seeded group; an empty list means children
    already exist and nothing was written.
    """
    now = now or datetime.datetime.now()
    if db.exec(select(Child)).first() is not None:
        return []

    messages = []
    for index, (child_name, item_names) in enumerate(_SAMPLE_ROUTINES.items()):
        child = Child(
            name=child_name,
            avatar_color=_SAMPLE_COLORS[index % len(_SAMPLE_COLORS)],
            display_order=index,
        )
        db.add(child)
        db.flush()
        for order, item_name in enumerate(item_names):
            db.add(RoutineItem(child_id=child.id, name=item_name, display_order=order))
        messages.append(f"Seeded child '{child_name}' with {len(item_names)} routine items")

    db.add(
        DepartureTime(
            name="Bus arrives",
            departure_time=datetime.time(7, 45),
            applicable_days=["monday", "tuesday", "wednesday", "thursday", "friday"],
            is_active=True,
            display_order=0,
        )
    )
    messages.append("Seeded departure 'Bus arrives'")

    # 日本語: 現在時刻からの相対日で予定を作成 / English: Events are placed relative to the current date
    events = [
        ("Emma's Birthday Party", 3, datetime.time(14, 0), "birthday", "#EC4899"),
        ("Soccer Tournament", 7, datetime.time(9, 0), "sports", "#10B981"),
        ("Parent-Teacher Conference", 14, datetime.time(16, 30), "school", "#3B82F6"),
    ]
    for name, days_ahead, time_value, category, color in events:
        starts_at = datetime.datetime.combine(now.date() + datetime.timedelta(days=days_ahead), time_value)
        db.add(CalendarEvent(name=name, starts_at=starts_at, category=category, color=color))
    messages.append(f"Seeded {len(events)} calendar events")

    db.commit()
    return messages


__all__ = ["seed_sample_data"]
