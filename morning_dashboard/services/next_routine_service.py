"""Routine items for the truly-next event, per child."""

from __future__ import annotations

import datetime
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

from sqlmodel import Session, select

from morning_dashboard.models import Child, EventRoutineItem
from morning_dashboard.services.candidate_service import (
    Candidate,
    EventableRef,
    collect_candidates,
    soonest_candidate,
)


@dataclass
class NextRoutines:
    event: Candidate
    items: List[EventRoutineItem] = field(default_factory=list)


@dataclass
class SharedNextRoutines:
    """The dashboard-wide next event and its routine items keyed by child id."""

    event: Candidate
    items_by_child: Dict[int, List[EventRoutineItem]] = field(default_factory=dict)


def list_event_routine_items(
    db: Session, ref: EventableRef, child_id: int | None = None
) -> List[EventRoutineItem]:
    statement = select(EventRoutineItem).where(
        EventRoutineItem.eventable_type == ref.kind,
        EventRoutineItem.eventable_id == ref.id,
    )
    if child_id is not None:
        statement = statement.where(EventRoutineItem.child_id == child_id)
    statement = statement.order_by(EventRoutineItem.display_order, EventRoutineItem.id)
    return list(db.exec(statement).all())


def resolve_next_routines_for_child(
    db: Session, child: Child, now: datetime.datetime | None = None
) -> NextRoutines | None:
    """Routine items the child needs for the very next event.

    Only the soonest candidate is considered. When it has no items for this
    child the result is None, even if a later event has some.
    """
    if child is None or child.id is None:
        return None
    next_event = soonest_candidate(collect_candidates(db, now))
    if next_event is None:
        return None

    items = list_event_routine_items(db, next_event.eventable, child.id)
    if not items:
        return None
    return NextRoutines(event=next_event, items=items)


def resolve_next_routines_for_children(
    db: Session, now: datetime.datetime | None = None
) -> SharedNextRoutines | None:
    next_event = soonest_candidate(collect_candidates(db, now))
    if next_event is None:
        return None

    items = list_event_routine_items(db, next_event.eventable)
    if not items:
        return None

    grouped: Dict[int, List[EventRoutineItem]] = defaultdict(list)
    for item in items:
        grouped[item.child_id].append(item)
    return SharedNextRoutines(event=next_event, items_by_child=dict(grouped))


__all__ = [
    "NextRoutines",
    "SharedNextRoutines",
    "list_event_routine_items",
    "resolve_next_routines_for_child",
    "resolve_next_routines_for_children",
]
