"""Upcoming-event candidate collection shared by the resolvers."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Iterable, List

from sqlalchemy import and_, or_
from sqlmodel import Session, select

from morning_dashboard.models import (
    EVENTABLE_CALENDAR_EVENT,
    EVENTABLE_DEPARTURE_TIME,
    CalendarEvent,
    DepartureTime,
)
from morning_dashboard.services.recurrence_service import next_occurrence

logger = logging.getLogger(__name__)

# 日本語: 同時刻の候補を安定させるための順位 / English: Rank that keeps equal-time candidates in a stable order
_SOURCE_RANK = {EVENTABLE_DEPARTURE_TIME: 0, EVENTABLE_CALENDAR_EVENT: 1}

_EVENTABLE_MODELS = {
    EVENTABLE_DEPARTURE_TIME: DepartureTime,
    EVENTABLE_CALENDAR_EVENT: CalendarEvent,
}


@dataclass(frozen=True)
class EventableRef:
    """Owner of an event routine item: a departure time or a calendar event."""

    kind: str
    id: int

    @classmethod
    def for_departure(cls, departure: DepartureTime) -> "EventableRef":
        return cls(EVENTABLE_DEPARTURE_TIME, departure.id)

    @classmethod
    def for_event(cls, event: CalendarEvent) -> "EventableRef":
        return cls(EVENTABLE_CALENDAR_EVENT, event.id)


@dataclass(frozen=True)
class Candidate:
    effective_at: datetime.datetime
    name: str
    source: str
    eventable: EventableRef
    has_departure: bool

    @property
    def timestamp(self) -> int:
        return int(self.effective_at.timestamp())

    def sort_key(self):
        return (self.effective_at, _SOURCE_RANK.get(self.source, len(_SOURCE_RANK)), self.eventable.id)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "timestamp": self.timestamp,
            "effective_at": self.effective_at.isoformat(),
            "source": self.source,
            "eventable_id": self.eventable.id,
        }


def get_eventable(db: Session, ref: EventableRef):
    model = _EVENTABLE_MODELS.get(ref.kind)
    if model is None:
        return None
    return db.get(model, ref.id)


def effective_time(event: CalendarEvent) -> datetime.datetime:
    return event.departure_time or event.starts_at


def _departure_candidates(db: Session, now: datetime.datetime) -> List[Candidate]:
    departures = db.exec(select(DepartureTime).where(DepartureTime.is_active == True)).all()  # noqa: E712
    candidates = []
    for departure in departures:
        if departure.id is None or not departure.name:
            logger.warning("Skipping departure time without id or name: %r", departure)
            continue
        occurrence = next_occurrence(departure, now)
        if occurrence is None:
            continue
        candidates.append(
            Candidate(
                effective_at=occurrence,
                name=departure.name,
                source=EVENTABLE_DEPARTURE_TIME,
                eventable=EventableRef.for_departure(departure),
                has_departure=True,
            )
        )
    return candidates


def _calendar_candidates(db: Session, now: datetime.datetime) -> List[Candidate]:
    # 日本語: 出発時刻があればそれ、なければ開始時刻が未来の予定 / English: Future by departure time when set, else by start
    statement = select(CalendarEvent).where(
        or_(
            and_(CalendarEvent.departure_time.is_not(None), CalendarEvent.departure_time > now),
            and_(CalendarEvent.departure_time.is_(None), CalendarEvent.starts_at > now),
        )
    )
    candidates = []
    for event in db.exec(statement).all():
        if event.id is None or not event.name or event.starts_at is None:
            logger.warning("Skipping malformed calendar event: %r", event)
            continue
        effective_at = effective_time(event)
        if effective_at <= now:
            continue
        candidates.append(
            Candidate(
                effective_at=effective_at,
                name=event.name,
                source=EVENTABLE_CALENDAR_EVENT,
                eventable=EventableRef.for_event(event),
                has_departure=event.departure_time is not None,
            )
        )
    return candidates


def sort_candidates(candidates: Iterable[Candidate]) -> List[Candidate]:
    return sorted(candidates, key=lambda candidate: candidate.sort_key())


def soonest_candidate(candidates: Iterable[Candidate]) -> Candidate | None:
    ordered = sort_candidates(candidates)
    return ordered[0] if ordered else None


def collect_candidates(db: Session, now: datetime.datetime | None = None) -> List[Candidate]:
    """All future departures and calendar events, soonest first."""
    now = now or datetime.datetime.now()
    candidates = _departure_candidates(db, now) + _calendar_candidates(db, now)
    return sort_candidates(candidates)


__all__ = [
    "EventableRef",
    "Candidate",
    "get_eventable",
    "effective_time",
    "sort_candidates",
    "soonest_candidate",
    "collect_candidates",
]
