"""Soonest departure across recurring departures and calendar events."""

from __future__ import annotations

import datetime
from dataclasses import dataclass

from sqlmodel import Session

from morning_dashboard.services.candidate_service import Candidate, collect_candidates, soonest_candidate


@dataclass(frozen=True)
class NextDeparture:
    timestamp: int
    name: str
    source: str
    departs_at: datetime.datetime

    def seconds_remaining(self, now: datetime.datetime | None = None) -> int:
        now = now or datetime.datetime.now()
        return int((self.departs_at - now).total_seconds())

    def to_dict(self, now: datetime.datetime | None = None) -> dict:
        return {
            "timestamp": self.timestamp,
            "name": self.name,
            "source": self.source,
            "departs_at": self.departs_at.isoformat(),
            "seconds_remaining": self.seconds_remaining(now),
        }


def is_departure_candidate(candidate: Candidate) -> bool:
    # 日本語: 出発時刻のない予定はカウントダウン対象外 / English: Events without a departure time are not departures
    return candidate.has_departure


def resolve_next_departure(db: Session, now: datetime.datetime | None = None) -> NextDeparture | None:
    now = now or datetime.datetime.now()
    candidates = [c for c in collect_candidates(db, now) if is_departure_candidate(c)]
    soonest = soonest_candidate(candidates)
    if soonest is None:
        return None
    return NextDeparture(
        timestamp=soonest.timestamp,
        name=soonest.name,
        source=soonest.source,
        departs_at=soonest.effective_at,
    )


__all__ = ["NextDeparture", "is_departure_candidate", "resolve_next_departure"]
