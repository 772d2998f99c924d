"""Service-layer exports."""

from .candidate_service import Candidate, EventableRef, collect_candidates, get_eventable, soonest_candidate
from .completion_service import (
    is_item_completed,
    mark_complete,
    mark_incomplete,
    preloaded_completion_lookup,
    storage_completion_lookup,
    toggle_completion,
)
from .dashboard_service import build_dashboard
from .departure_service import NextDeparture, resolve_next_departure
from .errors import InvalidInputError, RecordNotFoundError
from .next_routine_service import (
    NextRoutines,
    SharedNextRoutines,
    resolve_next_routines_for_child,
    resolve_next_routines_for_children,
)
from .recurrence_service import applies_to_date, next_occurrence, seconds_remaining
from .seed_service import seed_sample_data
from .settings_service import SettingsCache, SettingsStore

__all__ = [
    "applies_to_date",
    "next_occurrence",
    "seconds_remaining",
    "Candidate",
    "EventableRef",
    "collect_candidates",
    "get_eventable",
    "soonest_candidate",
    "NextDeparture",
    "resolve_next_departure",
    "NextRoutines",
    "SharedNextRoutines",
    "resolve_next_routines_for_child",
    "resolve_next_routines_for_children",
    "is_item_completed",
    "mark_complete",
    "mark_incomplete",
    "toggle_completion",
    "preloaded_completion_lookup",
    "storage_completion_lookup",
    "build_dashboard",
    "seed_sample_data",
    "SettingsCache",
    "SettingsStore",
    "InvalidInputError",
    "RecordNotFoundError",
]
