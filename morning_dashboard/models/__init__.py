"""SQLModel exports for Morning Dashboard."""

from .household_models import Child, RoutineCompletion, RoutineItem, RoutineItemTemplate
from .schedule_models import (
    DEFAULT_APPLICABLE_DAYS,
    EVENTABLE_CALENDAR_EVENT,
    EVENTABLE_DEPARTURE_TIME,
    EVENTABLE_KINDS,
    WEEKDAY_NAMES,
    CalendarEvent,
    DepartureTime,
    EventRoutineCompletion,
    EventRoutineItem,
)
from .setting_models import Setting

__all__ = [
    "Child",
    "RoutineItem",
    "RoutineCompletion",
    "RoutineItemTemplate",
    "DepartureTime",
    "CalendarEvent",
    "EventRoutineItem",
    "EventRoutineCompletion",
    "Setting",
    "EVENTABLE_DEPARTURE_TIME",
    "EVENTABLE_CALENDAR_EVENT",
    "EVENTABLE_KINDS",
    "WEEKDAY_NAMES",
    "DEFAULT_APPLICABLE_DAYS",
]
