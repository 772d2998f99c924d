"""Schedule SQLModel models: departures, calendar events and event routines."""

import datetime

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from .household_models import Child

# 日本語: イベント用日課の所有者種別 / English: Owner kinds of an event routine item
EVENTABLE_DEPARTURE_TIME = "departure_time"
EVENTABLE_CALENDAR_EVENT = "calendar_event"
EVENTABLE_KINDS = (EVENTABLE_DEPARTURE_TIME, EVENTABLE_CALENDAR_EVENT)

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
DEFAULT_APPLICABLE_DAYS = list(WEEKDAY_NAMES[:5])


# 日本語: 毎週繰り返す出発時刻 / English: Weekly recurring departure time
class DepartureTime(SQLModel, table=True):
    __tablename__ = "departure_time"

    # 日本語: 曜日は小文字英語名の JSON 配列 / English: Weekdays are a JSON list of lowercase English names
    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    departure_time: datetime.time
    applicable_days: list[str] = Field(
        default_factory=lambda: list(DEFAULT_APPLICABLE_DAYS),
        sa_column=Column(JSON, nullable=False),
    )
    is_active: bool = Field(default=True)
    display_order: int = Field(default=0)


# 日本語: 単発のカレンダー予定 / English: One-off calendar event
class CalendarEvent(SQLModel, table=True):
    __tablename__ = "calendar_event"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    starts_at: datetime.datetime = Field(index=True)
    departure_time: datetime.datetime | None = Field(default=None)
    category: str | None = Field(default=None, max_length=50)
    color: str = Field(default="#3B82F6", max_length=20)


# 日本語: 出発時刻または予定に紐づく子ども別の準備項目 / English: Per-child prep item owned by a departure or event
class EventRoutineItem(SQLModel, table=True):
    __tablename__ = "event_routine_item"
    __table_args__ = (
        UniqueConstraint(
            "eventable_type", "eventable_id", "child_id", "name", name="event_routine_unique"
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    eventable_type: str = Field(max_length=30)
    eventable_id: int = Field(index=True)
    child_id: int = Field(foreign_key="child.id", index=True)
    name: str = Field(max_length=100)
    display_order: int = Field(default=0)

    child: Child | None = Relationship(back_populates="event_routine_items")
    completions: list["EventRoutineCompletion"] = Relationship(
        back_populates="event_routine_item",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class EventRoutineCompletion(SQLModel, table=True):
    __tablename__ = "event_routine_completion"

    id: int | None = Field(default=None, primary_key=True)
    event_routine_item_id: int = Field(foreign_key="event_routine_item.id", index=True)
    completion_date: datetime.date
    completed_at: datetime.datetime = Field(default_factory=datetime.datetime.now)

    event_routine_item: EventRoutineItem | None = Relationship(back_populates="completions")
