import datetime
import sys
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from morning_dashboard import models as _models  # noqa: E402,F401
from morning_dashboard.models import (  # noqa: E402
    CalendarEvent,
    Child,
    DepartureTime,
    EventRoutineItem,
    RoutineItem,
)

# 2026-10-19 is a Monday.
MONDAY_MORNING = datetime.datetime(2026, 10, 19, 7, 0)


@pytest.fixture()
def engine():
    # 日本語: テストは共有インメモリ SQLite を使用 / English: Tests run against a shared in-memory SQLite database
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture()
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def now():
    return MONDAY_MORNING


@pytest.fixture()
def make_child(db):
    def _make(name="Emma", display_order=0, avatar_color="#3B82F6"):
        child = Child(name=name, display_order=display_order, avatar_color=avatar_color)
        db.add(child)
        db.commit()
        db.refresh(child)
        return child

    return _make


@pytest.fixture()
def make_routine_item(db):
    def _make(child, name="Brush teeth", display_order=0):
        item = RoutineItem(child_id=child.id, name=name, display_order=display_order)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _make


@pytest.fixture()
def make_departure(db):
    def _make(
        name="School bus",
        departure_time=datetime.time(7, 45),
        applicable_days=None,
        is_active=True,
    ):
        departure = DepartureTime(
            name=name,
            departure_time=departure_time,
            applicable_days=(
                ["monday", "tuesday", "wednesday", "thursday", "friday"]
                if applicable_days is None
                else applicable_days
            ),
            is_active=is_active,
        )
        db.add(departure)
        db.commit()
        db.refresh(departure)
        return departure

    return _make


@pytest.fixture()
def make_event(db):
    def _make(name="Soccer", starts_at=None, departure_time=None, color="#10B981", category=None):
        event = CalendarEvent(
            name=name,
            starts_at=starts_at or MONDAY_MORNING + datetime.timedelta(days=1),
            departure_time=departure_time,
            color=color,
            category=category,
        )
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    return _make


@pytest.fixture()
def make_event_item(db):
    def _make(eventable_type, eventable_id, child, name="Pack bag", display_order=0):
        item = EventRoutineItem(
            eventable_type=eventable_type,
            eventable_id=eventable_id,
            child_id=child.id,
            name=name,
            display_order=display_order,
        )
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _make
