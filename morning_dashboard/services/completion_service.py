"""Per-date completion tracking for daily and event routine items.

Both item kinds share one contract. Callers choose how completion state is
read by passing a lookup: ``preloaded_completion_lookup`` answers from rows
already fetched (one query for a whole checklist), while
``storage_completion_lookup`` queries the database per call. Writes always go
through the session and are check-then-act; concurrent toggles of the same
item on the same day are not serialized.
"""

from __future__ import annotations

import datetime
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List

from sqlalchemy import delete
from sqlmodel import Session, select

from morning_dashboard.models import (
    EventRoutineCompletion,
    EventRoutineItem,
    RoutineCompletion,
    RoutineItem,
)

CompletionLookup = Callable[[Any, datetime.date], bool]


@dataclass(frozen=True)
class _CompletionTable:
    model: type
    item_field: str

    @property
    def item_column(self):
        return getattr(self.model, self.item_field)


_TABLES_BY_ITEM = {
    RoutineItem: _CompletionTable(RoutineCompletion, "routine_item_id"),
    EventRoutineItem: _CompletionTable(EventRoutineCompletion, "event_routine_item_id"),
}
_TABLES_BY_COMPLETION = {table.model: table for table in _TABLES_BY_ITEM.values()}


def _table_for(item) -> _CompletionTable:
    try:
        return _TABLES_BY_ITEM[type(item)]
    except KeyError:
        raise TypeError(f"Completion tracking is not supported for {type(item).__name__}") from None


def preloaded_completion_lookup(completions: Iterable[Any]) -> CompletionLookup:
    """Answer completion checks from already-loaded completion rows."""
    completed = set()
    for completion in completions:
        table = _TABLES_BY_COMPLETION.get(type(completion))
        if table is None:
            continue
        completed.add((table.model, getattr(completion, table.item_field), completion.completion_date))

    def _lookup(item, date_value: datetime.date) -> bool:
        return (_table_for(item).model, item.id, date_value) in completed

    return _lookup


def storage_completion_lookup(db: Session) -> CompletionLookup:
    """Answer completion checks with one query per call."""

    def _lookup(item, date_value: datetime.date) -> bool:
        table = _table_for(item)
        statement = select(table.model).where(
            table.item_column == item.id,
            table.model.completion_date == date_value,
        )
        return db.exec(statement).first() is not None

    return _lookup


def load_completions_for_date(db: Session, items: Iterable[Any], date_value: datetime.date) -> List[Any]:
    ids_by_table = defaultdict(list)
    for item in items:
        if item.id is not None:
            ids_by_table[_table_for(item)].append(item.id)

    rows: List[Any] = []
    for table, item_ids in ids_by_table.items():
        statement = select(table.model).where(
            table.item_column.in_(item_ids),
            table.model.completion_date == date_value,
        )
        rows.extend(db.exec(statement).all())
    return rows


def is_item_completed(item, lookup: CompletionLookup, date_value: datetime.date | None = None) -> bool:
    return lookup(item, date_value or datetime.date.today())


def mark_complete(db: Session, item, today: datetime.date | None = None) -> None:
    today = today or datetime.date.today()
    if is_item_completed(item, storage_completion_lookup(db), today):
        return
    table = _table_for(item)
    db.add(table.model(**{table.item_field: item.id}, completion_date=today))
    db.commit()


def mark_incomplete(db: Session, item, today: datetime.date | None = None) -> None:
    today = today or datetime.date.today()
    table = _table_for(item)
    db.exec(
        delete(table.model).where(
            table.item_column == item.id,
            table.model.completion_date == today,
        )
    )
    db.commit()


def toggle_completion(db: Session, item, today: datetime.date | None = None) -> bool:
    """Flip today's state and return True when the item is now completed."""
    today = today or datetime.date.today()
    if is_item_completed(item, storage_completion_lookup(db), today):
        mark_incomplete(db, item, today)
        return False
    mark_complete(db, item, today)
    return True


__all__ = [
    "CompletionLookup",
    "preloaded_completion_lookup",
    "storage_completion_lookup",
    "load_completions_for_date",
    "is_item_completed",
    "mark_complete",
    "mark_incomplete",
    "toggle_completion",
]
