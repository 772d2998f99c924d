import datetime

import pytest
from sqlmodel import select

from morning_dashboard.models import (
    EVENTABLE_DEPARTURE_TIME,
    EventRoutineCompletion,
    RoutineCompletion,
)
from morning_dashboard.services.completion_service import (
    is_item_completed,
    load_completions_for_date,
    mark_complete,
    mark_incomplete,
    preloaded_completion_lookup,
    storage_completion_lookup,
    toggle_completion,
)

TODAY = datetime.date(2026, 10, 19)
YESTERDAY = TODAY - datetime.timedelta(days=1)


@pytest.fixture()
def routine_item(make_child, make_routine_item):
    return make_routine_item(make_child())


@pytest.fixture()
def event_item(make_child, make_departure, make_event_item):
    child = make_child(name="Jack")
    return make_event_item(EVENTABLE_DEPARTURE_TIME, make_departure().id, child)


def _count(db, model):
    return len(db.exec(select(model)).all())


def test_mark_complete_twice_keeps_one_record(db, routine_item):
    mark_complete(db, routine_item, TODAY)
    mark_complete(db, routine_item, TODAY)

    assert _count(db, RoutineCompletion) == 1


def test_toggle_twice_returns_true_then_false(db, routine_item, event_item):
    for item, completion_model in ((routine_item, RoutineCompletion), (event_item, EventRoutineCompletion)):
        assert toggle_completion(db, item, TODAY) is True
        assert toggle_completion(db, item, TODAY) is False
        assert _count(db, completion_model) == 0


def test_completion_is_scoped_to_date(db, routine_item, event_item):
    lookup = storage_completion_lookup(db)
    for item in (routine_item, event_item):
        mark_complete(db, item, TODAY)

        assert is_item_completed(item, lookup, TODAY) is True
        assert is_item_completed(item, lookup, YESTERDAY) is False


def test_mark_incomplete_only_removes_that_day(db, routine_item):
    mark_complete(db, routine_item, YESTERDAY)
    mark_complete(db, routine_item, TODAY)

    mark_incomplete(db, routine_item, TODAY)

    lookup = storage_completion_lookup(db)
    assert is_item_completed(routine_item, lookup, YESTERDAY) is True
    assert is_item_completed(routine_item, lookup, TODAY) is False


def test_mark_incomplete_without_completion_is_a_no_op(db, routine_item, event_item):
    mark_incomplete(db, routine_item, TODAY)
    mark_incomplete(db, event_item, TODAY)

    assert _count(db, RoutineCompletion) == 0
    assert _count(db, EventRoutineCompletion) == 0


def test_preloaded_and_storage_lookups_agree(db, routine_item, event_item, make_routine_item):
    other = make_routine_item(routine_item.child, name="Get dressed", display_order=1)
    mark_complete(db, routine_item, TODAY)
    mark_complete(db, event_item, TODAY)
    mark_complete(db, other, YESTERDAY)

    items = [routine_item, event_item, other]
    preloaded = preloaded_completion_lookup(load_completions_for_date(db, items, TODAY))
    storage = storage_completion_lookup(db)

    for item in items:
        assert preloaded(item, TODAY) == storage(item, TODAY)
    assert [preloaded(item, TODAY) for item in items] == [True, True, False]


def test_routine_and_event_items_with_same_id_do_not_collide(db, routine_item, event_item):
    # 日本語: 両テーブルとも最初の行なので ID が同じ / English: Both are the first row of their table, so ids match
    assert routine_item.id == event_item.id
    mark_complete(db, routine_item, TODAY)

    preloaded = preloaded_completion_lookup(load_completions_for_date(db, [routine_item, event_item], TODAY))

    assert preloaded(routine_item, TODAY) is True
    assert preloaded(event_item, TODAY) is False


def test_unsupported_item_type_raises(db):
    with pytest.raises(TypeError):
        toggle_completion(db, object(), TODAY)
