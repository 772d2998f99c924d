"""HTTP handler implementations for the dashboard and shared helpers."""

from __future__ import annotations

import datetime
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from fastapi import HTTPException, Request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from morning_dashboard.models import Child, EventRoutineItem, RoutineItem
from morning_dashboard.services.errors import InvalidInputError, RecordNotFoundError
from morning_dashboard.services.settings_service import SettingsStore

logger = logging.getLogger(__name__)


async def read_json(request: Request) -> Dict[str, Any]:
    try:
        payload = await request.json()
    except Exception:
        payload = {}
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="request body must be a JSON object")
    return payload


@contextmanager
def service_errors(db: Session) -> Iterator[None]:
    """Translate domain and storage errors into HTTP errors."""
    try:
        yield
    except RecordNotFoundError as exc:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidInputError as exc:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(exc))
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity error: %s", exc)
        raise HTTPException(status_code=409, detail="conflicting record already exists")
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database operation failed")
        raise HTTPException(status_code=500, detail=str(exc))


def settings_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store


def index(request: Request, db: Session, *, build_dashboard_fn, template_response_fn):
    dashboard = build_dashboard_fn(db, settings_store(request))
    return template_response_fn(request, "dashboard.html", {"dashboard": dashboard})


def api_dashboard(request: Request, db: Session, *, build_dashboard_fn):
    with service_errors(db):
        return build_dashboard_fn(db, settings_store(request))


def api_next_departure(db: Session, *, resolve_next_departure_fn):
    now = datetime.datetime.now()
    next_departure = resolve_next_departure_fn(db, now)
    return {"next_departure": next_departure.to_dict(now) if next_departure else None}


def api_child_next_routines(child_id: int, db: Session, *, resolve_next_routines_for_child_fn):
    child = db.get(Child, child_id)
    if child is None:
        raise HTTPException(status_code=404, detail="Child not found")

    result = resolve_next_routines_for_child_fn(db, child)
    if result is None:
        return {"event": None, "items": []}
    return {
        "event": result.event.to_dict(),
        "items": [
            {"id": item.id, "name": item.name, "display_order": item.display_order}
            for item in result.items
        ],
    }


def _toggle(db: Session, model, item_id: int, toggle_completion_fn):
    item = db.get(model, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    with service_errors(db):
        completed = toggle_completion_fn(db, item)
    return {"id": item_id, "is_completed": completed}


def toggle_routine_item(item_id: int, db: Session, *, toggle_completion_fn):
    return _toggle(db, RoutineItem, item_id, toggle_completion_fn)


def toggle_event_routine_item(item_id: int, db: Session, *, toggle_completion_fn):
    return _toggle(db, EventRoutineItem, item_id, toggle_completion_fn)


def add_sample_data(db: Session, *, seed_sample_data_fn):
    with service_errors(db):
        messages = seed_sample_data_fn(db)
    if not messages:
        return {"status": "ok", "message": "Data already exists, nothing new seeded."}
    return {"status": "ok", "message": "; ".join(messages)}
