"""HTTP handler implementations for the admin API."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import HTTPException, Request
from sqlmodel import Session

from morning_dashboard.core.config import WEATHER_SETTING_PREFIX
from morning_dashboard.models import (
    CalendarEvent,
    Child,
    DepartureTime,
    EventRoutineItem,
    RoutineItem,
    RoutineItemTemplate,
)
from morning_dashboard.services import household_admin_service as household
from morning_dashboard.services import schedule_admin_service as schedule
from morning_dashboard.web.handlers import read_json, service_errors, settings_store

_CHILD_FIELDS = ("name", "avatar_color", "display_order")
_ROUTINE_ITEM_FIELDS = ("name", "display_order")
_DEPARTURE_FIELDS = ("name", "departure_time", "applicable_days", "is_active", "display_order")
_EVENT_FIELDS = ("name", "starts_at", "departure_time", "category", "color")
_EVENT_ROUTINE_FIELDS = ("child_id", "name", "display_order")

# 日本語: 未保存時の天気設定の既定値 / English: Weather setting defaults used until a value is saved
WEATHER_DEFAULTS: Dict[str, Any] = {
    "enabled": False,
    "location": {"lat": None, "lon": None, "name": None},
    "units": "fahrenheit",
    "widget_size": "medium",
    "show_feels_like": True,
    "show_high_low": True,
    "show_precipitation": True,
}
_WEATHER_UNITS = {"fahrenheit", "celsius"}
_WIDGET_SIZES = {"small", "medium", "large"}


def _pick(payload: Dict[str, Any], fields) -> Dict[str, Any]:
    return {key: payload[key] for key in fields if key in payload}


def _int_list(payload: Dict[str, Any], key: str):
    values = payload.get(key)
    if not isinstance(values, list) or not all(
        isinstance(value, int) and not isinstance(value, bool) for value in values
    ):
        raise HTTPException(status_code=400, detail=f"{key} must be a list of integers")
    return values


def serialize_child(child: Child) -> Dict[str, Any]:
    return {
        "id": child.id,
        "name": child.name,
        "avatar_color": child.avatar_color,
        "display_order": child.display_order,
    }


def serialize_routine_item(item: RoutineItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "child_id": item.child_id,
        "name": item.name,
        "display_order": item.display_order,
    }


def serialize_template(template: RoutineItemTemplate) -> Dict[str, Any]:
    return {"id": template.id, "name": template.name, "display_order": template.display_order}


def serialize_departure(departure: DepartureTime) -> Dict[str, Any]:
    return {
        "id": departure.id,
        "name": departure.name,
        "departure_time": departure.departure_time.strftime("%H:%M"),
        "applicable_days": list(departure.applicable_days or []),
        "is_active": departure.is_active,
        "display_order": departure.display_order,
    }


def serialize_event(event: CalendarEvent) -> Dict[str, Any]:
    return {
        "id": event.id,
        "name": event.name,
        "starts_at": event.starts_at.isoformat(),
        "departure_time": event.departure_time.isoformat() if event.departure_time else None,
        "category": event.category,
        "color": event.color,
    }


def serialize_event_routine_item(item: EventRoutineItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "eventable_type": item.eventable_type,
        "eventable_id": item.eventable_id,
        "child_id": item.child_id,
        "name": item.name,
        "display_order": item.display_order,
    }


# Children


def list_children(db: Session):
    return {"children": [serialize_child(child) for child in household.list_children(db)]}


async def create_child(request: Request, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        child = household.create_child(db, **_pick(payload, _CHILD_FIELDS))
    return serialize_child(child)


async def update_child(request: Request, child_id: int, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        child = household.update_child(db, child_id, **_pick(payload, _CHILD_FIELDS))
    return serialize_child(child)


def delete_child(child_id: int, db: Session):
    with service_errors(db):
        household.delete_child(db, child_id)
    return {"status": "deleted"}


def list_routine_items(child_id: int, db: Session):
    with service_errors(db):
        items = household.list_routine_items(db, child_id)
    return {"routine_items": [serialize_routine_item(item) for item in items]}


async def add_routine_item(request: Request, child_id: int, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        item = household.add_routine_item(db, child_id, **_pick(payload, _ROUTINE_ITEM_FIELDS))
    return serialize_routine_item(item)


async def update_routine_item(request: Request, item_id: int, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        item = household.update_routine_item(db, item_id, **_pick(payload, _ROUTINE_ITEM_FIELDS))
    return serialize_routine_item(item)


def delete_routine_item(item_id: int, db: Session):
    with service_errors(db):
        household.delete_routine_item(db, item_id)
    return {"status": "deleted"}


async def reorder_routine_items(request: Request, child_id: int, db: Session):
    payload = await read_json(request)
    item_ids = _int_list(payload, "item_ids")
    with service_errors(db):
        items = household.reorder_routine_items(db, child_id, item_ids)
    return {"routine_items": [serialize_routine_item(item) for item in items]}


# Routine templates


def list_templates(db: Session):
    return {"templates": [serialize_template(template) for template in household.list_templates(db)]}


async def create_template(request: Request, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        template = household.create_template(db, payload.get("name"))
    return serialize_template(template)


async def rename_template(request: Request, template_id: int, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        template = household.rename_template(db, template_id, payload.get("name"))
    return serialize_template(template)


def delete_template(template_id: int, db: Session):
    with service_errors(db):
        household.delete_template(db, template_id)
    return {"status": "deleted"}


async def reorder_templates(request: Request, db: Session):
    payload = await read_json(request)
    template_ids = _int_list(payload, "template_ids")
    with service_errors(db):
        templates = household.reorder_templates(db, template_ids)
    return {"templates": [serialize_template(template) for template in templates]}


async def apply_template(request: Request, template_id: int, db: Session):
    payload = await read_json(request)
    child_id = payload.get("child_id")
    with service_errors(db):
        if child_id is None:
            created = household.apply_template_to_all_children(db, template_id)
        elif isinstance(child_id, int) and not isinstance(child_id, bool):
            item = household.apply_template_to_child(db, template_id, child_id)
            created = [item] if item is not None else []
        else:
            raise HTTPException(status_code=400, detail="child_id must be an integer")
    return {"created": [serialize_routine_item(item) for item in created]}


# Departure times


def list_departures(db: Session):
    return {"departures": [serialize_departure(item) for item in schedule.list_departures(db)]}


async def create_departure(request: Request, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        departure = schedule.create_departure(db, **_pick(payload, _DEPARTURE_FIELDS))
    return serialize_departure(departure)


async def update_departure(request: Request, departure_id: int, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        departure = schedule.update_departure(db, departure_id, **_pick(payload, _DEPARTURE_FIELDS))
    return serialize_departure(departure)


def toggle_departure(departure_id: int, db: Session):
    with service_errors(db):
        departure = schedule.toggle_departure_active(db, departure_id)
    return serialize_departure(departure)


def delete_departure(departure_id: int, db: Session):
    with service_errors(db):
        schedule.delete_departure(db, departure_id)
    return {"status": "deleted"}


# Calendar events


def list_events(request: Request, db: Session):
    scope = request.query_params.get("scope", "upcoming")
    with service_errors(db):
        events = schedule.list_events(db, scope)
    return {"events": [serialize_event(event) for event in events], "scope": scope}


async def create_event(request: Request, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        event = schedule.create_event(db, **_pick(payload, _EVENT_FIELDS))
    return serialize_event(event)


async def update_event(request: Request, event_id: int, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        event = schedule.update_event(db, event_id, **_pick(payload, _EVENT_FIELDS))
    return serialize_event(event)


def delete_event(event_id: int, db: Session):
    with service_errors(db):
        schedule.delete_event(db, event_id)
    return {"status": "deleted"}


# Event routines


def list_event_routines(request: Request, db: Session):
    params = request.query_params
    try:
        eventable_id = int(params.get("eventable_id", ""))
        child_id = int(params["child_id"]) if params.get("child_id") else None
    except ValueError:
        raise HTTPException(status_code=400, detail="eventable_id and child_id must be integers")
    with service_errors(db):
        ref = schedule.parse_eventable_ref(params.get("eventable_type"), eventable_id)
        items = schedule.list_event_routines(db, ref, child_id)
    return {"event_routine_items": [serialize_event_routine_item(item) for item in items]}


async def create_event_routine(request: Request, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        ref = schedule.parse_eventable_ref(payload.get("eventable_type"), payload.get("eventable_id"))
        item = schedule.add_event_routine_item(
            db,
            ref,
            payload.get("child_id"),
            payload.get("name"),
            payload.get("display_order"),
        )
    return serialize_event_routine_item(item)


async def update_event_routine(request: Request, item_id: int, db: Session):
    payload = await read_json(request)
    with service_errors(db):
        item = schedule.update_event_routine_item(db, item_id, **_pick(payload, _EVENT_ROUTINE_FIELDS))
    return serialize_event_routine_item(item)


def delete_event_routine(item_id: int, db: Session):
    with service_errors(db):
        schedule.delete_event_routine_item(db, item_id)
    return {"status": "deleted"}


# Weather settings


def get_weather_settings(request: Request, db: Session):
    store = settings_store(request)
    return {
        name: store.get(db, f"{WEATHER_SETTING_PREFIX}{name}", default)
        for name, default in WEATHER_DEFAULTS.items()
    }


def _validate_weather_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    updates: Dict[str, Any] = {}
    for flag in ("enabled", "show_feels_like", "show_high_low", "show_precipitation"):
        if flag in payload:
            # 日本語: 文字列 "false" などは受け付けない / English: Strings such as "false" are rejected
            if not isinstance(payload[flag], bool):
                raise HTTPException(status_code=422, detail=f"{flag} must be a boolean")
            updates[flag] = payload[flag]
    if "units" in payload:
        if payload["units"] not in _WEATHER_UNITS:
            raise HTTPException(status_code=422, detail="units must be fahrenheit or celsius")
        updates["units"] = payload["units"]
    if "widget_size" in payload:
        if payload["widget_size"] not in _WIDGET_SIZES:
            raise HTTPException(status_code=422, detail="widget_size must be small, medium or large")
        updates["widget_size"] = payload["widget_size"]
    if "location" in payload:
        location = payload["location"] or {}
        if not isinstance(location, dict):
            raise HTTPException(status_code=422, detail="location must be an object")
        try:
            lat = float(location["lat"]) if location.get("lat") is not None else None
            lon = float(location["lon"]) if location.get("lon") is not None else None
        except (TypeError, ValueError):
            raise HTTPException(status_code=422, detail="location lat/lon must be numbers")
        if lat is not None and not -90 <= lat <= 90:
            raise HTTPException(status_code=422, detail="latitude must be between -90 and 90")
        if lon is not None and not -180 <= lon <= 180:
            raise HTTPException(status_code=422, detail="longitude must be between -180 and 180")
        updates["location"] = {"lat": lat, "lon": lon, "name": location.get("name")}
    return updates


async def update_weather_settings(request: Request, db: Session):
    payload = await read_json(request)
    updates = _validate_weather_payload(payload)
    store = settings_store(request)
    with service_errors(db):
        for name, value in updates.items():
            store.set(db, f"{WEATHER_SETTING_PREFIX}{name}", value)
    return get_weather_settings(request, db)
