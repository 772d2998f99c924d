"""Dashboard API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from morning_dashboard.core.db import get_db
from morning_dashboard.services.completion_service import toggle_completion
from morning_dashboard.services.dashboard_service import build_dashboard
from morning_dashboard.services.departure_service import resolve_next_departure
from morning_dashboard.services.next_routine_service import resolve_next_routines_for_child
from morning_dashboard.services.seed_service import seed_sample_data
from morning_dashboard.web import handlers as web_handlers

# 日本語: ダッシュボード用API群 / English: Dashboard API router
router = APIRouter()


@router.get("/api/dashboard", name="api_dashboard")
def api_dashboard(request: Request, db: Session = Depends(get_db)):
    return web_handlers.api_dashboard(request, db, build_dashboard_fn=build_dashboard)


@router.get("/api/next-departure", name="api_next_departure")
def api_next_departure(db: Session = Depends(get_db)):
    # 日本語: 直近の出発時刻とカウントダウン秒数 / English: Soonest departure with seconds remaining
    return web_handlers.api_next_departure(db, resolve_next_departure_fn=resolve_next_departure)


@router.get("/api/children/{child_id}/next-routines", name="api_child_next_routines")
def api_child_next_routines(child_id: int, db: Session = Depends(get_db)):
    return web_handlers.api_child_next_routines(
        child_id,
        db,
        resolve_next_routines_for_child_fn=resolve_next_routines_for_child,
    )


@router.post("/api/routine-items/{item_id}/toggle", name="toggle_routine_item")
def toggle_routine_item(item_id: int, db: Session = Depends(get_db)):
    return web_handlers.toggle_routine_item(item_id, db, toggle_completion_fn=toggle_completion)


@router.post("/api/event-routine-items/{item_id}/toggle", name="toggle_event_routine_item")
def toggle_event_routine_item(item_id: int, db: Session = Depends(get_db)):
    return web_handlers.toggle_event_routine_item(item_id, db, toggle_completion_fn=toggle_completion)


@router.post("/api/sample-data", name="add_sample_data")
def add_sample_data(db: Session = Depends(get_db)):
    # 日本語: 空のDBにサンプルデータを投入 / English: Seed sample data into an empty database
    return web_handlers.add_sample_data(db, seed_sample_data_fn=seed_sample_data)
