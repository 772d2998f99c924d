"""Calendar event admin routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from morning_dashboard.core.db import get_db
from morning_dashboard.web import admin_handlers

router = APIRouter(prefix="/api/admin/events")


@router.get("", name="list_events")
def list_events(request: Request, db: Session = Depends(get_db)):
    # 日本語: ?scope=upcoming|past|all / English: ?scope=upcoming|past|all
    return admin_handlers.list_events(request, db)


@router.post("", name="create_event")
async def create_event(request: Request, db: Session = Depends(get_db)):
    return await admin_handlers.create_event(request, db)


@router.put("/{event_id}", name="update_event")
async def update_event(request: Request, event_id: int, db: Session = Depends(get_db)):
    return await admin_handlers.update_event(request, event_id, db)


@router.delete("/{event_id}", name="delete_event")
def delete_event(event_id: int, db: Session = Depends(get_db)):
    return admin_handlers.delete_event(event_id, db)
