"""Event routine item admin routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from morning_dashboard.core.db import get_db
from morning_dashboard.web import admin_handlers

router = APIRouter(prefix="/api/admin/event-routines")


@router.get("", name="list_event_routines")
def list_event_routines(request: Request, db: Session = Depends(get_db)):
    return admin_handlers.list_event_routines(request, db)


@router.post("", name="create_event_routine")
async def create_event_routine(request: Request, db: Session = Depends(get_db)):
    return await admin_handlers.create_event_routine(request, db)


@router.put("/{item_id}", name="update_event_routine")
async def update_event_routine(request: Request, item_id: int, db: Session = Depends(get_db)):
    return await admin_handlers.update_event_routine(request, item_id, db)


@router.delete("/{item_id}", name="delete_event_routine")
def delete_event_routine(item_id: int, db: Session = Depends(get_db)):
    return admin_handlers.delete_event_routine(item_id, db)
