"""Departure time admin routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from morning_dashboard.core.db import get_db
from morning_dashboard.web import admin_handlers

router = APIRouter(prefix="/api/admin/departures")


@router.get("", name="list_departures")
def list_departures(db: Session = Depends(get_db)):
    return admin_handlers.list_departures(db)


@router.post("", name="create_departure")
async def create_departure(request: Request, db: Session = Depends(get_db)):
    return await admin_handlers.create_departure(request, db)


@router.put("/{departure_id}", name="update_departure")
async def update_departure(request: Request, departure_id: int, db: Session = Depends(get_db)):
    return await admin_handlers.update_departure(request, departure_id, db)


@router.post("/{departure_id}/toggle", name="toggle_departure")
def toggle_departure(departure_id: int, db: Session = Depends(get_db)):
    return admin_handlers.toggle_departure(departure_id, db)


@router.delete("/{departure_id}", name="delete_departure")
def delete_departure(departure_id: int, db: Session = Depends(get_db)):
    return admin_handlers.delete_departure(departure_id, db)
