"""Routine template admin routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from morning_dashboard.core.db import get_db
from morning_dashboard.web import admin_handlers

router = APIRouter(prefix="/api/admin/routine-templates")


@router.get("", name="list_templates")
def list_templates(db: Session = Depends(get_db)):
    return admin_handlers.list_templates(db)


@router.post("", name="create_template")
async def create_template(request: Request, db: Session = Depends(get_db)):
    return await admin_handlers.create_template(request, db)


@router.post("/reorder", name="reorder_templates")
async def reorder_templates(request: Request, db: Session = Depends(get_db)):
    return await admin_handlers.reorder_templates(request, db)


@router.put("/{template_id}", name="rename_template")
async def rename_template(request: Request, template_id: int, db: Session = Depends(get_db)):
    return await admin_handlers.rename_template(request, template_id, db)


@router.delete("/{template_id}", name="delete_template")
def delete_template(template_id: int, db: Session = Depends(get_db)):
    return admin_handlers.delete_template(template_id, db)


@router.post("/{template_id}/apply", name="apply_template")
async def apply_template(request: Request, template_id: int, db: Session = Depends(get_db)):
    # 日本語: child_id 省略時は全員に適用 / English: Applies to every child when child_id is omitted
    return await admin_handlers.apply_template(request, template_id, db)
