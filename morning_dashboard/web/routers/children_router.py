"""Child and routine item admin routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from morning_dashboard.core.db import get_db
from morning_dashboard.web import admin_handlers

router = APIRouter(prefix="/api/admin")


@router.get("/children", name="list_children")
def list_children(db: Session = Depends(get_db)):
    return admin_handlers.list_children(db)


@router.post("/children", name="create_child")
async def create_child(request: Request, db: Session = Depends(get_db)):
    return await admin_handlers.create_child(request, db)


@router.put("/children/{child_id}", name="update_child")
async def update_child(request: Request, child_id: int, db: Session = Depends(get_db)):
    return await admin_handlers.update_child(request, child_id, db)


@router.delete("/children/{child_id}", name="delete_child")
def delete_child(child_id: int, db: Session = Depends(get_db)):
    # 日本語: 子に紐づくルーチン項目と完了記録も削除 / English: Also removes the child's routine items and completions
    return admin_handlers.delete_child(child_id, db)


@router.get("/children/{child_id}/routine-items", name="list_routine_items")
def list_routine_items(child_id: int, db: Session = Depends(get_db)):
    return admin_handlers.list_routine_items(child_id, db)


@router.post("/children/{child_id}/routine-items", name="add_routine_item")
async def add_routine_item(request: Request, child_id: int, db: Session = Depends(get_db)):
    return await admin_handlers.add_routine_item(request, child_id, db)


@router.post("/children/{child_id}/routine-items/reorder", name="reorder_routine_items")
async def reorder_routine_items(request: Request, child_id: int, db: Session = Depends(get_db)):
    return await admin_handlers.reorder_routine_items(request, child_id, db)


@router.put("/routine-items/{item_id}", name="update_routine_item")
async def update_routine_item(request: Request, item_id: int, db: Session = Depends(get_db)):
    return await admin_handlers.update_routine_item(request, item_id, db)


@router.delete("/routine-items/{item_id}", name="delete_routine_item")
def delete_routine_item(item_id: int, db: Session = Depends(get_db)):
    return admin_handlers.delete_routine_item(item_id, db)
