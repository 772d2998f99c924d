"""Weather settings admin routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from morning_dashboard.core.db import get_db
from morning_dashboard.web import admin_handlers

router = APIRouter(prefix="/api/admin")


@router.get("/weather", name="get_weather_settings")
def get_weather_settings(request: Request, db: Session = Depends(get_db)):
    return admin_handlers.get_weather_settings(request, db)


@router.put("/weather", name="update_weather_settings")
async def update_weather_settings(request: Request, db: Session = Depends(get_db)):
    # 日本語: 保存時にキャッシュは該当キーのみ無効化 / English: Saving invalidates only the touched cache keys
    return await admin_handlers.update_weather_settings(request, db)
