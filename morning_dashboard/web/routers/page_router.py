"""Page routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlmodel import Session

from morning_dashboard.core.db import get_db
from morning_dashboard.services.dashboard_service import build_dashboard
from morning_dashboard.web import handlers as web_handlers
from morning_dashboard.web.templates import template_response

# 日本語: HTMLページ配信用ルーター / English: Router for HTML page endpoints
router = APIRouter()


@router.get("/", response_class=HTMLResponse, name="index")
def index(request: Request, db: Session = Depends(get_db)):
    # 日本語: 朝のダッシュボード画面 / English: Morning dashboard page
    return web_handlers.index(
        request,
        db,
        build_dashboard_fn=build_dashboard,
        template_response_fn=template_response,
    )
