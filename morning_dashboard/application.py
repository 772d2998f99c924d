"""FastAPI application assembly."""

from __future__ import annotations

import os

from fastapi import FastAPI
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from morning_dashboard.core.config import PROXY_PREFIX
from morning_dashboard.core.db import _init_db
from morning_dashboard.services.settings_service import SettingsStore
from morning_dashboard.web.routers import (
    children_router,
    dashboard_router,
    departures_router,
    event_routines_router,
    events_router,
    page_router,
    settings_router,
    templates_router,
)


def create_app() -> FastAPI:
    # 日本語: 逆プロキシ配下運用を想定して root_path を環境変数から解決 / English: Resolve root_path from env for reverse-proxy deployments
    proxy_prefix = os.getenv("PROXY_PREFIX", PROXY_PREFIX)

    # 日本語: FastAPI アプリ本体を作成 / English: Create root FastAPI application
    app = FastAPI(root_path=proxy_prefix)
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

    # 日本語: 設定キャッシュはアプリ単位で保持 / English: The settings cache lives for the lifetime of the app
    app.state.settings_store = SettingsStore()

    # 日本語: 機能別ルーターを順次登録 / English: Register feature routers
    app.include_router(page_router)
    app.include_router(dashboard_router)
    app.include_router(children_router)
    app.include_router(templates_router)
    app.include_router(departures_router)
    app.include_router(events_router)
    app.include_router(event_routines_router)
    app.include_router(settings_router)

    @app.on_event("startup")
    def _startup_init_db() -> None:
        # 日本語: 起動時にマイグレーション適用を保証 / English: Ensure migrations are applied on startup
        _init_db()

    return app


# 日本語: import 時点で既定アプリを構築 / English: Build default app instance at import time
app = create_app()
