"""Template helpers."""

from __future__ import annotations

from typing import Any, Dict
from urllib.parse import urlencode, urlparse

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from morning_dashboard.core.config import BASE_DIR

# 日本語: Jinja テンプレートローダー / English: Jinja template loader
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def resolve_proxy_prefix(request: Request) -> str:
    # 日本語: 逆プロキシの prefix ヘッダを解決 / English: Resolve forwarded proxy prefix if present
    forwarded_prefix = (request.headers.get("x-forwarded-prefix") or "").strip()
    if "," in forwarded_prefix:
        forwarded_prefix = forwarded_prefix.split(",", 1)[0].strip()
    proxy_prefix = forwarded_prefix or request.scope.get("root_path", "")
    if proxy_prefix and not proxy_prefix.startswith("/"):
        proxy_prefix = f"/{proxy_prefix}"
    return proxy_prefix.rstrip("/") if proxy_prefix not in {"", "/"} else ""


def template_response(request: Request, template_name: str, context: Dict[str, Any]) -> HTMLResponse:
    payload = dict(context)
    payload.setdefault("request", request)
    proxy_prefix = resolve_proxy_prefix(request)
    payload.setdefault("proxy_prefix", proxy_prefix)

    def _url_for(endpoint: str, **values: Any) -> str:
        # 日本語: path parameter と query parameter を分離して URL 生成 / English: Build URL by splitting path/query params
        param_names: set[str] = set()
        for route in request.app.router.routes:
            if getattr(route, "name", None) == endpoint:
                param_names = set(getattr(route, "param_convertors", {}).keys())
                break
        path_params = {k: v for k, v in values.items() if k in param_names}
        query_params = {k: v for k, v in values.items() if k not in param_names}
        path = urlparse(str(request.url_for(endpoint, **path_params))).path or "/"
        if proxy_prefix and not path.startswith(proxy_prefix):
            path = f"{proxy_prefix}{path}"
        if query_params:
            return f"{path}?{urlencode(query_params)}"
        return path

    payload.setdefault("url_for", _url_for)
    return templates.TemplateResponse(request, template_name, payload)
