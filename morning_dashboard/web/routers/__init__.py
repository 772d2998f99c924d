"""Router exports."""

# 日本語: 各機能ルーターを集約して application.py から一括 import 可能にする / English: Re-export feature routers for centralized app wiring
from .children_router import router as children_router
from .dashboard_router import router as dashboard_router
from .departures_router import router as departures_router
from .event_routines_router import router as event_routines_router
from .events_router import router as events_router
from .page_router import router as page_router
from .settings_router import router as settings_router
from .templates_router import router as templates_router

__all__ = [
    "page_router",
    "dashboard_router",
    "children_router",
    "templates_router",
    "departures_router",
    "events_router",
    "event_routines_router",
    "settings_router",
]
