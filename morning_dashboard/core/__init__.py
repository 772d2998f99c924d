"""Core package exports."""

from .config import (
    BASE_DIR,
    DATABASE_URL,
    LOG_LEVEL,
    PROXY_PREFIX,
    WEATHER_SETTING_PREFIX,
    get_settings_cache_ttl,
    get_upcoming_event_limit,
)
from .db import Session, create_session, engine, get_db

__all__ = [
    "BASE_DIR",
    "DATABASE_URL",
    "LOG_LEVEL",
    "PROXY_PREFIX",
    "WEATHER_SETTING_PREFIX",
    "get_settings_cache_ttl",
    "get_upcoming_event_limit",
    "engine",
    "Session",
    "create_session",
    "get_db",
]
