"""Key/value settings with an explicit TTL cache."""

from __future__ import annotations

import copy
import logging
import threading
import time
from typing import Any, Callable, Dict, Tuple

from sqlmodel import Session, select

from morning_dashboard.core.config import WEATHER_SETTING_PREFIX, get_settings_cache_ttl
from morning_dashboard.models import Setting

logger = logging.getLogger(__name__)

_MISSING = object()


def _detached(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return copy.deepcopy(value)
    return value


class SettingsCache:
    """In-process cache of setting values with a fixed time-to-live."""

    def __init__(self, ttl: int | None = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = get_settings_cache_ttl() if ttl is None else max(0, int(ttl))
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = _MISSING) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            expires_at, value = entry
            if self._clock() >= expires_at:
                # 日本語: 期限切れは削除してミス扱い / English: Expired entries are evicted and reported as a miss
                del self._entries[key]
                return default
            return value

    def set(self, key: str, value: Any) -> None:
        if self.ttl <= 0:
            return
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl, value)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not _MISSING


class SettingsStore:
    def __init__(self, cache: SettingsCache | None = None):
        self.cache = cache or SettingsCache()

    def get(self, db: Session, key: str, default: Any = None) -> Any:
        value = self.cache.get(key)
        if value is _MISSING:
            setting = db.get(Setting, key)
            value = setting.value if setting is not None else None
            self.cache.set(key, value)
        # 日本語: 呼び出し側の変更がキャッシュへ波及しないよう複製 / English: Callers get a copy so mutations never reach the cache
        return _detached(default if value is None else value)

    def set(self, db: Session, key: str, value: Any) -> None:
        setting = db.get(Setting, key)
        if setting is None:
            setting = Setting(key=key)
            db.add(setting)
        setting.value = value
        db.commit()
        self.cache.invalidate(key)
        logger.info("Updated setting %s", key)

    def forget(self, db: Session, key: str) -> None:
        setting = db.get(Setting, key)
        if setting is not None:
            db.delete(setting)
            db.commit()
        self.cache.invalidate(key)

    def get_by_prefix(self, db: Session, prefix: str) -> Dict[str, Any]:
        statement = select(Setting).where(Setting.key.startswith(prefix, autoescape=True))
        return {setting.key: setting.value for setting in db.exec(statement).all()}

    def clear_cache(self) -> None:
        self.cache.clear()

    def is_weather_enabled(self, db: Session) -> bool:
        return bool(self.get(db, f"{WEATHER_SETTING_PREFIX}enabled", False))


__all__ = ["SettingsCache", "SettingsStore"]
