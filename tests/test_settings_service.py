from morning_dashboard.models import Setting
from morning_dashboard.services.settings_service import SettingsCache, SettingsStore


class _Clock:
    def __init__(self):
        self.value = 1000.0

    def __call__(self):
        return self.value


def test_cache_entries_expire_after_ttl():
    clock = _Clock()
    cache = SettingsCache(ttl=60, clock=clock)
    cache.set("weather.enabled", True)

    clock.value += 59
    assert cache.get("weather.enabled") is True

    clock.value += 1
    assert "weather.enabled" not in cache
    assert cache.get("weather.enabled", "miss") == "miss"


def test_zero_ttl_disables_caching():
    cache = SettingsCache(ttl=0)
    cache.set("weather.units", "celsius")

    assert "weather.units" not in cache


def test_store_serves_cached_value_until_invalidated(db):
    store = SettingsStore(SettingsCache(ttl=3600))
    store.set(db, "weather.units", "celsius")
    assert store.get(db, "weather.units") == "celsius"

    # 日本語: ストアを通さない更新はキャッシュに反映されない / English: Writes that bypass the store are hidden by the cache
    db.get(Setting, "weather.units").value = "fahrenheit"
    db.commit()
    assert store.get(db, "weather.units") == "celsius"

    store.clear_cache()
    assert store.get(db, "weather.units") == "fahrenheit"


def test_set_invalidates_only_the_written_key(db):
    store = SettingsStore(SettingsCache(ttl=3600))
    assert store.get(db, "weather.enabled", False) is False

    store.set(db, "weather.enabled", True)

    assert store.get(db, "weather.enabled", False) is True
    assert store.is_weather_enabled(db) is True


def test_missing_key_returns_default_and_forget_removes_row(db):
    store = SettingsStore(SettingsCache(ttl=3600))
    assert store.get(db, "weather.location", {"lat": None}) == {"lat": None}

    store.set(db, "weather.location", {"lat": 40.7, "lon": -74.0, "name": "NYC"})
    store.forget(db, "weather.location")

    assert db.get(Setting, "weather.location") is None
    assert store.get(db, "weather.location") is None


def test_get_by_prefix_returns_matching_keys_only(db):
    store = SettingsStore(SettingsCache(ttl=0))
    store.set(db, "weather.units", "celsius")
    store.set(db, "weather.widget_size", "large")
    store.set(db, "weatherman", "nope")
    store.set(db, "display.theme", "dark")

    assert store.get_by_prefix(db, "weather.") == {
        "weather.units": "celsius",
        "weather.widget_size": "large",
    }


def test_returned_values_do_not_alias_the_cache(db):
    store = SettingsStore(SettingsCache(ttl=3600))
    store.set(db, "weather.location", {"lat": 40.7, "lon": -74.0, "name": "NYC"})

    location = store.get(db, "weather.location")
    location["name"] = "Boston"
    days = store.get(db, "display.days", ["monday"])
    days.append("tuesday")

    assert store.get(db, "weather.location")["name"] == "NYC"
    assert store.get(db, "display.days", ["monday"]) == ["monday"]
