import asyncio

import pytest

from app.core.exceptions import SettingNotFoundError
from app.repositories import InMemoryRepository, transformers
from app.schemas import SystemSetting
from app.services import SettingsCache, SettingsService


class FakeClock:

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def setting(key, value, setting_type="string"):
    return SystemSetting(id=key, setting_key=key, setting_value=value, setting_type=setting_type)


@pytest.fixture
def repo():
    repository = InMemoryRepository(transformers.SYSTEM_SETTING)
    asyncio.run(repository.upsert(setting("free_shipping_threshold", "250", "number")))
    return repository


def test_cache_serves_until_ttl_expires():
    clock = FakeClock()
    cache = SettingsCache(ttl_seconds=60, clock=clock)
    calls = []

    async def fetch():
        calls.append(clock.now)
        return len(calls)

    assert asyncio.run(cache.get("k", fetch)) == 1
    clock.now = 59
    assert asyncio.run(cache.get("k", fetch)) == 1
    clock.now = 60
    assert asyncio.run(cache.get("k", fetch)) == 2
    assert calls == [0, 60]


def test_cache_invalidate_one_or_all():
    cache = SettingsCache(ttl_seconds=60, clock=FakeClock())
    counter = {"n": 0}

    async def fetch():
        counter["n"] += 1
        return counter["n"]

    asyncio.run(cache.get("a", fetch))
    asyncio.run(cache.get("b", fetch))
    cache.invalidate("a")
    assert asyncio.run(cache.get("a", fetch)) == 3
    assert asyncio.run(cache.get("b", fetch)) == 2
    cache.invalidate()
    assert asyncio.run(cache.get("b", fetch)) == 4


def test_failed_fetch_is_not_cached():
    cache = SettingsCache(ttl_seconds=60, clock=FakeClock())

    async def failing():
        raise RuntimeError("offline")

    async def working():
        return 7

    with pytest.raises(RuntimeError):
        asyncio.run(cache.get("k", failing))
    assert asyncio.run(cache.get("k", working)) == 7


def test_get_setting_parses_by_type():
    repository = InMemoryRepository(transformers.SYSTEM_SETTING)
    for row in (
        setting("n", "12.5", "number"),
        setting("b", "true", "boolean"),
        setting("f", "yes", "boolean"),
        setting("j", '{"a": [1, 2]}', "json"),
        setting("s", "hello"),
    ):
        asyncio.run(repository.upsert(row))
    service = SettingsService(repository)

    assert asyncio.run(service.get_setting("n")) == 12.5
    assert asyncio.run(service.get_setting("b")) is True
    assert asyncio.run(service.get_setting("f")) is False
    assert asyncio.run(service.get_setting("j")) == {"a": [1, 2]}
    assert asyncio.run(service.get_setting("s")) == "hello"


def test_missing_setting_raises():
    service = SettingsService(InMemoryRepository(transformers.SYSTEM_SETTING))

    with pytest.raises(SettingNotFoundError) as exc:
        asyncio.run(service.get_setting("nope"))
    assert str(exc.value) == "Failed to fetch setting: nope"


def test_threshold_falls_back_to_default_when_missing():
    service = SettingsService(InMemoryRepository(transformers.SYSTEM_SETTING), default_free_shipping_threshold=300)

    assert asyncio.run(service.get_free_shipping_threshold()) == 300


def test_threshold_cached_until_update(repo):
    clock = FakeClock()
    service = SettingsService(repo, SettingsCache(ttl_seconds=60, clock=clock))
    assert asyncio.run(service.get_free_shipping_threshold()) == 250

    # a write from elsewhere is not seen until the entry expires
    asyncio.run(repo.upsert(setting("free_shipping_threshold", "400", "number")))
    assert asyncio.run(service.get_free_shipping_threshold()) == 250
    clock.now = 61
    assert asyncio.run(service.get_free_shipping_threshold()) == 400

    # our own write invalidates immediately
    asyncio.run(service.update_free_shipping_threshold(150))
    assert asyncio.run(service.get_free_shipping_threshold()) == 150


def test_negative_threshold_rejected(repo):
    service = SettingsService(repo)

    with pytest.raises(ValueError):
        asyncio.run(service.update_free_shipping_threshold(-1))


def test_update_creates_missing_threshold_row():
    repository = InMemoryRepository(transformers.SYSTEM_SETTING)
    service = SettingsService(repository)

    asyncio.run(service.update_free_shipping_threshold(275))

    row = asyncio.run(repository.find_one(setting_key="free_shipping_threshold"))
    assert row.setting_value == "275"
    assert row.setting_type == "number"
