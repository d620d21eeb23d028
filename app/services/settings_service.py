"""
Settings Service - system settings with a short-lived cache
"""
import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from app.core.config import settings
from app.core.exceptions import SettingNotFoundError
from app.models.base import new_id
from app.repositories import Repository
from app.schemas import SystemSetting

logger = logging.getLogger(__name__)

FREE_SHIPPING_THRESHOLD_KEY = "free_shipping_threshold"


class SettingsCache:
    """
    TTL cache keyed by setting name. Writes made elsewhere are only seen once
    the entry expires or is invalidated.
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = settings.SETTINGS_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    async def get(self, key: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
        now = self.clock()
        cached = self._entries.get(key)
        if cached is not None and (now - cached[1]) < self.ttl_seconds:
            return cached[0]

        value = await fetch()
        self._entries[key] = (value, now)
        return value

    def invalidate(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)


def parse_setting_value(value: str, setting_type: str) -> Any:
    if setting_type == "number":
        return float(value)
    if setting_type == "boolean":
        return value == "true"
    if setting_type == "json":
        return json.loads(value)
    return value


def format_setting_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class SettingsService:
    """System settings business logic"""

    def __init__(
        self,
        repository: Repository[SystemSetting],
        cache: Optional[SettingsCache] = None,
        default_free_shipping_threshold: Optional[float] = None,
    ):
        self.repository = repository
        self.cache = cache or SettingsCache()
        self.default_free_shipping_threshold = (
            settings.FREE_SHIPPING_THRESHOLD_DEFAULT
            if default_free_shipping_threshold is None
            else default_free_shipping_threshold
        )

    async def _get_row(self, key: str) -> SystemSetting:
        row = await self.repository.find_one(setting_key=key)
        if row is None:
            raise SettingNotFoundError(key)
        return row

    async def get_setting(self, key: str) -> Any:
        """Get a setting value by key, uncached"""
        row = await self._get_row(key)
        return parse_setting_value(row.setting_value, row.setting_type)

    async def get_cached_setting(self, key: str) -> Any:
        return await self.cache.get(key, lambda: self.get_setting(key))

    async def get_free_shipping_threshold(self) -> float:
        """Cached threshold; falls back to the configured default when unavailable"""
        try:
            return float(await self.get_cached_setting(FREE_SHIPPING_THRESHOLD_KEY))
        except Exception as e:
            logger.warning(
                f"Could not load {FREE_SHIPPING_THRESHOLD_KEY} ({e}), "
                f"using default {self.default_free_shipping_threshold}"
            )
            return self.default_free_shipping_threshold

    async def get_settings_by_category(self, category: str) -> List[SystemSetting]:
        rows = await self.repository.find_by(category=category)
        return sorted(rows, key=lambda s: s.setting_key)

    async def get_all_editable_settings(self) -> List[SystemSetting]:
        rows = await self.repository.find_by(is_editable=True)
        return sorted(rows, key=lambda s: ((s.category or ""), s.setting_key))

    async def update_setting(self, key: str, value: Any) -> None:
        row = await self._get_row(key)
        await self.repository.upsert(row.model_copy(update={"setting_value": format_setting_value(value)}))
        self.cache.invalidate(key)
        logger.info(f"Setting {key} updated")

    async def update_free_shipping_threshold(self, value: float) -> None:
        if value < 0:
            raise ValueError("Free shipping threshold must be a positive number")
        try:
            await self.update_setting(FREE_SHIPPING_THRESHOLD_KEY, value)
        except SettingNotFoundError:
            await self.repository.upsert(SystemSetting(
                id=new_id(),
                setting_key=FREE_SHIPPING_THRESHOLD_KEY,
                setting_value=format_setting_value(value),
                setting_type="number",
                description="Minimum (subtotal - discount) for free shipping",
                category="shipping",
            ))
            self.cache.invalidate(FREE_SHIPPING_THRESHOLD_KEY)

    async def ensure_defaults(self) -> None:
        """Create the threshold row on first start"""
        if await self.repository.find_one(setting_key=FREE_SHIPPING_THRESHOLD_KEY) is None:
            await self.update_free_shipping_threshold(self.default_free_shipping_threshold)
