"""
Profit Share Service - per-product participant percentages
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from app.calculations import ShareRules, calculate_total_profit_share
from app.core.config import settings
from app.models.base import new_id
from app.repositories import Repository
from app.schemas import OrderItem, ProfitShareRule, ProfitShareResult
from .settings_service import SettingsCache

logger = logging.getLogger(__name__)

_RULES_KEY = "product_profit_shares"


class ProfitShareService:
    """Loads share rules (cached) and runs the profit-sharing engine with them"""

    def __init__(self, repository: Repository[ProfitShareRule], cache: Optional[SettingsCache] = None):
        self.repository = repository
        self.cache = cache or SettingsCache(ttl_seconds=settings.PROFIT_SHARE_CACHE_TTL_SECONDS)

    async def _load_rules(self) -> Dict[str, Dict[str, float]]:
        rules: Dict[str, Dict[str, float]] = defaultdict(dict)
        for rule in await self.repository.get_all():
            rules[rule.product_id][rule.participant] = rule.share_percentage
        return dict(rules)

    async def get_share_rules(self) -> ShareRules:
        return await self.cache.get(_RULES_KEY, self._load_rules)

    async def get_product_shares(self, product_id: str) -> List[ProfitShareRule]:
        return await self.repository.find_by(product_id=product_id)

    async def set_product_shares(self, product_id: str, percentages: Dict[str, float]) -> List[ProfitShareRule]:
        """Replace a product's split; percentages must add up to 100"""
        total = sum(percentages.values())
        if abs(total - 100) > 1e-9:
            raise ValueError(f"Profit shares for product {product_id} must total 100%, got {total}")

        for existing in await self.repository.find_by(product_id=product_id):
            await self.repository.delete(existing.id)

        saved = []
        for participant, percentage in percentages.items():
            rule = ProfitShareRule(
                id=new_id(),
                product_id=product_id,
                participant=participant,
                share_percentage=percentage,
            )
            saved.append(await self.repository.upsert(rule))

        self.cache.invalidate()
        return saved

    async def calculate(
        self,
        items: Sequence[OrderItem],
        shipping_cost: float,
        payment_fees: float,
        discount_amount: float,
    ) -> ProfitShareResult:
        return calculate_total_profit_share(
            items,
            shipping_cost,
            payment_fees,
            discount_amount,
            share_rules=await self.get_share_rules(),
            participants=settings.DEFAULT_PARTICIPANTS,
        )
