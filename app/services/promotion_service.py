"""
Promotion Service - automatic offers and quick discounts
"""
import logging
from datetime import date
from typing import List, Optional, Sequence

from app.repositories import Repository
from app.schemas import AppliedOffer, Offer, OrderItem, QuickDiscount

logger = logging.getLogger(__name__)


def is_offer_valid(offer: Offer, today: Optional[date] = None) -> bool:
    """Active and inside its (optional) date window"""
    if not offer.is_active:
        return False

    today = today or date.today()
    if offer.start_date and today < offer.start_date:
        return False
    if offer.end_date and today > offer.end_date:
        return False
    return True


def find_applicable_offers(
    items: Sequence[OrderItem],
    offers: Sequence[Offer],
    today: Optional[date] = None
) -> List[Offer]:
    """Valid offers whose trigger product is in the cart, in their original order"""
    product_ids = {item.product.id for item in items}
    return [
        offer for offer in offers
        if is_offer_valid(offer, today) and offer.trigger_product_id in product_ids
    ]


def calculate_offer_discount(offer: Offer, original_price: float) -> float:
    """Per-unit discount on the target product; fixed offers never exceed the price"""
    if offer.discount_type == "percentage":
        return original_price * offer.discount_value / 100
    return min(offer.discount_value, original_price)


def _find_item(items: Sequence[OrderItem], product_id: str) -> Optional[OrderItem]:
    return next((item for item in items if item.product.id == product_id), None)


def get_best_offer(items: Sequence[OrderItem], applicable_offers: Sequence[Offer]) -> Optional[Offer]:
    best_offer = None
    max_discount = 0.0

    for offer in applicable_offers:
        target = _find_item(items, offer.target_product_id)
        if target is None:
            continue
        discount = calculate_offer_discount(offer, target.product.selling_price)
        if discount > max_discount:
            max_discount = discount
            best_offer = offer

    return best_offer


def apply_offer_to_items(items: Sequence[OrderItem], offer: Offer) -> Optional[AppliedOffer]:
    """Describe the discount an offer gives; item prices are left untouched"""
    target = _find_item(items, offer.target_product_id)
    if target is None:
        return None

    discount_amount = calculate_offer_discount(offer, target.product.selling_price) * target.quantity
    return AppliedOffer(
        offer_id=offer.id,
        offer_name=offer.name,
        trigger_product_id=offer.trigger_product_id,
        target_product_id=offer.target_product_id,
        discount_type=offer.discount_type,
        discount_value=offer.discount_value,
        discount_amount=discount_amount,
    )


def resolve_best_offer(
    items: Sequence[OrderItem],
    offers: Sequence[Offer],
    today: Optional[date] = None
) -> Optional[AppliedOffer]:
    best = get_best_offer(items, find_applicable_offers(items, offers, today))
    if best is None:
        return None
    applied = apply_offer_to_items(items, best)
    logger.debug(f"Applied offer {best.name or best.id}: {applied.discount_amount if applied else 0}")
    return applied


class PromotionService:
    """Offer and quick discount persistence"""

    def __init__(self, offers: Repository[Offer], quick_discounts: Repository[QuickDiscount]):
        self.offers = offers
        self.quick_discounts = quick_discounts

    async def get_offers(self) -> List[Offer]:
        return await self.offers.get_all()

    async def get_active_offers(self, today: Optional[date] = None) -> List[Offer]:
        return [offer for offer in await self.offers.get_all() if is_offer_valid(offer, today)]

    async def save_offer(self, offer: Offer) -> Offer:
        return await self.offers.upsert(offer)

    async def toggle_offer(self, offer_id: str, is_active: bool) -> Offer:
        offer = await self.offers.get_by_id(offer_id)
        if offer is None:
            raise ValueError(f"Offer {offer_id} not found")
        return await self.offers.upsert(offer.model_copy(update={"is_active": is_active}))

    async def delete_offer(self, offer_id: str) -> None:
        await self.offers.delete(offer_id)

    async def find_best_offer(self, items: Sequence[OrderItem], today: Optional[date] = None) -> Optional[AppliedOffer]:
        return resolve_best_offer(items, await self.get_active_offers(today), today)

    async def get_quick_discounts(self, active_only: bool = True) -> List[QuickDiscount]:
        discounts = await self.quick_discounts.get_all()
        if active_only:
            discounts = [d for d in discounts if d.is_active]
        return sorted(discounts, key=lambda d: d.display_order)

    async def save_quick_discount(self, discount: QuickDiscount) -> QuickDiscount:
        return await self.quick_discounts.upsert(discount)

    async def delete_quick_discount(self, discount_id: str) -> None:
        await self.quick_discounts.delete(discount_id)
