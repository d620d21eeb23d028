"""
Manual Order Discounts
"""
from typing import Optional

from app.schemas.order import Discount


def calculate_discount_amount(base_amount: float, discount: Optional[Discount]) -> float:
    """Amount to subtract for a manual discount. Fixed values are not capped."""
    if discount is None:
        return 0.0

    if discount.type == "percentage":
        return (base_amount * discount.value) / 100
    return discount.value
