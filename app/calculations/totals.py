"""
Subtotal & Customer Total
"""
from typing import Iterable

from app.schemas.order import OrderItem


def calculate_subtotal(items: Iterable[OrderItem]) -> float:
    return sum((item.product.selling_price * item.quantity for item in items), 0.0)


def calculate_customer_total(
    subtotal: float,
    shipping_cost: float,
    discount_amount: float,
    customer_fee: float
) -> float:
    """What the customer pays; `shipping_cost` is the actual (free-adjusted) cost"""
    return subtotal + shipping_cost - discount_amount + customer_fee
