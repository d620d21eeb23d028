"""
Order Calculations - pure functions shared by the calculator API and the Salla import.
"""
from .fees import calculate_payment_fees
from .discount import calculate_discount_amount
from .shipping import (
    determine_is_free_shipping,
    calculate_actual_shipping_cost,
    resolve_free_shipping,
)
from .totals import calculate_subtotal, calculate_customer_total
from .profit_sharing import (
    ShareRules,
    calculate_revenue_proportion,
    calculate_item_profit,
    calculate_total_profit_share,
    calculate_total_earnings,
)
from .order import calculate_order, calculate_complete_order

__all__ = [
    "calculate_payment_fees",
    "calculate_discount_amount",
    "determine_is_free_shipping",
    "calculate_actual_shipping_cost",
    "resolve_free_shipping",
    "calculate_subtotal",
    "calculate_customer_total",
    "ShareRules",
    "calculate_revenue_proportion",
    "calculate_item_profit",
    "calculate_total_profit_share",
    "calculate_total_earnings",
    "calculate_order",
    "calculate_complete_order",
]
