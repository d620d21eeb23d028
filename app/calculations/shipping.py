"""
Free Shipping & Shipping Cost
"""
from typing import Optional


def determine_is_free_shipping(
    subtotal: float,
    discount_amount: float,
    free_shipping_threshold: float
) -> bool:
    """Orders at or above the threshold (after discount) ship free"""
    return (subtotal - discount_amount) >= free_shipping_threshold


def calculate_actual_shipping_cost(shipping_method_cost: float, is_free_shipping: bool) -> float:
    """Shipping charged to the customer"""
    return 0.0 if is_free_shipping else shipping_method_cost


def resolve_free_shipping(
    subtotal: float,
    discount_amount: float,
    free_shipping_threshold: float,
    auto_detect: bool = True,
    manual_override: Optional[bool] = None
) -> bool:
    """
    Free-shipping decision under the configured policy.

    auto_detect=True: the threshold always wins and a manual toggle is ignored,
    so a recalculation can flip a user's choice back.
    auto_detect=False: a manual toggle sticks once set.
    """
    if not auto_detect and manual_override is not None:
        return manual_override
    return determine_is_free_shipping(subtotal, discount_amount, free_shipping_threshold)
