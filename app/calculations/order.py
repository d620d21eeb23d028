"""
Order Calculation - the one place an order's financial fields come from.

Steps run in a fixed order, each using only earlier results:
subtotal -> discount -> free shipping -> actual shipping -> customer fee
-> customer total -> payment fees (on the customer total) -> profit share
(on the nominal shipping cost) -> net profit.
"""
import logging
from typing import Iterable, Optional, Sequence, TYPE_CHECKING

from app.core.config import settings
from app.schemas.order import (
    Discount, OrderItem, OrderCalculationResult, PaymentMethod, ShippingMethod
)
from app.schemas.promotion import AppliedOffer
from .discount import calculate_discount_amount
from .fees import calculate_payment_fees
from .profit_sharing import ShareRules, calculate_total_profit_share
from .shipping import calculate_actual_shipping_cost, resolve_free_shipping
from .totals import calculate_customer_total, calculate_subtotal

if TYPE_CHECKING:
    from app.services.settings_service import SettingsService
    from app.services.profit_share_service import ProfitShareService

logger = logging.getLogger(__name__)


def calculate_order(
    items: Sequence[OrderItem],
    shipping_method: ShippingMethod,
    payment_method: PaymentMethod,
    discount: Optional[Discount],
    free_shipping_threshold: float,
    share_rules: Optional[ShareRules] = None,
    auto_detect_free_shipping: bool = True,
    manual_free_shipping: Optional[bool] = None,
    applied_offer: Optional[AppliedOffer] = None,
    participants: Optional[Iterable[str]] = None
) -> OrderCalculationResult:
    """Pure, deterministic order calculation"""
    # 1. Subtotal
    subtotal = calculate_subtotal(items)

    # 2. Discount (manual + automatic offer)
    discount_amount = calculate_discount_amount(subtotal, discount)
    if applied_offer is not None:
        discount_amount += applied_offer.discount_amount

    # 3. Free shipping
    is_free_shipping = resolve_free_shipping(
        subtotal,
        discount_amount,
        free_shipping_threshold,
        auto_detect=auto_detect_free_shipping,
        manual_override=manual_free_shipping,
    )

    # 4. Actual shipping charged to the customer
    actual_shipping_cost = calculate_actual_shipping_cost(shipping_method.cost, is_free_shipping)

    # 5. Customer fee (e.g. COD)
    customer_fee = payment_method.customer_fee or 0.0

    # 6. Customer total
    customer_total = calculate_customer_total(
        subtotal=subtotal,
        shipping_cost=actual_shipping_cost,
        discount_amount=discount_amount,
        customer_fee=customer_fee,
    )

    # 7. Gateway fees, on what the customer actually pays
    payment_fees = calculate_payment_fees(payment_method, customer_total)

    # 8. Profit share
    profit_share = calculate_total_profit_share(
        items,
        shipping_method.cost,
        payment_fees,
        discount_amount,
        share_rules=share_rules,
        participants=participants,
    )

    return OrderCalculationResult(
        subtotal=subtotal,
        discount_amount=discount_amount,
        is_free_shipping=is_free_shipping,
        actual_shipping_cost=actual_shipping_cost,
        customer_fee=customer_fee,
        customer_total=customer_total,
        payment_fees=payment_fees,
        net_profit=profit_share.total_net_profit,
        profit_share=profit_share,
    )


async def calculate_complete_order(
    items: Sequence[OrderItem],
    shipping_method: ShippingMethod,
    payment_method: PaymentMethod,
    discount: Optional[Discount] = None,
    free_shipping_threshold: Optional[float] = None,
    settings_service: Optional["SettingsService"] = None,
    profit_share_service: Optional["ProfitShareService"] = None,
    auto_detect_free_shipping: Optional[bool] = None,
    manual_free_shipping: Optional[bool] = None,
    applied_offer: Optional[AppliedOffer] = None
) -> OrderCalculationResult:
    """
    Order calculation entry point.

    Awaits the free-shipping threshold (when not passed in) and the profit share
    rules, then runs `calculate_order`.
    """
    if free_shipping_threshold is None:
        if settings_service is not None:
            free_shipping_threshold = await settings_service.get_free_shipping_threshold()
        else:
            free_shipping_threshold = settings.FREE_SHIPPING_THRESHOLD_DEFAULT

    if auto_detect_free_shipping is None:
        auto_detect_free_shipping = settings.AUTO_DETECT_FREE_SHIPPING

    share_rules = None
    if profit_share_service is not None:
        share_rules = await profit_share_service.get_share_rules()

    result = calculate_order(
        items,
        shipping_method,
        payment_method,
        discount,
        free_shipping_threshold,
        share_rules=share_rules,
        auto_detect_free_shipping=auto_detect_free_shipping,
        manual_free_shipping=manual_free_shipping,
        applied_offer=applied_offer,
        participants=settings.DEFAULT_PARTICIPANTS,
    )
    logger.debug(
        f"Calculated order: subtotal={result.subtotal} total={result.customer_total} "
        f"fees={result.payment_fees} net_profit={result.net_profit}"
    )
    return result
