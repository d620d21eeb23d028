"""
Order Service - Business Logic for Orders
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from app.calculations import calculate_complete_order
from app.core.exceptions import OrderValidationError
from app.models.base import new_id
from app.repositories import Repository
from app.schemas import (
    AppliedOffer, Discount, Order, OrderCalculationRequest, OrderCalculationResult,
    OrderCreate, OrderItem, PaymentMethod, ShippingMethod,
)
from .profit_share_service import ProfitShareService
from .promotion_service import PromotionService
from .settings_service import SettingsService

logger = logging.getLogger(__name__)


def validate_order_items(items: Sequence[OrderItem], discount: Optional[Discount]) -> List[str]:
    errors = []
    if any(item.quantity < 0 for item in items):
        errors.append("Quantity cannot be negative")
    if discount is not None:
        if discount.value != discount.value:
            errors.append("Discount value must be a number")
        elif discount.type == "percentage" and not 0 <= discount.value <= 100:
            errors.append("Percentage discount must be between 0 and 100")
        elif discount.type == "fixed" and discount.value < 0:
            errors.append("Discount cannot be negative")
    return errors


def validate_order_input(
    order_number: Optional[str],
    items: Sequence[OrderItem],
    discount: Optional[Discount] = None
) -> None:
    """Reject bad input before anything is calculated"""
    errors = []
    if not order_number or not order_number.strip():
        errors.append("Order number is required")
    if not any(item.quantity > 0 for item in items):
        errors.append("Order must contain at least one product")
    errors.extend(validate_order_items(items, discount))
    if errors:
        raise OrderValidationError(errors)


def drop_empty_lines(items: Sequence[OrderItem]) -> List[OrderItem]:
    return [item for item in items if item.quantity > 0]


class OrderService:
    """Order business logic"""

    def __init__(
        self,
        repository: Repository[Order],
        settings_service: SettingsService,
        profit_share_service: ProfitShareService,
        promotion_service: Optional[PromotionService] = None,
    ):
        self.repository = repository
        self.settings_service = settings_service
        self.profit_share_service = profit_share_service
        self.promotion_service = promotion_service

    async def calculate(
        self,
        items: Sequence[OrderItem],
        shipping_method: ShippingMethod,
        payment_method: PaymentMethod,
        discount: Optional[Discount] = None,
        free_shipping_threshold: Optional[float] = None,
        manual_free_shipping: Optional[bool] = None,
        applied_offer: Optional[AppliedOffer] = None,
    ) -> OrderCalculationResult:
        return await calculate_complete_order(
            items,
            shipping_method,
            payment_method,
            discount,
            free_shipping_threshold=free_shipping_threshold,
            settings_service=self.settings_service,
            profit_share_service=self.profit_share_service,
            manual_free_shipping=manual_free_shipping,
            applied_offer=applied_offer,
        )

    async def _best_offer(self, request: OrderCalculationRequest) -> Optional[AppliedOffer]:
        if not request.apply_offers or self.promotion_service is None:
            return None
        return await self.promotion_service.find_best_offer(request.items)

    async def calculate_request(self, request: OrderCalculationRequest) -> OrderCalculationResult:
        """Interactive calculator: recomputed on every input change"""
        errors = validate_order_items(request.items, request.discount)
        if errors:
            raise OrderValidationError(errors)

        return await self.calculate(
            request.items,
            request.shipping_method,
            request.payment_method,
            request.discount,
            free_shipping_threshold=request.free_shipping_threshold,
            manual_free_shipping=request.manual_free_shipping,
            applied_offer=await self._best_offer(request),
        )

    async def create_order(self, data: OrderCreate) -> Order:
        validate_order_input(data.order_number, data.items, data.discount)

        items = drop_empty_lines(data.items)
        applied_offer = await self._best_offer(data)
        result = await self.calculate(
            items,
            data.shipping_method,
            data.payment_method,
            data.discount,
            free_shipping_threshold=data.free_shipping_threshold,
            manual_free_shipping=data.manual_free_shipping,
            applied_offer=applied_offer,
        )

        order = build_order(
            order_number=data.order_number.strip(),
            customer_name=data.customer_name,
            date=data.date or datetime.now(),
            items=items,
            shipping_method=data.shipping_method,
            payment_method=data.payment_method,
            discount=data.discount,
            applied_offer=applied_offer,
            result=result,
        )
        return await self.save_order(order)

    async def save_order(self, order: Order) -> Order:
        existing = await self.repository.find_one(order_number=order.order_number)
        if existing is not None and existing.id != order.id:
            raise OrderValidationError([f"Order number {order.order_number} already exists"])

        order = order.model_copy(update={"items": drop_empty_lines(order.items)})
        saved = await self.repository.upsert(order)
        logger.info(f"Saved order {order.order_number}: total={order.total} net_profit={order.net_profit}")
        return saved

    async def get_orders(self) -> List[Order]:
        orders = await self.repository.get_all()
        return sorted(orders, key=lambda o: o.date, reverse=True)

    async def get_order(self, order_id: str) -> Optional[Order]:
        return await self.repository.get_by_id(order_id)

    async def delete_order(self, order_id: str) -> bool:
        if await self.repository.get_by_id(order_id) is None:
            return False
        await self.repository.delete(order_id)
        logger.info(f"Deleted order {order_id}")
        return True


def build_order(
    order_number: str,
    customer_name: Optional[str],
    date: datetime,
    items: Sequence[OrderItem],
    shipping_method: ShippingMethod,
    payment_method: PaymentMethod,
    discount: Optional[Discount],
    result: OrderCalculationResult,
    applied_offer: Optional[AppliedOffer] = None,
) -> Order:
    """Persistable order; every money field comes from the calculation result"""
    return Order(
        id=new_id(),
        order_number=order_number,
        customer_name=customer_name,
        date=date,
        items=list(items),
        shipping_method=shipping_method,
        payment_method=payment_method,
        subtotal=result.subtotal,
        shipping_cost=shipping_method.cost,
        payment_fees=result.payment_fees,
        discount=discount,
        applied_offer=applied_offer,
        discount_amount=result.discount_amount,
        total=result.customer_total,
        net_profit=result.net_profit,
        is_free_shipping=result.is_free_shipping,
    )
