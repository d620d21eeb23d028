"""
Order Schemas
"""
from pydantic import Field
from typing import Optional, List, Literal
from datetime import datetime

from .base import CamelModel
from .product import Product
from .promotion import AppliedOffer
from .profit import ProfitShareResult

DiscountType = Literal["percentage", "fixed"]

class OrderItem(CamelModel):
    product: Product
    quantity: int = Field(default=1, ge=0)

class ShippingMethod(CamelModel):
    id: str
    name: str
    cost: float = 0
    is_active: bool = True

class PaymentMethod(CamelModel):
    id: str
    name: str
    fee_percentage: float = 0
    fee_fixed: float = 0
    tax_rate: float = 0
    customer_fee: float = 0  # surcharge passed on to the customer, e.g. COD
    display_order: int = 0
    is_active: bool = True

class Discount(CamelModel):
    type: DiscountType
    value: float
    code: Optional[str] = None

class Order(CamelModel):
    """Persisted order; financial fields always come from the order calculation"""
    id: str
    order_number: str
    customer_name: Optional[str] = None
    date: datetime
    items: List[OrderItem] = []
    shipping_method: ShippingMethod
    payment_method: PaymentMethod
    subtotal: float = 0
    shipping_cost: float = 0  # nominal method cost, before the free-shipping override
    payment_fees: float = 0
    discount: Optional[Discount] = None
    applied_offer: Optional[AppliedOffer] = None
    discount_amount: float = 0  # manual plus offer discount, as calculated
    total: float = 0
    net_profit: float = 0
    is_free_shipping: bool = False

class OrderCalculationResult(CamelModel):
    subtotal: float
    discount_amount: float
    is_free_shipping: bool
    actual_shipping_cost: float
    customer_fee: float
    customer_total: float
    payment_fees: float
    net_profit: float
    profit_share: Optional[ProfitShareResult] = None

class OrderCalculationRequest(CamelModel):
    items: List[OrderItem]
    shipping_method: ShippingMethod
    payment_method: PaymentMethod
    discount: Optional[Discount] = None
    free_shipping_threshold: Optional[float] = None
    manual_free_shipping: Optional[bool] = None
    apply_offers: bool = True

class OrderCreate(OrderCalculationRequest):
    order_number: str
    customer_name: Optional[str] = None
    date: Optional[datetime] = None
