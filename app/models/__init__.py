from .base import TimestampMixin, UUIDMixin
from .master import ShippingMethod, PaymentMethod, SystemSetting
from .product import Product, ProductProfitShare
from .order import Order
from .promotion import Offer, QuickDiscount
from .finance import Expense
from .mapping import SallaProductMapping, SallaShippingMapping, SallaPaymentMapping

__all__ = [
    # Base
    "TimestampMixin", "UUIDMixin",
    # Master
    "ShippingMethod", "PaymentMethod", "SystemSetting",
    # Product
    "Product", "ProductProfitShare",
    # Order
    "Order",
    # Promotion
    "Offer", "QuickDiscount",
    # Finance
    "Expense",
    # Mappings
    "SallaProductMapping", "SallaShippingMapping", "SallaPaymentMapping",
]
