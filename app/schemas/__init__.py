# Pydantic Schemas Package
from .product import Product, ProductCreate, ProductUpdate
from .order import (
    OrderItem, ShippingMethod, PaymentMethod, Discount, Order,
    OrderCalculationResult, OrderCalculationRequest, OrderCreate,
)
from .promotion import Offer, OfferCreate, AppliedOffer, QuickDiscount
from .profit import ProfitShareRule, ItemProfit, ProfitShareResult, TotalEarnings
from .expense import Expense, ExpenseCreate
from .setting import SystemSetting, FreeShippingThreshold
from .salla import (
    SallaProduct, SallaOrder, ParseLogEntry, ParseSummary, ParseResult,
    SallaProductMapping, SallaShippingMapping, SallaPaymentMapping,
    MappedProduct, MappedOrder, ImportPreview, ImportResult, SallaUploadRequest,
    SallaProductMappingCreate, SallaShippingMappingCreate, SallaPaymentMappingCreate,
)
from .report import ReportMetrics

__all__ = [
    "Product", "ProductCreate", "ProductUpdate",
    "OrderItem", "ShippingMethod", "PaymentMethod", "Discount", "Order",
    "OrderCalculationResult", "OrderCalculationRequest", "OrderCreate",
    "Offer", "OfferCreate", "AppliedOffer", "QuickDiscount",
    "ProfitShareRule", "ItemProfit", "ProfitShareResult", "TotalEarnings",
    "Expense", "ExpenseCreate", "SystemSetting", "FreeShippingThreshold",
    "SallaProduct", "SallaOrder", "ParseLogEntry", "ParseSummary", "ParseResult",
    "SallaProductMapping", "SallaShippingMapping", "SallaPaymentMapping",
    "MappedProduct", "MappedOrder", "ImportPreview", "ImportResult", "SallaUploadRequest",
    "SallaProductMappingCreate", "SallaShippingMappingCreate", "SallaPaymentMappingCreate",
    "ReportMetrics",
]
