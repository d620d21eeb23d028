"""
Salla Import Schemas
"""
from pydantic import Field, computed_field
from typing import Optional, List, Literal
from datetime import datetime

from .base import CamelModel
from .product import Product
from .order import ShippingMethod, PaymentMethod

LogStatus = Literal["success", "error", "warning", "info"]
ImportStep = Literal["upload", "preview", "importing", "complete"]

class SallaProduct(CamelModel):
    name: str
    quantity: int = 1
    sku: str = ""

class SallaOrder(CamelModel):
    """One row of a Salla order export, as written in the file"""
    order_number: str
    customer_name: str
    cart_subtotal: float = 0
    discount: float = 0
    shipping_cost: float = 0
    payment_method: str = ""
    cod_commission: float = 0
    order_total: float = 0
    order_date: datetime
    shipping_company: str = ""
    products: List[SallaProduct] = []

class ParseLogEntry(CamelModel):
    row_number: int
    status: LogStatus
    message: str
    raw_content: Optional[str] = None
    column_count: Optional[int] = None

class ParseSummary(CamelModel):
    total_rows: int = 0
    successful_rows: int = 0
    failed_rows: int = 0
    delimiter: str = "unknown"

class ParseResult(CamelModel):
    orders: List[SallaOrder] = []
    parse_log: List[ParseLogEntry] = []
    summary: ParseSummary = Field(default_factory=ParseSummary)

class SallaProductMapping(CamelModel):
    id: str
    salla_product_name: str
    salla_sku: Optional[str] = None
    system_product_id: str

class SallaShippingMapping(CamelModel):
    id: str
    salla_shipping_name: str
    system_shipping_method_id: str

class SallaPaymentMapping(CamelModel):
    id: str
    salla_payment_name: str
    system_payment_method_id: str

class MappedProduct(CamelModel):
    salla_product: SallaProduct
    system_product: Optional[Product] = None

class MappedOrder(CamelModel):
    salla_order: SallaOrder
    mapped_products: List[MappedProduct] = []
    shipping_method: Optional[ShippingMethod] = None
    payment_method: Optional[PaymentMethod] = None
    validation_errors: List[str] = []

    @computed_field
    @property
    def has_unmapped_products(self) -> bool:
        return any(p.system_product is None for p in self.mapped_products)

    @computed_field
    @property
    def missing_methods(self) -> List[str]:
        missing = []
        if self.shipping_method is None:
            missing.append("shipping method")
        if self.payment_method is None:
            missing.append("payment method")
        return missing

    @computed_field
    @property
    def is_importable(self) -> bool:
        return (
            not self.has_unmapped_products
            and not self.missing_methods
            and not self.validation_errors
        )

class ImportPreview(CamelModel):
    orders: List[MappedOrder] = []
    unmapped_product_names: List[str] = []
    parse_log: List[ParseLogEntry] = []
    summary: ParseSummary = Field(default_factory=ParseSummary)

    @property
    def orders_with_unmapped_methods(self) -> List[MappedOrder]:
        return [o for o in self.orders if o.missing_methods]

    @property
    def valid_orders(self) -> List[MappedOrder]:
        return [o for o in self.orders if o.is_importable]

    @computed_field
    @property
    def can_import(self) -> bool:
        return not self.unmapped_product_names and not self.orders_with_unmapped_methods

class ImportResult(CamelModel):
    success: int = 0
    failed: int = 0
    skipped: int = 0
    errors: List[str] = []

class SallaUploadRequest(CamelModel):
    """Raw export text as read by the browser"""
    content: str
    filename: Optional[str] = None

class SallaProductMappingCreate(CamelModel):
    salla_product_name: str
    salla_sku: Optional[str] = None
    system_product_id: str

class SallaShippingMappingCreate(CamelModel):
    salla_shipping_name: str
    system_shipping_method_id: str

class SallaPaymentMappingCreate(CamelModel):
    salla_payment_name: str
    system_payment_method_id: str
