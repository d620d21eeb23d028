"""
Row Transformers

Each persisted entity crosses the storage boundary through exactly one
transformer pair: `to_internal(row)` builds the domain schema from a snake_case
row dict, `to_external(schema)` builds the row dict back. Repositories apply
them once per direction; services never see raw rows.
"""
from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Callable, Dict, Generic, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel

from app.schemas import (
    Product, ShippingMethod, PaymentMethod, Order, OrderItem, Discount,
    Offer, AppliedOffer, QuickDiscount, Expense, SystemSetting, ProfitShareRule,
    SallaProductMapping, SallaShippingMapping, SallaPaymentMapping,
)

T = TypeVar("T", bound=BaseModel)
Row = Dict[str, Any]


@dataclass(frozen=True)
class EntityTransformer(Generic[T]):
    table: str
    to_internal: Callable[[Row], T]
    to_external: Callable[[T], Row]


def _plain(value: Any) -> Any:
    """Storage numerics come back as Decimal; the domain works in float"""
    if isinstance(value, Decimal):
        return float(value)
    return value


def _row_to_model(model: Type[T], row: Row, fields: Optional[Iterable[str]] = None) -> T:
    names = fields or model.model_fields.keys()
    data = {name: _plain(row[name]) for name in names if name in row and row[name] is not None}
    return model.model_validate(data)


def _simple(table: str, model: Type[T]) -> EntityTransformer[T]:
    """Entities whose column names equal the schema field names"""
    return EntityTransformer(
        table=table,
        to_internal=lambda row: _row_to_model(model, row),
        to_external=lambda record: record.model_dump(mode="python", by_alias=False),
    )


# ---------- Orders ----------

def _item_to_external(item: OrderItem) -> Row:
    return {
        "product": item.product.model_dump(mode="json", by_alias=False),
        "quantity": item.quantity,
    }


def _item_to_internal(row: Row) -> OrderItem:
    return OrderItem(
        product=_row_to_model(Product, row["product"]),
        quantity=row.get("quantity", 1),
    )


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


def order_to_internal(row: Row) -> Order:
    return Order(
        id=row["id"],
        order_number=row["order_number"],
        customer_name=row.get("customer_name"),
        date=_parse_datetime(row["created_at"]),
        items=[_item_to_internal(i) for i in row.get("items") or []],
        shipping_method=_row_to_model(ShippingMethod, row["shipping_method"]),
        payment_method=_row_to_model(PaymentMethod, row["payment_method"]),
        subtotal=_plain(row.get("subtotal") or 0),
        shipping_cost=_plain(row.get("shipping_cost") or 0),
        payment_fees=_plain(row.get("payment_fees") or 0),
        discount=_row_to_model(Discount, row["discount"]) if row.get("discount") else None,
        applied_offer=_row_to_model(AppliedOffer, row["applied_offer"]) if row.get("applied_offer") else None,
        discount_amount=_plain(row.get("discount_amount") or 0),
        total=_plain(row.get("total") or 0),
        net_profit=_plain(row.get("net_profit") or 0),
        is_free_shipping=bool(row.get("is_free_shipping")),
    )


def order_to_external(order: Order) -> Row:
    return {
        "id": order.id,
        "order_number": order.order_number,
        "customer_name": order.customer_name,
        "created_at": order.date,
        "items": [_item_to_external(i) for i in order.items],
        "shipping_method": order.shipping_method.model_dump(mode="json", by_alias=False),
        "payment_method": order.payment_method.model_dump(mode="json", by_alias=False),
        "subtotal": order.subtotal,
        "shipping_cost": order.shipping_cost,
        "payment_fees": order.payment_fees,
        "discount": order.discount.model_dump(mode="json", by_alias=False) if order.discount else None,
        "applied_offer": order.applied_offer.model_dump(mode="json", by_alias=False) if order.applied_offer else None,
        "discount_amount": order.discount_amount,
        "total": order.total,
        "net_profit": order.net_profit,
        "is_free_shipping": order.is_free_shipping,
    }


# ---------- Registry ----------

PRODUCT = _simple("products", Product)
SHIPPING_METHOD = _simple("shipping_methods", ShippingMethod)
PAYMENT_METHOD = _simple("payment_methods", PaymentMethod)
ORDER = EntityTransformer("orders", order_to_internal, order_to_external)
OFFER = _simple("offers", Offer)
QUICK_DISCOUNT = _simple("quick_discounts", QuickDiscount)
EXPENSE = _simple("expenses", Expense)
SYSTEM_SETTING = _simple("system_settings", SystemSetting)
PROFIT_SHARE = _simple("product_profit_shares", ProfitShareRule)
PRODUCT_MAPPING = _simple("salla_product_mappings", SallaProductMapping)
SHIPPING_MAPPING = _simple("salla_shipping_mappings", SallaShippingMapping)
PAYMENT_MAPPING = _simple("salla_payment_mappings", SallaPaymentMapping)

__all__ = [
    "EntityTransformer",
    "order_to_internal", "order_to_external",
    "PRODUCT", "SHIPPING_METHOD", "PAYMENT_METHOD", "ORDER", "OFFER",
    "QUICK_DISCOUNT", "EXPENSE", "SYSTEM_SETTING", "PROFIT_SHARE",
    "PRODUCT_MAPPING", "SHIPPING_MAPPING", "PAYMENT_MAPPING",
]
