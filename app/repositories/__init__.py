"""
Persistence boundary
"""
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from app import models
from app.schemas import (
    Product, ShippingMethod, PaymentMethod, Order, Offer, QuickDiscount, Expense,
    SystemSetting, ProfitShareRule,
    SallaProductMapping, SallaShippingMapping, SallaPaymentMapping,
)
from . import transformers
from .base import Repository
from .memory import InMemoryRepository
from .sqlalchemy_repository import SqlAlchemyRepository


@dataclass
class Repositories:
    products: Repository[Product]
    shipping_methods: Repository[ShippingMethod]
    payment_methods: Repository[PaymentMethod]
    orders: Repository[Order]
    offers: Repository[Offer]
    quick_discounts: Repository[QuickDiscount]
    expenses: Repository[Expense]
    settings: Repository[SystemSetting]
    profit_shares: Repository[ProfitShareRule]
    product_mappings: Repository[SallaProductMapping]
    shipping_mappings: Repository[SallaShippingMapping]
    payment_mappings: Repository[SallaPaymentMapping]


_ENTITIES = {
    "products": (models.Product, transformers.PRODUCT),
    "shipping_methods": (models.ShippingMethod, transformers.SHIPPING_METHOD),
    "payment_methods": (models.PaymentMethod, transformers.PAYMENT_METHOD),
    "orders": (models.Order, transformers.ORDER),
    "offers": (models.Offer, transformers.OFFER),
    "quick_discounts": (models.QuickDiscount, transformers.QUICK_DISCOUNT),
    "expenses": (models.Expense, transformers.EXPENSE),
    "settings": (models.SystemSetting, transformers.SYSTEM_SETTING),
    "profit_shares": (models.ProductProfitShare, transformers.PROFIT_SHARE),
    "product_mappings": (models.SallaProductMapping, transformers.PRODUCT_MAPPING),
    "shipping_mappings": (models.SallaShippingMapping, transformers.SHIPPING_MAPPING),
    "payment_mappings": (models.SallaPaymentMapping, transformers.PAYMENT_MAPPING),
}


def create_sqlalchemy_repositories(session_factory: Callable[[], Session]) -> Repositories:
    return Repositories(**{
        name: SqlAlchemyRepository(model, transformer, session_factory)
        for name, (model, transformer) in _ENTITIES.items()
    })


def create_memory_repositories() -> Repositories:
    return Repositories(**{
        name: InMemoryRepository(transformer)
        for name, (_, transformer) in _ENTITIES.items()
    })


__all__ = [
    "Repository", "Repositories", "InMemoryRepository", "SqlAlchemyRepository",
    "create_sqlalchemy_repositories", "create_memory_repositories", "transformers",
]
