import asyncio

import pytest

from app.repositories import create_memory_repositories
from app.schemas import (
    OrderItem, PaymentMethod, Product, SallaPaymentMapping, SallaProductMapping,
    SallaShippingMapping, ShippingMethod,
)
from app.services import ServiceContainer


def make_product(product_id="p1", cost=50.0, price=80.0, owner="yassir", name=None, sku=""):
    return Product(
        id=product_id,
        name=name or f"Product {product_id}",
        sku=sku,
        cost=cost,
        selling_price=price,
        owner=owner,
    )


def line(product, quantity=1):
    return OrderItem(product=product, quantity=quantity)


@pytest.fixture
def aramex():
    return ShippingMethod(id="ship-aramex", name="Aramex", cost=15.0)


@pytest.fixture
def mada():
    return PaymentMethod(id="pay-mada", name="mada", fee_percentage=1.0, fee_fixed=1.0, tax_rate=15.0)


@pytest.fixture
def cod():
    return PaymentMethod(id="pay-cod", name="Cash on delivery", customer_fee=10.0)


@pytest.fixture
def services():
    return ServiceContainer(create_memory_repositories())


@pytest.fixture
def seeded(services, aramex, mada):
    """Catalog with two products and Salla mappings for the names used in sample exports"""

    async def seed():
        repos = services.repos
        await repos.products.upsert(make_product("p1", 50, 80, "yassir", name="Mousepad", sku="MP-L-001"))
        await repos.products.upsert(make_product("p2", 30, 50, "basim", name="Desk Mat", sku="DM-001"))
        await repos.shipping_methods.upsert(aramex)
        await repos.payment_methods.upsert(mada)
        await repos.product_mappings.upsert(
            SallaProductMapping(id="m1", salla_product_name="Arabian Mousepad", system_product_id="p1")
        )
        await repos.product_mappings.upsert(
            SallaProductMapping(id="m2", salla_product_name="Desk Mat XL", system_product_id="p2")
        )
        await repos.shipping_mappings.upsert(
            SallaShippingMapping(id="s1", salla_shipping_name="Aramex", system_shipping_method_id=aramex.id)
        )
        await repos.payment_mappings.upsert(
            SallaPaymentMapping(id="y1", salla_payment_name="mada", system_payment_method_id=mada.id)
        )

    asyncio.run(seed())
    return services
