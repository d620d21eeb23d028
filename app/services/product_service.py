"""
Product Service - catalog products, shipping methods and payment methods
"""
import logging
from typing import List, Optional

from app.models.base import new_id
from app.repositories import Repositories
from app.schemas import PaymentMethod, Product, ProductCreate, ProductUpdate, ShippingMethod

logger = logging.getLogger(__name__)


class ProductService:
    """Catalog business logic"""

    def __init__(self, repos: Repositories):
        self.repos = repos

    async def get_products(self, search: Optional[str] = None, owner: Optional[str] = None) -> List[Product]:
        products = await self.repos.products.get_all()
        if owner:
            products = [p for p in products if p.owner == owner]
        if search:
            term = search.lower()
            products = [p for p in products if term in p.name.lower() or term in p.sku.lower()]
        return sorted(products, key=lambda p: p.name)

    async def get_product(self, product_id: str) -> Optional[Product]:
        return await self.repos.products.get_by_id(product_id)

    async def create_product(self, data: ProductCreate) -> Product:
        product = Product(id=new_id(), **data.model_dump())
        await self.repos.products.upsert(product)
        logger.info(f"Created product {product.name} ({product.owner})")
        return product

    async def update_product(self, product_id: str, data: ProductUpdate) -> Optional[Product]:
        product = await self.repos.products.get_by_id(product_id)
        if product is None:
            return None
        updated = product.model_copy(update=data.model_dump(exclude_unset=True))
        return await self.repos.products.upsert(updated)

    async def delete_product(self, product_id: str) -> None:
        await self.repos.products.delete(product_id)

    async def get_shipping_methods(self, active_only: bool = True) -> List[ShippingMethod]:
        methods = await self.repos.shipping_methods.get_all()
        if active_only:
            methods = [m for m in methods if m.is_active]
        return sorted(methods, key=lambda m: m.name)

    async def save_shipping_method(self, method: ShippingMethod) -> ShippingMethod:
        if method.cost < 0:
            raise ValueError("Shipping cost cannot be negative")
        return await self.repos.shipping_methods.upsert(method)

    async def get_payment_methods(self, active_only: bool = True) -> List[PaymentMethod]:
        methods = await self.repos.payment_methods.get_all()
        if active_only:
            methods = [m for m in methods if m.is_active]
        return sorted(methods, key=lambda m: (m.display_order, m.name))

    async def save_payment_method(self, method: PaymentMethod) -> PaymentMethod:
        if method.fee_percentage < 0 or method.fee_fixed < 0 or method.tax_rate < 0:
            raise ValueError("Payment fees cannot be negative")
        return await self.repos.payment_methods.upsert(method)
