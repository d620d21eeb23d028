"""
Salla Mapping Service - Salla names to catalog products and methods
"""
import logging
from typing import List, Optional

from app.models.base import new_id
from app.repositories import Repositories
from app.schemas import (
    PaymentMethod, Product, ShippingMethod,
    SallaPaymentMapping, SallaProductMapping, SallaShippingMapping,
)

logger = logging.getLogger(__name__)


class SallaMappingService:
    """
    Name lookups are exact: a Salla name maps to at most one system record and
    anything without a mapping (or whose target was deleted or could not be
    fetched) is unmapped.
    """

    def __init__(self, repos: Repositories):
        self.repos = repos

    # Products

    async def get_product_mappings(self) -> List[SallaProductMapping]:
        mappings = await self.repos.product_mappings.get_all()
        return sorted(mappings, key=lambda m: m.salla_product_name)

    async def add_product_mapping(
        self,
        salla_product_name: str,
        system_product_id: str,
        salla_sku: Optional[str] = None
    ) -> SallaProductMapping:
        if await self.repos.products.get_by_id(system_product_id) is None:
            raise ValueError(f"Product {system_product_id} not found")
        existing = await self.repos.product_mappings.find_one(salla_product_name=salla_product_name)
        mapping = SallaProductMapping(
            id=existing.id if existing else new_id(),
            salla_product_name=salla_product_name,
            salla_sku=salla_sku,
            system_product_id=system_product_id,
        )
        return await self.repos.product_mappings.upsert(mapping)

    async def delete_product_mapping(self, mapping_id: str) -> None:
        await self.repos.product_mappings.delete(mapping_id)

    async def lookup_product_by_name(self, salla_product_name: str) -> Optional[Product]:
        try:
            mapping = await self.repos.product_mappings.find_one(salla_product_name=salla_product_name)
            if mapping is None:
                return None
            return await self.repos.products.get_by_id(mapping.system_product_id)
        except Exception as e:
            logger.warning(f"Product mapping lookup failed for {salla_product_name}: {e}")
            return None

    # Shipping

    async def get_shipping_mappings(self) -> List[SallaShippingMapping]:
        return await self.repos.shipping_mappings.get_all()

    async def add_shipping_mapping(self, salla_shipping_name: str, system_shipping_method_id: str) -> SallaShippingMapping:
        if await self.repos.shipping_methods.get_by_id(system_shipping_method_id) is None:
            raise ValueError(f"Shipping method {system_shipping_method_id} not found")
        existing = await self.repos.shipping_mappings.find_one(salla_shipping_name=salla_shipping_name)
        mapping = SallaShippingMapping(
            id=existing.id if existing else new_id(),
            salla_shipping_name=salla_shipping_name,
            system_shipping_method_id=system_shipping_method_id,
        )
        return await self.repos.shipping_mappings.upsert(mapping)

    async def delete_shipping_mapping(self, mapping_id: str) -> None:
        await self.repos.shipping_mappings.delete(mapping_id)

    async def lookup_shipping_method(self, salla_shipping_name: str) -> Optional[ShippingMethod]:
        try:
            mapping = await self.repos.shipping_mappings.find_one(salla_shipping_name=salla_shipping_name)
            if mapping is None:
                return None
            return await self.repos.shipping_methods.get_by_id(mapping.system_shipping_method_id)
        except Exception as e:
            logger.warning(f"Shipping mapping lookup failed for {salla_shipping_name}: {e}")
            return None

    # Payment

    async def get_payment_mappings(self) -> List[SallaPaymentMapping]:
        return await self.repos.payment_mappings.get_all()

    async def add_payment_mapping(self, salla_payment_name: str, system_payment_method_id: str) -> SallaPaymentMapping:
        if await self.repos.payment_methods.get_by_id(system_payment_method_id) is None:
            raise ValueError(f"Payment method {system_payment_method_id} not found")
        existing = await self.repos.payment_mappings.find_one(salla_payment_name=salla_payment_name)
        mapping = SallaPaymentMapping(
            id=existing.id if existing else new_id(),
            salla_payment_name=salla_payment_name,
            system_payment_method_id=system_payment_method_id,
        )
        return await self.repos.payment_mappings.upsert(mapping)

    async def delete_payment_mapping(self, mapping_id: str) -> None:
        await self.repos.payment_mappings.delete(mapping_id)

    async def lookup_payment_method(self, salla_payment_name: str) -> Optional[PaymentMethod]:
        try:
            mapping = await self.repos.payment_mappings.find_one(salla_payment_name=salla_payment_name)
            if mapping is None:
                return None
            return await self.repos.payment_methods.get_by_id(mapping.system_payment_method_id)
        except Exception as e:
            logger.warning(f"Payment mapping lookup failed for {salla_payment_name}: {e}")
            return None
