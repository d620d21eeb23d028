"""
Salla Import Service - preview and import of a Salla order export
"""
import logging
from typing import List, Optional

from app.core.exceptions import ImportBlockedError, ImportStateError, SallaParseError
from app.integrations.salla import parse_salla_csv_with_log, validate_salla_order
from app.schemas import (
    Discount, ImportPreview, ImportResult, MappedOrder, MappedProduct, OrderItem, ParseResult,
)
from .order_service import OrderService, build_order
from .salla_mapping_service import SallaMappingService

logger = logging.getLogger(__name__)


class SallaImportFlow:
    """
    upload -> preview -> importing -> complete. Steps only move forward;
    reset() goes back to upload from anywhere.
    """

    STEP_TRANSITIONS = {
        "upload": ["preview"],
        "preview": ["importing"],
        "importing": ["complete"],
        "complete": [],
    }

    def __init__(self, mapping_service: SallaMappingService, order_service: OrderService):
        self.mapping_service = mapping_service
        self.order_service = order_service
        self.step = "upload"
        self.parse_result: Optional[ParseResult] = None
        self.preview_result: Optional[ImportPreview] = None
        self.result: Optional[ImportResult] = None

    def _advance(self, step: str) -> None:
        if step not in self.STEP_TRANSITIONS[self.step]:
            raise ImportStateError(f"Cannot move from {self.step} to {step}")
        self.step = step

    def _require(self, step: str) -> None:
        if self.step != step:
            raise ImportStateError(f"Import is at {self.step}, expected {step}")

    def reset(self) -> None:
        self.step = "upload"
        self.parse_result = None
        self.preview_result = None
        self.result = None

    async def preview(self, text: str, filename: Optional[str] = None) -> ImportPreview:
        """Parse the export and resolve every Salla name against the mappings"""
        self._require("upload")

        self.parse_result = parse_salla_csv_with_log(text, filename)
        summary = self.parse_result.summary
        if summary.failed_rows > 0:
            errors = "\n".join(
                f"Row {entry.row_number}: {entry.message}"
                for entry in self.parse_result.parse_log if entry.status == "error"
            )
            raise SallaParseError(f"Failed to parse {summary.failed_rows} row(s):\n{errors}")
        if not self.parse_result.orders:
            raise SallaParseError("No orders found in the file")

        mapped_orders: List[MappedOrder] = []
        unmapped_names: List[str] = []

        for salla_order in self.parse_result.orders:
            mapped_products = []
            for salla_product in salla_order.products:
                product = await self.mapping_service.lookup_product_by_name(salla_product.name)
                if product is None and salla_product.name not in unmapped_names:
                    unmapped_names.append(salla_product.name)
                mapped_products.append(MappedProduct(salla_product=salla_product, system_product=product))

            mapped_orders.append(MappedOrder(
                salla_order=salla_order,
                mapped_products=mapped_products,
                shipping_method=await self.mapping_service.lookup_shipping_method(salla_order.shipping_company),
                payment_method=await self.mapping_service.lookup_payment_method(salla_order.payment_method),
                validation_errors=validate_salla_order(salla_order),
            ))

        self.preview_result = ImportPreview(
            orders=mapped_orders,
            unmapped_product_names=unmapped_names,
            parse_log=self.parse_result.parse_log,
            summary=summary,
        )
        self._advance("preview")
        logger.info(
            f"Salla preview: {len(mapped_orders)} orders "
            f"({len(self.preview_result.valid_orders)} importable), "
            f"{len(unmapped_names)} unmapped products, "
            f"{len(self.preview_result.orders_with_unmapped_methods)} orders with unmapped methods"
        )
        return self.preview_result

    async def run_import(self) -> ImportResult:
        """Import every valid order; blocked as a whole while anything is unmapped"""
        self._require("preview")
        preview = self.preview_result

        if not preview.can_import:
            raise ImportBlockedError(
                unmapped_products=preview.unmapped_product_names,
                orders_missing_methods=[
                    f"Order {o.salla_order.order_number}: Missing {' and '.join(o.missing_methods)}"
                    for o in preview.orders_with_unmapped_methods
                ],
            )

        self._advance("importing")
        result = ImportResult()

        for mapped in preview.orders:
            order_number = mapped.salla_order.order_number
            if mapped.validation_errors:
                result.skipped += 1
                result.errors.append(f"Order {order_number}: skipped ({', '.join(mapped.validation_errors)})")
                continue

            try:
                await self._import_order(mapped)
                result.success += 1
            except Exception as e:
                logger.error(f"Import error for order {order_number}: {e}")
                result.failed += 1
                result.errors.append(f"Order {order_number}: {e}")

        self.result = result
        self._advance("complete")
        logger.info(f"Salla import complete: {result.success} imported, {result.failed} failed, {result.skipped} skipped")
        return result

    async def _import_order(self, mapped: MappedOrder) -> None:
        salla_order = mapped.salla_order
        items = [
            OrderItem(product=p.system_product, quantity=p.salla_product.quantity)
            for p in mapped.mapped_products
        ]
        # Source totals are provenance only; the store's own calculation decides the money fields
        discount = Discount(type="fixed", value=salla_order.discount) if salla_order.discount > 0 else None

        result = await self.order_service.calculate(
            items,
            mapped.shipping_method,
            mapped.payment_method,
            discount,
        )
        if abs(result.customer_total - salla_order.order_total) > 0.01:
            logger.debug(
                f"Order {salla_order.order_number}: Salla total {salla_order.order_total}, "
                f"calculated {result.customer_total}"
            )

        order = build_order(
            order_number=salla_order.order_number,
            customer_name=salla_order.customer_name,
            date=salla_order.order_date,
            items=items,
            shipping_method=mapped.shipping_method,
            payment_method=mapped.payment_method,
            discount=discount,
            result=result,
        )
        await self.order_service.save_order(order)
