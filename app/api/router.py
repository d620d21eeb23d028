"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from typing import Dict, List, Optional
from datetime import date, datetime

from app.api.deps import get_services
from app.api.salla import salla_router
from app.core import settings
from app.core.exceptions import OrderValidationError
from app.models.base import new_id
from app.schemas import (
    Expense, ExpenseCreate, FreeShippingThreshold, Offer, OfferCreate, Order,
    OrderCalculationRequest, OrderCalculationResult, OrderCreate, PaymentMethod,
    Product, ProductCreate, ProductUpdate, QuickDiscount, ReportMetrics, ShippingMethod, SystemSetting,
)
from app.services import ServiceContainer, export_expenses_csv, export_orders_csv

api_router = APIRouter(tags=["API"])

# Include sub-routers
api_router.include_router(salla_router)


def _csv_response(content: str, filename: str) -> StreamingResponse:
    response = StreamingResponse(iter(["\ufeff" + content]), media_type="text/csv; charset=utf-8")
    response.headers["Content-Disposition"] = f"attachment; filename={filename}"
    return response

# ===================== HEALTH & STATUS =====================

@api_router.get("/status")
async def api_status():
    return {
        "status": "ok",
        "version": "1.0.0",
        "currency": settings.CURRENCY_CODE,
        "timestamp": datetime.now().isoformat(),
    }

# ===================== ORDERS =====================

@api_router.post("/orders/calculate", response_model=OrderCalculationResult)
async def calculate_order(data: OrderCalculationRequest, services: ServiceContainer = Depends(get_services)):
    try:
        return await services.orders.calculate_request(data)
    except OrderValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)

@api_router.post("/orders", response_model=Order)
async def create_order(data: OrderCreate, services: ServiceContainer = Depends(get_services)):
    try:
        return await services.orders.create_order(data)
    except OrderValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)

@api_router.get("/orders", response_model=List[Order])
async def list_orders(services: ServiceContainer = Depends(get_services)):
    return await services.orders.get_orders()

@api_router.get("/orders/export")
async def export_orders(services: ServiceContainer = Depends(get_services)):
    orders = await services.orders.get_orders()
    content = await export_orders_csv(orders, services.profit_shares)
    return _csv_response(content, f"orders-{date.today().isoformat()}.csv")

@api_router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: str, services: ServiceContainer = Depends(get_services)):
    order = await services.orders.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

@api_router.delete("/orders/{order_id}")
async def delete_order(order_id: str, services: ServiceContainer = Depends(get_services)):
    if not await services.orders.delete_order(order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    return {"success": True}

# ===================== CATALOG =====================

@api_router.get("/products", response_model=List[Product])
async def list_products(
    search: Optional[str] = Query(None),
    owner: Optional[str] = Query(None),
    services: ServiceContainer = Depends(get_services)
):
    return await services.products.get_products(search, owner)

@api_router.post("/products", response_model=Product)
async def create_product(data: ProductCreate, services: ServiceContainer = Depends(get_services)):
    return await services.products.create_product(data)

@api_router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, services: ServiceContainer = Depends(get_services)):
    product = await services.products.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@api_router.get("/products/{product_id}/profit-shares")
async def get_profit_shares(product_id: str, services: ServiceContainer = Depends(get_services)):
    rules = await services.profit_shares.get_product_shares(product_id)
    return {rule.participant: rule.share_percentage for rule in rules}

@api_router.put("/products/{product_id}", response_model=Product)
async def update_product(product_id: str, data: ProductUpdate, services: ServiceContainer = Depends(get_services)):
    product = await services.products.update_product(product_id, data)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@api_router.delete("/products/{product_id}")
async def delete_product(product_id: str, services: ServiceContainer = Depends(get_services)):
    await services.products.delete_product(product_id)
    return {"success": True}

@api_router.put("/products/{product_id}/profit-shares")
async def set_profit_shares(
    product_id: str,
    percentages: Dict[str, float],
    services: ServiceContainer = Depends(get_services)
):
    try:
        rules = await services.profit_shares.set_product_shares(product_id, percentages)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {rule.participant: rule.share_percentage for rule in rules}

@api_router.get("/shipping-methods", response_model=List[ShippingMethod])
async def list_shipping_methods(services: ServiceContainer = Depends(get_services)):
    return await services.products.get_shipping_methods()

@api_router.post("/shipping-methods", response_model=ShippingMethod)
async def save_shipping_method(data: ShippingMethod, services: ServiceContainer = Depends(get_services)):
    try:
        return await services.products.save_shipping_method(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@api_router.get("/payment-methods", response_model=List[PaymentMethod])
async def list_payment_methods(services: ServiceContainer = Depends(get_services)):
    return await services.products.get_payment_methods()

@api_router.post("/payment-methods", response_model=PaymentMethod)
async def save_payment_method(data: PaymentMethod, services: ServiceContainer = Depends(get_services)):
    try:
        return await services.products.save_payment_method(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

# ===================== OFFERS =====================

@api_router.get("/offers", response_model=List[Offer])
async def list_offers(services: ServiceContainer = Depends(get_services)):
    return await services.promotions.get_offers()

@api_router.post("/offers", response_model=Offer)
async def create_offer(data: OfferCreate, services: ServiceContainer = Depends(get_services)):
    return await services.promotions.save_offer(Offer(id=new_id(), **data.model_dump()))

@api_router.post("/offers/{offer_id}/toggle", response_model=Offer)
async def toggle_offer(offer_id: str, is_active: bool = Query(...), services: ServiceContainer = Depends(get_services)):
    try:
        return await services.promotions.toggle_offer(offer_id, is_active)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@api_router.delete("/offers/{offer_id}")
async def delete_offer(offer_id: str, services: ServiceContainer = Depends(get_services)):
    await services.promotions.delete_offer(offer_id)
    return {"success": True}

@api_router.get("/quick-discounts", response_model=List[QuickDiscount])
async def list_quick_discounts(services: ServiceContainer = Depends(get_services)):
    return await services.promotions.get_quick_discounts()

@api_router.post("/quick-discounts", response_model=QuickDiscount)
async def save_quick_discount(data: QuickDiscount, services: ServiceContainer = Depends(get_services)):
    return await services.promotions.save_quick_discount(data)

@api_router.delete("/quick-discounts/{discount_id}")
async def delete_quick_discount(discount_id: str, services: ServiceContainer = Depends(get_services)):
    await services.promotions.delete_quick_discount(discount_id)
    return {"success": True}

# ===================== EXPENSES =====================

@api_router.get("/expenses", response_model=List[Expense])
async def list_expenses(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    services: ServiceContainer = Depends(get_services)
):
    return await services.expenses.get_expenses(start_date, end_date)

@api_router.post("/expenses", response_model=Expense)
async def create_expense(data: ExpenseCreate, services: ServiceContainer = Depends(get_services)):
    try:
        return await services.expenses.create_expense(
            data.date,
            data.category,
            data.amount,
            description=data.description,
            share_percentages=data.share_percentages,
            include_tax=data.include_tax,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@api_router.get("/expenses/export")
async def export_expenses(services: ServiceContainer = Depends(get_services)):
    content = export_expenses_csv(await services.expenses.get_expenses())
    return _csv_response(content, f"expenses-{date.today().isoformat()}.csv")

@api_router.delete("/expenses/{expense_id}")
async def delete_expense(expense_id: str, services: ServiceContainer = Depends(get_services)):
    await services.expenses.delete_expense(expense_id)
    return {"success": True}

# ===================== REPORTS =====================

@api_router.get("/reports/metrics", response_model=ReportMetrics)
async def report_metrics(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    services: ServiceContainer = Depends(get_services)
):
    return await services.reports.get_metrics(start_date, end_date)

# ===================== SETTINGS =====================

@api_router.get("/settings", response_model=List[SystemSetting])
async def list_settings(
    category: Optional[str] = Query(None),
    services: ServiceContainer = Depends(get_services)
):
    if category:
        return await services.settings.get_settings_by_category(category)
    return await services.settings.get_all_editable_settings()

@api_router.get("/settings/free-shipping-threshold", response_model=FreeShippingThreshold)
async def get_free_shipping_threshold(services: ServiceContainer = Depends(get_services)):
    return FreeShippingThreshold(value=await services.settings.get_free_shipping_threshold())

@api_router.put("/settings/free-shipping-threshold", response_model=FreeShippingThreshold)
async def update_free_shipping_threshold(data: FreeShippingThreshold, services: ServiceContainer = Depends(get_services)):
    try:
        await services.settings.update_free_shipping_threshold(data.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return FreeShippingThreshold(value=await services.settings.get_free_shipping_threshold())
