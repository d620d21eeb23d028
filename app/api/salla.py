"""
Salla Import API
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from app.api.deps import get_services
from app.core.exceptions import ImportBlockedError, ImportStateError
from app.schemas import (
    ImportPreview, ImportResult, SallaPaymentMapping, SallaProductMapping, SallaShippingMapping,
    SallaPaymentMappingCreate, SallaProductMappingCreate, SallaShippingMappingCreate, SallaUploadRequest,
)
from app.services import ServiceContainer

salla_router = APIRouter(prefix="/salla", tags=["Salla"])

# ===================== IMPORT =====================

@salla_router.post("/preview", response_model=ImportPreview)
async def preview_import(data: SallaUploadRequest, services: ServiceContainer = Depends(get_services)):
    flow = services.salla_import
    flow.reset()
    try:
        return await flow.preview(data.content, data.filename)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@salla_router.post("/import", response_model=ImportResult)
async def run_import(services: ServiceContainer = Depends(get_services)):
    try:
        return await services.salla_import.run_import()
    except ImportBlockedError as e:
        raise HTTPException(status_code=409, detail={
            "message": str(e),
            "unmappedProducts": e.unmapped_products,
            "ordersMissingMethods": e.orders_missing_methods,
        })
    except ImportStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

@salla_router.post("/reset")
async def reset_import(services: ServiceContainer = Depends(get_services)):
    services.salla_import.reset()
    return {"step": services.salla_import.step}

# ===================== MAPPINGS =====================

@salla_router.get("/mappings/products", response_model=List[SallaProductMapping])
async def list_product_mappings(services: ServiceContainer = Depends(get_services)):
    return await services.mappings.get_product_mappings()

@salla_router.post("/mappings/products", response_model=SallaProductMapping)
async def add_product_mapping(data: SallaProductMappingCreate, services: ServiceContainer = Depends(get_services)):
    try:
        return await services.mappings.add_product_mapping(
            data.salla_product_name, data.system_product_id, data.salla_sku
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@salla_router.delete("/mappings/products/{mapping_id}")
async def delete_product_mapping(mapping_id: str, services: ServiceContainer = Depends(get_services)):
    await services.mappings.delete_product_mapping(mapping_id)
    return {"success": True}

@salla_router.get("/mappings/shipping", response_model=List[SallaShippingMapping])
async def list_shipping_mappings(services: ServiceContainer = Depends(get_services)):
    return await services.mappings.get_shipping_mappings()

@salla_router.post("/mappings/shipping", response_model=SallaShippingMapping)
async def add_shipping_mapping(data: SallaShippingMappingCreate, services: ServiceContainer = Depends(get_services)):
    try:
        return await services.mappings.add_shipping_mapping(data.salla_shipping_name, data.system_shipping_method_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@salla_router.delete("/mappings/shipping/{mapping_id}")
async def delete_shipping_mapping(mapping_id: str, services: ServiceContainer = Depends(get_services)):
    await services.mappings.delete_shipping_mapping(mapping_id)
    return {"success": True}

@salla_router.get("/mappings/payment", response_model=List[SallaPaymentMapping])
async def list_payment_mappings(services: ServiceContainer = Depends(get_services)):
    return await services.mappings.get_payment_mappings()

@salla_router.post("/mappings/payment", response_model=SallaPaymentMapping)
async def add_payment_mapping(data: SallaPaymentMappingCreate, services: ServiceContainer = Depends(get_services)):
    try:
        return await services.mappings.add_payment_mapping(data.salla_payment_name, data.system_payment_method_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@salla_router.delete("/mappings/payment/{mapping_id}")
async def delete_payment_mapping(mapping_id: str, services: ServiceContainer = Depends(get_services)):
    await services.mappings.delete_payment_mapping(mapping_id)
    return {"success": True}
