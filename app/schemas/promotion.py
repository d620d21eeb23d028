"""
Promotion Schemas - Offers and Quick Discounts
"""
from pydantic import Field
from typing import Optional, Literal
from datetime import date

from .base import CamelModel

class Offer(CamelModel):
    """Automatic rule: discount the target product when the trigger product is in the order"""
    id: str
    name: str = ""
    trigger_product_id: str
    target_product_id: str
    discount_type: Literal["percentage", "fixed"]
    discount_value: float = Field(default=0, ge=0)
    is_active: bool = True
    start_date: Optional[date] = None
    end_date: Optional[date] = None

class AppliedOffer(CamelModel):
    offer_id: str
    offer_name: str = ""
    trigger_product_id: str
    target_product_id: str
    discount_type: Literal["percentage", "fixed"]
    discount_value: float
    discount_amount: float

class QuickDiscount(CamelModel):
    """Preset manual discount button"""
    id: str
    name: str
    type: Literal["percentage", "fixed"]
    value: float = Field(default=0, ge=0)
    display_order: int = 0
    is_active: bool = True

class OfferCreate(CamelModel):
    name: str = ""
    trigger_product_id: str
    target_product_id: str
    discount_type: Literal["percentage", "fixed"]
    discount_value: float = Field(default=0, ge=0)
    is_active: bool = True
    start_date: Optional[date] = None
    end_date: Optional[date] = None
