"""
Product Schemas
"""
from pydantic import Field
from typing import Optional

from .base import CamelModel

class Product(CamelModel):
    """Catalog product, also used as the snapshot embedded in order lines"""
    id: str
    name: str
    sku: str = ""
    cost: float = Field(default=0, ge=0)
    selling_price: float = Field(default=0, ge=0)
    owner: str

class ProductCreate(CamelModel):
    name: str
    sku: str = ""
    cost: float = Field(default=0, ge=0)
    selling_price: float = Field(default=0, ge=0)
    owner: str

class ProductUpdate(CamelModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    cost: Optional[float] = Field(default=None, ge=0)
    selling_price: Optional[float] = Field(default=None, ge=0)
    owner: Optional[str] = None
