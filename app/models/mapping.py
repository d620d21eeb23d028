"""
Salla Name Mappings - external export names to internal records
"""
from sqlalchemy import Column, String, ForeignKey
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class SallaProductMapping(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "salla_product_mappings"

    salla_product_name = Column(String(300), unique=True, nullable=False, index=True)
    salla_sku = Column(String(100))
    system_product_id = Column(String(36), ForeignKey("products.id"), nullable=False)

class SallaShippingMapping(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "salla_shipping_mappings"

    salla_shipping_name = Column(String(200), unique=True, nullable=False, index=True)
    system_shipping_method_id = Column(String(36), ForeignKey("shipping_methods.id"), nullable=False)

class SallaPaymentMapping(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "salla_payment_mappings"

    salla_payment_name = Column(String(200), unique=True, nullable=False, index=True)
    system_payment_method_id = Column(String(36), ForeignKey("payment_methods.id"), nullable=False)
