"""
Master Tables: Shipping Methods, Payment Methods, System Settings
"""
from sqlalchemy import Column, String, Boolean, Integer, Numeric, Text
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class ShippingMethod(Base, UUIDMixin, TimestampMixin):
    """Shipping company / method; cost is the customer price when not free"""
    __tablename__ = "shipping_methods"

    name = Column(String(200), nullable=False)
    cost = Column(Numeric(12, 4), default=0)
    is_active = Column(Boolean, default=True)

class PaymentMethod(Base, UUIDMixin, TimestampMixin):
    """Payment method with gateway fee configuration"""
    __tablename__ = "payment_methods"

    name = Column(String(200), nullable=False)
    fee_percentage = Column(Numeric(6, 3), default=0)
    fee_fixed = Column(Numeric(12, 4), default=0)
    tax_rate = Column(Numeric(6, 3), default=0)
    customer_fee = Column(Numeric(12, 4), default=0)  # COD fee etc, charged to the customer
    display_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)

class SystemSetting(Base, UUIDMixin, TimestampMixin):
    """Key/value system setting"""
    __tablename__ = "system_settings"

    setting_key = Column(String(100), unique=True, nullable=False, index=True)
    setting_value = Column(Text, nullable=False)
    setting_type = Column(String(20), default="string")  # number, string, boolean, json
    description = Column(Text)
    category = Column(String(50))
    is_editable = Column(Boolean, default=True)
