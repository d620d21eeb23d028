"""
Promotion Models
"""
from sqlalchemy import Column, String, Integer, Boolean, Date, Numeric, ForeignKey
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class Offer(Base, UUIDMixin, TimestampMixin):
    """Buy the trigger product, get a discount on the target product"""
    __tablename__ = "offers"

    name = Column(String(200), nullable=False, default="")
    trigger_product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    target_product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    discount_type = Column(String(20), nullable=False)  # percentage, fixed
    discount_value = Column(Numeric(12, 4), default=0)
    is_active = Column(Boolean, default=True)

    # Duration (inclusive, calendar days)
    start_date = Column(Date)
    end_date = Column(Date)

class QuickDiscount(Base, UUIDMixin, TimestampMixin):
    """Preset manual discount button"""
    __tablename__ = "quick_discounts"

    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)  # percentage, fixed
    value = Column(Numeric(12, 4), default=0)
    display_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
