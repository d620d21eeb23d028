"""
Order Models
"""
from sqlalchemy import Column, String, Numeric, Boolean, DateTime, JSON
from app.core import Base
from .base import UUIDMixin

class Order(Base, UUIDMixin):
    """
    Saved order. Product, shipping and payment details are stored as snapshots
    so later catalog edits do not change historical orders.
    """
    __tablename__ = "orders"

    order_number = Column(String(100), unique=True, nullable=False, index=True)
    customer_name = Column(String(200))
    created_at = Column(DateTime(timezone=True), nullable=False)  # order date

    # Snapshots
    items = Column(JSON, nullable=False, default=list)
    shipping_method = Column(JSON, nullable=False)
    payment_method = Column(JSON, nullable=False)
    discount = Column(JSON)
    applied_offer = Column(JSON)

    # Amounts
    subtotal = Column(Numeric(12, 4), default=0)
    shipping_cost = Column(Numeric(12, 4), default=0)  # nominal method cost
    payment_fees = Column(Numeric(12, 4), default=0)
    discount_amount = Column(Numeric(12, 4), default=0)
    total = Column(Numeric(12, 4), default=0)
    net_profit = Column(Numeric(12, 4), default=0)
    is_free_shipping = Column(Boolean, default=False)
