"""
Finance Models
"""
from sqlalchemy import Column, String, Numeric, Boolean, Date, Text, JSON
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class Expense(Base, UUIDMixin, TimestampMixin):
    """Operating expense (ads, packaging, subscriptions)"""
    __tablename__ = "expenses"

    date = Column(Date, nullable=False, index=True)
    category = Column(String(30), nullable=False)  # marketing, packaging, subscription, other
    description = Column(Text)
    amount = Column(Numeric(12, 4), nullable=False)
    owner = Column(String(50), default="shared")  # participant name or shared
    share_percentages = Column(JSON)  # {participant: percentage}, optional explicit split
    include_tax = Column(Boolean, default=False)
    amount_before_tax = Column(Numeric(12, 4))
