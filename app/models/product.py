"""
Product Models
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, UniqueConstraint
from app.core import Base
from .base import UUIDMixin, TimestampMixin

class Product(Base, UUIDMixin, TimestampMixin):
    """Product Catalog"""
    __tablename__ = "products"

    name = Column(String(300), nullable=False)
    sku = Column(String(100), index=True)
    cost = Column(Numeric(12, 4), default=0)
    selling_price = Column(Numeric(12, 4), default=0)
    owner = Column(String(50), nullable=False)  # participant name

class ProductProfitShare(Base, UUIDMixin):
    """Percentage of a product's net profit credited to a participant"""
    __tablename__ = "product_profit_shares"

    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    participant = Column(String(50), nullable=False)
    share_percentage = Column(Numeric(6, 2), nullable=False)

    __table_args__ = (
        UniqueConstraint("product_id", "participant", name="uq_product_participant"),
    )
