"""
Base Model Mixins
"""
from sqlalchemy import Column, DateTime, String, func
import uuid

def new_id() -> str:
    return str(uuid.uuid4())

class UUIDMixin:
    """Mixin for UUID primary key (stored as text so SQLite and Postgres behave the same)"""
    id = Column(String(36), primary_key=True, default=new_id)

class TimestampMixin:
    """Mixin for created_at and updated_at timestamps"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
