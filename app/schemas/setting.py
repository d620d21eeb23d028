"""
System Setting Schemas
"""
from typing import Optional, Literal

from .base import CamelModel

class SystemSetting(CamelModel):
    id: str
    setting_key: str
    setting_value: str
    setting_type: Literal["number", "string", "boolean", "json"] = "string"
    description: Optional[str] = None
    category: Optional[str] = None
    is_editable: bool = True

class FreeShippingThreshold(CamelModel):
    value: float
