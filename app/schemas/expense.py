"""
Expense Schemas
"""
from pydantic import Field
from typing import Optional, Dict, Literal
from datetime import date as date_type

from .base import CamelModel

ExpenseCategory = Literal["marketing", "packaging", "subscription", "other"]

SHARED_OWNER = "shared"

class Expense(CamelModel):
    id: str
    date: date_type
    category: ExpenseCategory
    description: str = ""
    amount: float = Field(default=0, ge=0)
    owner: str = SHARED_OWNER  # participant name or "shared"
    share_percentages: Optional[Dict[str, float]] = None
    include_tax: bool = False
    amount_before_tax: Optional[float] = None

class ExpenseCreate(CamelModel):
    date: date_type
    category: ExpenseCategory
    description: str = ""
    amount: float = Field(ge=0)  # before tax when include_tax is set
    share_percentages: Optional[Dict[str, float]] = None
    include_tax: bool = False
