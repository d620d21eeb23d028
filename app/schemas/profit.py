"""
Profit Sharing Schemas
"""
from typing import Dict, List

from .base import CamelModel

class ProfitShareRule(CamelModel):
    """Percentage of a product's item net profit credited to one participant"""
    id: str
    product_id: str
    participant: str
    share_percentage: float

class ItemProfit(CamelModel):
    product_id: str
    owner: str
    revenue: float
    cost: float
    gross_profit: float
    revenue_proportion: float
    expense_share: float
    net_profit: float
    shares: Dict[str, float] = {}

class ProfitShareResult(CamelModel):
    items: List[ItemProfit] = []
    owner_shares: Dict[str, float] = {}
    total_net_profit: float = 0

    def share_of(self, participant: str) -> float:
        return self.owner_shares.get(participant, 0.0)

class TotalEarnings(CamelModel):
    """Profit share plus reimbursed product cost, per participant"""
    products_cost: Dict[str, float] = {}
    total_earnings: Dict[str, float] = {}
    combined_total_earnings: float = 0
