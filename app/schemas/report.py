"""
Report Schemas
"""
from pydantic import Field
from typing import Dict, List

from .base import CamelModel

class ShippingCompanyBreakdown(CamelModel):
    company_name: str
    order_count: int
    total_fees: float
    average_fee: float

class PaymentMethodBreakdown(CamelModel):
    method_name: str
    order_count: int
    total_fees: float
    average_fee: float

class ShippingFeeData(CamelModel):
    total_shipping_fees: float = 0
    free_shipping_count: int = 0
    paid_shipping_count: int = 0
    average_shipping_fee: float = 0
    total_revenue: float = 0
    fees_as_percent_of_revenue: float = 0
    by_company: List[ShippingCompanyBreakdown] = []

class PaymentFeeData(CamelModel):
    total_payment_fees: float = 0
    average_payment_fee: float = 0
    total_revenue: float = 0
    fees_as_percent_of_revenue: float = 0
    average_fee_percentage: float = 0
    by_method: List[PaymentMethodBreakdown] = []

class ParticipantExpenses(CamelModel):
    by_participant: Dict[str, float] = {}
    total_expenses: float = 0

class ReportMetrics(CamelModel):
    # Volume
    total_orders: int = 0
    total_revenue: float = 0
    average_order_value: float = 0

    # Costs
    total_product_costs: float = 0
    total_shipping_fees: float = 0
    total_payment_fees: float = 0
    total_fees: float = 0

    # Profit
    gross_profit: float = 0
    net_profit: float = 0
    gross_profit_margin: float = 0
    net_profit_margin: float = 0
    gross_profit_per_order: float = 0
    net_profit_per_order: float = 0

    # Participants
    profit_shares: Dict[str, float] = {}
    total_profit_share: float = 0
    products_cost: Dict[str, float] = {}
    total_earnings: Dict[str, float] = {}
    combined_total_earnings: float = 0
    expenses: ParticipantExpenses = Field(default_factory=ParticipantExpenses)
    participant_net_profit: Dict[str, float] = {}
    combined_net_profit: float = 0

    # Additional
    marketing_expenses: float = 0
    product_cost_percent: float = 0
    fee_impact_percent: float = 0

    shipping_fee_data: ShippingFeeData = Field(default_factory=ShippingFeeData)
    payment_fee_data: PaymentFeeData = Field(default_factory=PaymentFeeData)
