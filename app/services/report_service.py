"""
Report Service - aggregate metrics across orders and expenses

Everything is recomputed from persisted orders; nothing here is stored.
"""
import logging
from collections import OrderedDict
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Sequence

from app.calculations import ShareRules, calculate_total_earnings, calculate_total_profit_share
from app.core.config import settings
from app.repositories import Repositories
from app.schemas import Expense, Order
from app.schemas.report import (
    PaymentFeeData, PaymentMethodBreakdown, ReportMetrics,
    ShippingCompanyBreakdown, ShippingFeeData,
)
from .expense_service import calculate_expenses_by_participant, calculate_marketing_expenses
from .profit_share_service import ProfitShareService

logger = logging.getLogger(__name__)


def _ratio(value: float, total: float) -> float:
    return value / total if total > 0 else 0.0


def _percent(value: float, total: float) -> float:
    return _ratio(value, total) * 100


def calculate_shipping_fee_data(orders: Sequence[Order]) -> ShippingFeeData:
    if not orders:
        return ShippingFeeData()

    companies: Dict[str, List[float]] = OrderedDict()
    total_fees = 0.0
    total_revenue = 0.0
    free_count = 0

    for order in orders:
        if order.is_free_shipping:
            free_count += 1
        fee = order.shipping_method.cost
        total_fees += fee
        total_revenue += order.total
        companies.setdefault(order.shipping_method.name, []).append(fee)

    by_company = sorted(
        (
            ShippingCompanyBreakdown(
                company_name=name,
                order_count=len(fees),
                total_fees=sum(fees),
                average_fee=sum(fees) / len(fees),
            )
            for name, fees in companies.items()
        ),
        key=lambda c: c.order_count,
        reverse=True,
    )

    return ShippingFeeData(
        total_shipping_fees=total_fees,
        free_shipping_count=free_count,
        paid_shipping_count=len(orders) - free_count,
        average_shipping_fee=total_fees / len(orders),
        total_revenue=total_revenue,
        fees_as_percent_of_revenue=_percent(total_fees, total_revenue),
        by_company=by_company,
    )


def calculate_payment_fee_data(orders: Sequence[Order]) -> PaymentFeeData:
    if not orders:
        return PaymentFeeData()

    methods: Dict[str, List[float]] = OrderedDict()
    for order in orders:
        methods.setdefault(order.payment_method.name, []).append(order.payment_fees)

    total_fees = sum((o.payment_fees for o in orders), 0.0)
    total_revenue = sum((o.total for o in orders), 0.0)
    by_method = sorted(
        (
            PaymentMethodBreakdown(
                method_name=name,
                order_count=len(fees),
                total_fees=sum(fees),
                average_fee=sum(fees) / len(fees),
            )
            for name, fees in methods.items()
        ),
        key=lambda m: m.order_count,
        reverse=True,
    )

    return PaymentFeeData(
        total_payment_fees=total_fees,
        average_payment_fee=total_fees / len(orders),
        total_revenue=total_revenue,
        fees_as_percent_of_revenue=_percent(total_fees, total_revenue),
        average_fee_percentage=_percent(total_fees, total_revenue),
        by_method=by_method,
    )


def calculate_profit_shares(
    orders: Iterable[Order],
    share_rules: Optional[ShareRules] = None,
    participants: Optional[Sequence[str]] = None
) -> Dict[str, float]:
    """Owner shares summed over orders, recomputed from each order's inputs"""
    shares: Dict[str, float] = {p: 0.0 for p in (participants or [])}
    for order in orders:
        result = calculate_total_profit_share(
            order.items,
            order.shipping_cost,
            order.payment_fees,
            order.discount_amount,
            share_rules=share_rules,
        )
        for participant, amount in result.owner_shares.items():
            shares[participant] = shares.get(participant, 0.0) + amount
    return shares


def calculate_report_metrics(
    orders: Sequence[Order],
    expenses: Sequence[Expense],
    share_rules: Optional[ShareRules] = None,
    participants: Optional[Sequence[str]] = None
) -> ReportMetrics:
    participants = list(settings.DEFAULT_PARTICIPANTS if participants is None else participants)

    # Volume
    total_orders = len(orders)
    total_revenue = sum((o.total for o in orders), 0.0)

    # Costs
    all_items = [item for order in orders for item in order.items]
    total_product_costs = sum((i.product.cost * i.quantity for i in all_items), 0.0)
    total_shipping_fees = sum((o.shipping_method.cost for o in orders), 0.0)
    total_payment_fees = sum((o.payment_fees for o in orders), 0.0)
    total_fees = total_shipping_fees + total_payment_fees

    # Profit
    expenses_breakdown = calculate_expenses_by_participant(expenses, participants)
    gross_profit = total_revenue - total_product_costs
    net_profit = gross_profit - total_fees - expenses_breakdown.total_expenses

    # Participants
    profit_shares = calculate_profit_shares(orders, share_rules, participants)
    earnings = calculate_total_earnings(all_items, profit_shares)
    participant_net_profit = {
        p: earnings.total_earnings.get(p, 0.0) - expenses_breakdown.by_participant.get(p, 0.0)
        for p in {**earnings.total_earnings, **expenses_breakdown.by_participant}
    }

    return ReportMetrics(
        total_orders=total_orders,
        total_revenue=total_revenue,
        average_order_value=_ratio(total_revenue, total_orders),
        total_product_costs=total_product_costs,
        total_shipping_fees=total_shipping_fees,
        total_payment_fees=total_payment_fees,
        total_fees=total_fees,
        gross_profit=gross_profit,
        net_profit=net_profit,
        gross_profit_margin=_percent(gross_profit, total_revenue),
        net_profit_margin=_percent(net_profit, total_revenue),
        gross_profit_per_order=_ratio(gross_profit, total_orders),
        net_profit_per_order=_ratio(net_profit, total_orders),
        profit_shares=profit_shares,
        total_profit_share=sum(profit_shares.values(), 0.0),
        products_cost=earnings.products_cost,
        total_earnings=earnings.total_earnings,
        combined_total_earnings=earnings.combined_total_earnings,
        expenses=expenses_breakdown,
        participant_net_profit=participant_net_profit,
        combined_net_profit=sum(participant_net_profit.values(), 0.0),
        marketing_expenses=calculate_marketing_expenses(expenses),
        product_cost_percent=_percent(total_product_costs, total_revenue),
        fee_impact_percent=_percent(total_fees, total_revenue),
        shipping_fee_data=calculate_shipping_fee_data(orders),
        payment_fee_data=calculate_payment_fee_data(orders),
    )


class ReportService:
    """Loads orders and expenses for a date range and aggregates them"""

    def __init__(self, repos: Repositories, profit_share_service: ProfitShareService):
        self.repos = repos
        self.profit_share_service = profit_share_service

    async def get_metrics(self, start: Optional[date] = None, end: Optional[date] = None) -> ReportMetrics:
        orders = await self.repos.orders.get_all()
        expenses = await self.repos.expenses.get_all()

        if start:
            orders = [o for o in orders if o.date >= datetime.combine(start, time.min)]
            expenses = [e for e in expenses if e.date >= start]
        if end:
            orders = [o for o in orders if o.date <= datetime.combine(end, time.max)]
            expenses = [e for e in expenses if e.date <= end]

        metrics = calculate_report_metrics(
            orders,
            expenses,
            share_rules=await self.profit_share_service.get_share_rules(),
        )
        logger.debug(f"Report for {start} - {end}: {metrics.total_orders} orders, net profit {metrics.net_profit}")
        return metrics
