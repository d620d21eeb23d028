"""
Export Service - orders and expenses as CSV
"""
import csv
import io
import json
from typing import Iterable, List, Optional, Sequence

from app.calculations import calculate_total_profit_share
from app.core.config import settings
from app.schemas import Expense, Order
from .expense_service import expense_shares
from .profit_share_service import ProfitShareService

ORDER_COLUMNS = [
    "Order Number",
    "Customer Name",
    "Shipping Method",
    "Payment Method",
    "Products",
    "Subtotal",
    "Shipping Cost",
    "Discount",
    "Total",
    "Payment Fee",
    "Net Profit",
]

EXPENSE_COLUMNS = [
    "Date",
    "Category",
    "Description",
    "Amount",
    "Owner",
    "Include Tax",
    "Amount Before Tax",
]


def _money(value: float) -> str:
    return f"{value:.2f}"


def _participant_column(participant: str, suffix: str) -> str:
    return f"{participant.title()} {suffix}"


def _write(header: List[str], rows: Iterable[List[str]]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return output.getvalue()


def format_discount(order: Order) -> str:
    if order.discount is None:
        return "0"
    if order.discount.type == "percentage":
        return f"{order.discount.value:g}%"
    return _money(order.discount.value)


def products_json(order: Order) -> str:
    """Same [[name, quantity, sku], ...] shape the Salla export uses"""
    return json.dumps(
        [[item.product.name, item.quantity, item.product.sku] for item in order.items],
        ensure_ascii=False,
    )


async def export_orders_csv(
    orders: Sequence[Order],
    profit_share_service: Optional[ProfitShareService] = None,
    participants: Optional[Sequence[str]] = None
) -> str:
    """One line per order with each participant's recomputed share"""
    participants = list(settings.DEFAULT_PARTICIPANTS if participants is None else participants)
    share_rules = await profit_share_service.get_share_rules() if profit_share_service else None

    rows = []
    for order in orders:
        share = calculate_total_profit_share(
            order.items,
            order.shipping_cost,
            order.payment_fees,
            order.discount_amount,
            share_rules=share_rules,
        )
        rows.append([
            order.order_number,
            order.customer_name or "",
            order.shipping_method.name,
            order.payment_method.name,
            products_json(order),
            _money(order.subtotal),
            _money(order.shipping_cost),
            format_discount(order),
            _money(order.total),
            _money(order.payment_fees),
            _money(order.net_profit),
        ] + [_money(share.share_of(p)) for p in participants])

    header = ORDER_COLUMNS + [_participant_column(p, "Net Profit") for p in participants]
    return _write(header, rows)


def export_expenses_csv(expenses: Sequence[Expense], participants: Optional[Sequence[str]] = None) -> str:
    participants = list(settings.DEFAULT_PARTICIPANTS if participants is None else participants)

    rows = []
    for expense in expenses:
        shares = expense_shares(expense, participants)
        rows.append([
            expense.date.isoformat(),
            expense.category,
            expense.description,
            _money(expense.amount),
            expense.owner,
            "true" if expense.include_tax else "false",
            _money(expense.amount_before_tax) if expense.amount_before_tax is not None else "",
        ] + [_money(shares.get(p, 0.0)) for p in participants])

    header = EXPENSE_COLUMNS + [_participant_column(p, "Share") for p in participants]
    return _write(header, rows)
