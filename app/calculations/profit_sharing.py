"""
Profit Sharing Engine

Each line keeps its own gross profit (selling price - cost). Order-level costs
(shipping, payment fees, discount) are spread over the lines by their share of
the pre-discount subtotal, and the resulting item net profit is credited to the
product's participants: 100% to the owner unless a share rule says otherwise.
"""
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from app.schemas.order import OrderItem
from app.schemas.product import Product
from app.schemas.profit import ItemProfit, ProfitShareResult, TotalEarnings

# product_id -> participant -> percentage (0-100)
ShareRules = Mapping[str, Mapping[str, float]]


def calculate_revenue_proportion(item_revenue: float, total_revenue: float) -> float:
    """Item's share of the order subtotal; 0 for an empty order"""
    return item_revenue / total_revenue if total_revenue > 0 else 0.0


def calculate_item_expense_share(total_expenses: float, revenue_proportion: float) -> float:
    return total_expenses * revenue_proportion


def split_item_profit(
    product: Product,
    net_profit: float,
    share_rules: Optional[ShareRules] = None
) -> Dict[str, float]:
    """Credit one line's net profit to participants"""
    rules = share_rules.get(product.id) if share_rules else None
    if not rules:
        return {product.owner: net_profit}
    return {
        participant: net_profit * (percentage / 100)
        for participant, percentage in rules.items()
    }


def calculate_item_profit(
    item: OrderItem,
    total_revenue: float,
    total_expenses: float,
    share_rules: Optional[ShareRules] = None
) -> ItemProfit:
    revenue = item.product.selling_price * item.quantity
    cost = item.product.cost * item.quantity
    gross_profit = revenue - cost

    revenue_proportion = calculate_revenue_proportion(revenue, total_revenue)
    expense_share = calculate_item_expense_share(total_expenses, revenue_proportion)
    net_profit = gross_profit - expense_share

    return ItemProfit(
        product_id=item.product.id,
        owner=item.product.owner,
        revenue=revenue,
        cost=cost,
        gross_profit=gross_profit,
        revenue_proportion=revenue_proportion,
        expense_share=expense_share,
        net_profit=net_profit,
        shares=split_item_profit(item.product, net_profit, share_rules),
    )


def calculate_total_profit_share(
    items: Sequence[OrderItem],
    shipping_cost: float,
    payment_fees: float,
    discount_amount: float,
    share_rules: Optional[ShareRules] = None,
    participants: Optional[Iterable[str]] = None
) -> ProfitShareResult:
    """
    Profit split for one order.

    `shipping_cost` is the nominal shipping method cost: the merchant pays the
    carrier whether or not the customer got free shipping.
    `participants` seeds zero shares so every partner shows up in the result.
    """
    total_revenue = sum((item.product.selling_price * item.quantity for item in items), 0.0)
    total_expenses = shipping_cost + payment_fees + discount_amount

    owner_shares: Dict[str, float] = {p: 0.0 for p in (participants or [])}
    item_profits: List[ItemProfit] = []

    for item in items:
        item_profit = calculate_item_profit(item, total_revenue, total_expenses, share_rules)
        item_profits.append(item_profit)
        for participant, amount in item_profit.shares.items():
            owner_shares[participant] = owner_shares.get(participant, 0.0) + amount

    return ProfitShareResult(
        items=item_profits,
        owner_shares=owner_shares,
        total_net_profit=sum(owner_shares.values(), 0.0),
    )


def calculate_total_earnings(
    items: Iterable[OrderItem],
    owner_shares: Mapping[str, float]
) -> TotalEarnings:
    """
    Payout per participant: profit share plus the cost of the products they own,
    which is reimbursed to them. Reporting only; never stored as net profit.
    """
    products_cost: Dict[str, float] = {p: 0.0 for p in owner_shares}
    for item in items:
        owner = item.product.owner
        products_cost[owner] = products_cost.get(owner, 0.0) + item.product.cost * item.quantity

    total_earnings = {
        participant: owner_shares.get(participant, 0.0) + products_cost.get(participant, 0.0)
        for participant in {**products_cost, **owner_shares}
    }

    return TotalEarnings(
        products_cost=products_cost,
        total_earnings=total_earnings,
        combined_total_earnings=sum(total_earnings.values(), 0.0),
    )
