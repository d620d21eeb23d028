import asyncio
import csv
import io
import json
from datetime import date, datetime

from app.schemas import Discount, Expense, Order
from app.services.export_service import (
    ORDER_COLUMNS,
    export_expenses_csv,
    export_orders_csv,
    format_discount,
)

from conftest import line, make_product


def read_csv(text):
    return list(csv.reader(io.StringIO(text)))


def make_order(aramex, mada, **overrides):
    fields = dict(
        id="o1",
        order_number="1001",
        customer_name='Ahmed "Abu Khalid", Riyadh',
        date=datetime(2025, 3, 1, 10, 0),
        items=[
            line(make_product("p1", 50, 80, "yassir", name="ماوس باد", sku="MP-1")),
            line(make_product("p2", 30, 50, "basim", name="Desk Mat", sku="DM-1"), 2),
        ],
        shipping_method=aramex,
        payment_method=mada,
        subtotal=180,
        shipping_cost=15,
        payment_fees=2.0,
        discount=Discount(type="percentage", value=12.5),
        discount_amount=22.5,
        total=172.5,
        net_profit=30,
    )
    fields.update(overrides)
    return Order(**fields)


def test_orders_csv_header_and_values(aramex, mada):
    rows = read_csv(asyncio.run(export_orders_csv([make_order(aramex, mada)])))

    assert rows[0] == ORDER_COLUMNS + ["Yassir Net Profit", "Basim Net Profit"]
    record = dict(zip(rows[0], rows[1]))
    assert record["Customer Name"] == 'Ahmed "Abu Khalid", Riyadh'
    assert record["Shipping Method"] == "Aramex"
    assert record["Subtotal"] == "180.00"
    assert record["Discount"] == "12.5%"
    assert record["Total"] == "172.50"
    assert record["Net Profit"] == "30.00"


def test_products_column_is_readable_json(aramex, mada):
    rows = read_csv(asyncio.run(export_orders_csv([make_order(aramex, mada)])))

    products = json.loads(rows[1][ORDER_COLUMNS.index("Products")])
    assert products == [["ماوس باد", 1, "MP-1"], ["Desk Mat", 2, "DM-1"]]


def test_participant_columns_add_up_to_net_profit(aramex, mada):
    order = make_order(aramex, mada)
    rows = read_csv(asyncio.run(export_orders_csv([order])))

    yassir, basim = (float(v) for v in rows[1][-2:])
    assert abs(yassir + basim - (order.subtotal - 110 - 15 - 2 - order.discount_amount)) < 0.01


def test_format_discount(aramex, mada):
    assert format_discount(make_order(aramex, mada, discount=None)) == "0"
    assert format_discount(make_order(aramex, mada, discount=Discount(type="fixed", value=7))) == "7.00"
    assert format_discount(make_order(aramex, mada, discount=Discount(type="percentage", value=10))) == "10%"


def test_expenses_csv():
    expenses = [
        Expense(
            id="e1", date=date(2025, 3, 5), category="marketing", description="Snap, ads",
            amount=115, include_tax=True, amount_before_tax=100,
        ),
        Expense(id="e2", date=date(2025, 3, 6), category="packaging", amount=30, owner="basim"),
    ]

    rows = read_csv(export_expenses_csv(expenses))

    assert rows[0][-2:] == ["Yassir Share", "Basim Share"]
    assert rows[1] == [
        "2025-03-05", "marketing", "Snap, ads", "115.00", "shared", "true", "100.00", "57.50", "57.50",
    ]
    assert rows[2] == ["2025-03-06", "packaging", "", "30.00", "basim", "false", "", "0.00", "30.00"]


def test_empty_exports_have_header_only():
    assert read_csv(asyncio.run(export_orders_csv([]))) == [ORDER_COLUMNS + ["Yassir Net Profit", "Basim Net Profit"]]
    assert len(read_csv(export_expenses_csv([]))) == 1
