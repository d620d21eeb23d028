from datetime import datetime

import pytest

from app.core.exceptions import SallaParseError
from app.integrations.salla import (
    COLUMN_SCHEMA,
    ExportColumn,
    clean_shipping_name,
    detect_delimiter,
    merge_multiline_rows,
    parse_number,
    parse_salla_csv,
    parse_salla_csv_with_log,
    parse_salla_date,
    parse_skus_json,
    split_row,
    validate_salla_order,
)

HEADER_COLUMNS = [
    "Order Number", "Customer Name", "Cart Subtotal", "Discount", "Shipping Cost",
    "Payment Method", "COD Commission", "Order Total", "Order Date", "Shipping Company",
    "skus_json",
]

TAB_HEADER = "\t".join(HEADER_COLUMNS)
COMMA_HEADER = ",".join(HEADER_COLUMNS)


def tab_row(number="1001", products=r'[[\"Arabian Mousepad\", 1, \"MP-L-001\"]]', date="12/18/2025 11:46", total="95"):
    return "\t".join([number, "Ahmed", "80", "0", "15", "mada", "0", total, date, "'Aramex'", products])


def comma_row(number="2001", products='"[[""Arabian Mousepad"", 2, ""MP-L-001""]]"'):
    return ",".join([number, "Sara", "160", "10", "0", "mada", "0", "150", "12/2/2025 18:27", "Aramex", products])


def test_scenario_e_tab_delimiter_detected():
    assert TAB_HEADER.count("\t") == 10
    assert detect_delimiter(TAB_HEADER) == "\t"

    result = parse_salla_csv_with_log(TAB_HEADER + "\n" + tab_row())
    assert result.summary.delimiter == "TAB"


def test_detect_delimiter_fallbacks():
    assert detect_delimiter(COMMA_HEADER) == ","
    assert detect_delimiter("a;b;c,d") == ";"
    assert detect_delimiter("a\tb,c") == "\t"
    assert detect_delimiter("no delimiters") == "\t"


def test_split_row_tab_is_naive():
    assert split_row(' a \t"b\tc"', "\t") == ["a", '"b', 'c"']


def test_split_row_comma_honours_quotes():
    assert split_row('a,"b, c","say ""hi""",d', ",") == ["a", "b, c", 'say "hi"', "d"]


def test_merge_keeps_quoted_newlines_in_one_row():
    text = 'header\n1,"[\n  [""x"", 1, ""y""]\n]"\n2,plain\n'
    rows = merge_multiline_rows(text)

    assert rows == ["header", '1,"[\n  [""x"", 1, ""y""]\n]"', "2,plain"]


def test_multiline_products_parse_as_single_row():
    products = '"[\n  [""Arabian Mousepad"", 2, ""MP-L-001""],\n  [""Desk Mat XL"", 1, ""DM""]\n]"'
    result = parse_salla_csv_with_log(COMMA_HEADER + "\n" + comma_row(products=products))

    assert result.summary.total_rows == 1
    assert result.summary.successful_rows == 1
    order = result.orders[0]
    assert [(p.name, p.quantity, p.sku) for p in order.products] == [
        ("Arabian Mousepad", 2, "MP-L-001"),
        ("Desk Mat XL", 1, "DM"),
    ]


def test_tab_export_row_values():
    orders = parse_salla_csv(TAB_HEADER + "\r\n" + tab_row() + "\r\n")

    assert len(orders) == 1
    order = orders[0]
    assert order.order_number == "1001"
    assert order.customer_name == "Ahmed"
    assert order.cart_subtotal == 80
    assert order.shipping_cost == 15
    assert order.order_total == 95
    assert order.order_date == datetime(2025, 12, 18, 11, 46)
    assert order.shipping_company == "Aramex"
    assert order.products[0].name == "Arabian Mousepad"
    assert order.products[0].sku == "MP-L-001"


def test_comma_export_row_values():
    order = parse_salla_csv(COMMA_HEADER + "\n" + comma_row())[0]

    assert order.discount == 10
    assert order.order_date == datetime(2025, 12, 2, 18, 27)
    assert order.products[0].quantity == 2


def test_parser_is_idempotent():
    text = COMMA_HEADER + "\n" + comma_row("1") + "\n" + comma_row("2")

    first = parse_salla_csv_with_log(text)
    second = parse_salla_csv_with_log(text)

    assert [o.model_dump() for o in first.orders] == [o.model_dump() for o in second.orders]
    assert first.summary == second.summary


def test_short_row_is_an_error():
    text = TAB_HEADER + "\n" + tab_row("1") + "\n" + "2\tonly\tthree"
    result = parse_salla_csv_with_log(text)

    assert result.summary.successful_rows == 1
    assert result.summary.failed_rows == 1
    errors = [e for e in result.parse_log if e.status == "error"]
    assert errors[0].row_number == 3
    assert errors[0].column_count == 3
    assert "Expected 11 columns but found 3" in errors[0].message

    with pytest.raises(SallaParseError) as exc:
        parse_salla_csv(text)
    assert exc.value.row_number == 3


def test_bad_date_is_a_warning():
    result = parse_salla_csv_with_log(TAB_HEADER + "\n" + tab_row(date="yesterday"))

    assert result.summary.successful_rows == 1
    warnings = [e for e in result.parse_log if e.status == "warning"]
    assert any("Date parsing warning" in w.message for w in warnings)
    assert isinstance(result.orders[0].order_date, datetime)


def test_bad_products_json_is_a_warning():
    result = parse_salla_csv_with_log(TAB_HEADER + "\n" + tab_row(products="[[broken"))

    assert result.summary.failed_rows == 0
    assert result.orders[0].products == []
    assert any("Products JSON parsing issue" in e.message for e in result.parse_log if e.status == "warning")


def test_short_header_is_only_a_warning():
    header = "\t".join(HEADER_COLUMNS[:5])
    result = parse_salla_csv_with_log(header + "\n" + tab_row())

    assert result.summary.successful_rows == 1
    assert any(e.row_number == 1 and e.status == "warning" for e in result.parse_log)


def test_empty_file():
    result = parse_salla_csv_with_log(TAB_HEADER + "\n\n")

    assert result.orders == []
    assert result.summary.failed_rows == 1
    assert result.summary.delimiter == "unknown"
    with pytest.raises(SallaParseError):
        parse_salla_csv("")


def test_log_starts_with_file_info():
    result = parse_salla_csv_with_log(TAB_HEADER + "\n" + tab_row(), filename="orders.csv")

    assert result.parse_log[0].status == "info"
    assert "orders.csv" in result.parse_log[0].message
    assert result.parse_log[-1].message.startswith("Parsing complete: 1 successful, 0 failed")


def test_column_schema_order():
    assert [c.name for c in COLUMN_SCHEMA] == [
        "order_number", "customer_name", "cart_subtotal", "discount", "shipping_cost",
        "payment_method", "cod_commission", "order_total", "order_date", "shipping_company",
        "products",
    ]
    assert all(isinstance(c, ExportColumn) for c in COLUMN_SCHEMA)
    assert [c.name for c in COLUMN_SCHEMA if c.fallback is not None] == ["order_date", "products"]


def test_parse_number_takes_leading_number():
    assert parse_number("12.5") == 12.5
    assert parse_number("99 SAR") == 99
    assert parse_number("") == 0
    assert parse_number("n/a") == 0


def test_parse_salla_date_errors():
    with pytest.raises(ValueError):
        parse_salla_date("12/18/2025")
    with pytest.raises(ValueError):
        parse_salla_date("2025-12-18 10:00")
    with pytest.raises(ValueError):
        parse_salla_date("13/40/2025 10:00")


def test_clean_shipping_name():
    assert clean_shipping_name("'Redbox'") == "Redbox"
    assert clean_shipping_name('"SMSA"') == "SMSA"
    assert clean_shipping_name("Aramex") == "Aramex"


def test_parse_skus_json_defaults():
    products = parse_skus_json('[["A", "x"], ["B", 3, "SKU-B"]]')

    assert [(p.name, p.quantity, p.sku) for p in products] == [("A", 1, ""), ("B", 3, "SKU-B")]
    assert parse_skus_json("[]") == []
    assert parse_skus_json("null") == []
    with pytest.raises(ValueError):
        parse_skus_json('[["only name"]]')
    with pytest.raises(ValueError):
        parse_skus_json('{"a": 1}')


def test_validate_salla_order():
    order = parse_salla_csv(TAB_HEADER + "\n" + tab_row())[0]
    assert validate_salla_order(order) == []

    broken = order.model_copy(update={"order_number": "", "customer_name": "", "products": [], "order_total": 0})
    assert validate_salla_order(broken) == [
        "Missing order number",
        "Missing customer name",
        "No products in order",
        "Invalid order total",
    ]


def test_infinite_quantity_falls_back_to_one():
    for quantity in ("1e999", "Infinity"):
        products = r'[[\"Arabian Mousepad\", ' + quantity + r', \"MP\"]]'
        result = parse_salla_csv_with_log(TAB_HEADER + "\n" + tab_row(products=products))

        assert result.summary.successful_rows == 1
        assert result.orders[0].products[0].quantity == 1
