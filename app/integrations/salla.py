"""
Salla Integration - order export (CSV) parser

Salla exports one order per row, 11 columns, tab or comma separated:

    order number, customer name, cart subtotal, discount, shipping cost,
    payment method, COD commission, order total, order date (M/D/YYYY H:mm),
    shipping company, skus_json ([[name, quantity, sku], ...])

The products column may span several physical lines inside quotes.
"""
import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from app.core.exceptions import SallaParseError
from app.schemas.salla import ParseLogEntry, ParseResult, ParseSummary, SallaOrder, SallaProduct

logger = logging.getLogger(__name__)

DELIMITERS = ("\t", ",", ";")
DELIMITER_MIN_COUNT = 10

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_number(value: str) -> float:
    """Leading numeric part of the value, 0 when there is none"""
    match = _NUMBER_PREFIX.match(value)
    return float(match.group(0)) if match else 0.0


def parse_salla_date(value: str) -> datetime:
    """Parse M/D/YYYY H:mm, e.g. 12/2/2025 18:27"""
    parts = value.split(" ")
    if len(parts) != 2:
        raise ValueError(f'Invalid date format: "{value}" (expected "M/D/YYYY H:mm")')

    date_part, time_part = parts
    date_parts = date_part.split("/")
    time_parts = time_part.split(":")
    if len(date_parts) != 3:
        raise ValueError(f'Invalid date part: "{date_part}" (expected M/D/YYYY)')

    try:
        month, day, year = (int(p) for p in date_parts)
    except ValueError:
        raise ValueError(f'Invalid date numbers in "{date_part}"') from None

    hours = _leading_int(time_parts[0])
    minutes = _leading_int(time_parts[1]) if len(time_parts) > 1 else 0
    return datetime(year, month, day, hours, minutes)


def _leading_int(value: str) -> int:
    match = re.match(r"\s*[+-]?\d+", value)
    return int(match.group(0)) if match else 0


def clean_shipping_name(name: str) -> str:
    """Strip the quotes Salla sometimes leaves around the company name"""
    return re.sub(r"^['\"]|['\"]$", "", name).strip()


def parse_skus_json(value: str) -> List[SallaProduct]:
    """Parse [[\\"Product Name\\", quantity, \\"SKU\\"], ...]"""
    if not value or value in ("[]", "null"):
        return []

    cleaned = value
    if len(cleaned) >= 2 and cleaned.startswith('"') and cleaned.endswith('"'):
        cleaned = cleaned[1:-1]
    cleaned = cleaned.replace('\\"', '"')

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse products JSON: {e.msg}") from None

    if not isinstance(parsed, list):
        raise ValueError("Failed to parse products JSON: skus_json is not an array")

    products = []
    for index, item in enumerate(parsed):
        if not isinstance(item, list):
            raise ValueError(f"Failed to parse products JSON: product at index {index} is not an array")
        if len(item) < 2:
            raise ValueError(
                f"Failed to parse products JSON: product at index {index} "
                f"has insufficient data ({len(item)} elements)"
            )
        products.append(SallaProduct(
            name=str(item[0]).strip(),
            quantity=_parse_quantity(item[1]),
            sku=str(item[2]).strip() if len(item) > 2 else "",
        ))
    return products


def _parse_quantity(value: Any) -> int:
    try:
        quantity = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 1
    return quantity or 1


@dataclass(frozen=True)
class ExportColumn:
    """
    One export column. When `fallback` is set a parse failure is logged as a
    row warning and the fallback value is used instead of failing the row.
    """
    name: str
    parser: Callable[[str], Any]
    fallback: Optional[Callable[[], Any]] = None
    warning: str = "{error}"


COLUMN_SCHEMA: List[ExportColumn] = [
    ExportColumn("order_number", str),
    ExportColumn("customer_name", str),
    ExportColumn("cart_subtotal", parse_number),
    ExportColumn("discount", parse_number),
    ExportColumn("shipping_cost", parse_number),
    ExportColumn("payment_method", str),
    ExportColumn("cod_commission", parse_number),
    ExportColumn("order_total", parse_number),
    ExportColumn(
        "order_date",
        parse_salla_date,
        fallback=datetime.now,
        warning="Date parsing warning: {error}, using current date",
    ),
    ExportColumn("shipping_company", clean_shipping_name),
    ExportColumn(
        "products",
        parse_skus_json,
        fallback=list,
        warning='Products JSON parsing issue: {error}. Raw value: "{raw}"',
    ),
]

EXPECTED_COLUMNS = len(COLUMN_SCHEMA)


def merge_multiline_rows(text: str) -> List[str]:
    """
    Join physical lines into logical rows. A line with an odd number of quotes
    opens a quoted field; the next line with an odd number of quotes closes it.
    """
    rows: List[str] = []
    current = ""
    in_quoted_field = False

    for line in text.split("\n"):
        odd_quotes = line.count('"') % 2 != 0
        if not in_quoted_field:
            current = line
            if odd_quotes:
                in_quoted_field = True
                continue
        else:
            current += "\n" + line
            if not odd_quotes:
                continue
            in_quoted_field = False

        if current.strip():
            rows.append(current)
        current = ""

    if current.strip():
        rows.append(current)
    return rows


def detect_delimiter(header: str) -> str:
    counts = {d: header.count(d) for d in DELIMITERS}
    tabs, commas, semicolons = (counts[d] for d in DELIMITERS)
    logger.debug(f"Delimiter detection: tabs={tabs}, commas={commas}, semicolons={semicolons}")

    for delimiter in DELIMITERS:
        if counts[delimiter] >= DELIMITER_MIN_COUNT:
            return delimiter

    # max() keeps the first of equal counts, so ties go tab, comma, semicolon
    return max(DELIMITERS, key=lambda d: counts[d])


def split_row(row: str, delimiter: str) -> List[str]:
    """Split one logical row; quoted fields are honoured for comma and semicolon"""
    if delimiter == "\t":
        return [field.strip() for field in row.split("\t")]

    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    while i < len(row):
        char = row[i]
        if char == '"':
            if in_quotes and i + 1 < len(row) and row[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def _delimiter_label(delimiter: str) -> str:
    return "TAB" if delimiter == "\t" else delimiter


def _truncate(value: str, limit: int) -> str:
    return value[:limit] + ("..." if len(value) > limit else "")


def parse_row(columns: List[str], row_number: int, log: List[ParseLogEntry]) -> SallaOrder:
    values: Dict[str, Any] = {}
    for index, column in enumerate(COLUMN_SCHEMA):
        raw = columns[index].strip()
        try:
            values[column.name] = column.parser(raw)
        except ValueError as e:
            if column.fallback is None:
                raise
            log.append(ParseLogEntry(
                row_number=row_number,
                status="warning",
                message=column.warning.format(error=e, raw=raw[:100]),
            ))
            values[column.name] = column.fallback()
    return SallaOrder(**values)


def parse_salla_csv_with_log(text: str, filename: Optional[str] = None) -> ParseResult:
    """Parse an export and return the orders together with a per-row log"""
    log: List[ParseLogEntry] = []
    orders: List[SallaOrder] = []

    size_kb = len(text.encode("utf-8")) / 1024
    log.append(ParseLogEntry(
        row_number=0, status="info",
        message=f"Starting to parse file: {filename or '<text>'} ({size_kb:.2f} KB)",
    ))

    lines = [line for line in merge_multiline_rows(text) if line.strip()]
    log.append(ParseLogEntry(
        row_number=0, status="info",
        message=f"File contains {len(lines)} logical rows (after merging multi-line fields)",
    ))

    if len(lines) < 2:
        log.append(ParseLogEntry(row_number=0, status="error", message="CSV file is empty or has only header row"))
        return ParseResult(orders=[], parse_log=log, summary=ParseSummary(failed_rows=1))

    header = lines[0]
    delimiter = detect_delimiter(header)
    log.append(ParseLogEntry(row_number=0, status="info", message=f'Detected delimiter: "{_delimiter_label(delimiter)}"'))

    header_columns = split_row(header, delimiter)
    log.append(ParseLogEntry(
        row_number=1, status="info",
        message=f"Header has {len(header_columns)} columns: {', '.join(header_columns[:5])}"
                + ("..." if len(header_columns) > 5 else ""),
        column_count=len(header_columns),
        raw_content=_truncate(header, 200),
    ))
    if len(header_columns) < EXPECTED_COLUMNS:
        log.append(ParseLogEntry(
            row_number=1, status="warning",
            message=f"Expected {EXPECTED_COLUMNS} columns but header has {len(header_columns)}. "
                    f"This may cause parsing issues.",
        ))

    data_lines = lines[1:]
    successful_rows = 0
    failed_rows = 0

    for offset, data_line in enumerate(data_lines):
        row_number = offset + 2
        line = data_line.strip()
        if not line:
            log.append(ParseLogEntry(row_number=row_number, status="warning", message="Empty row, skipping"))
            continue

        columns = split_row(line, delimiter)
        log.append(ParseLogEntry(
            row_number=row_number, status="info",
            message=f"Row has {len(columns)} columns",
            column_count=len(columns),
            raw_content=_truncate(line, 300),
        ))

        if len(columns) < EXPECTED_COLUMNS:
            found = ", ".join(f'{i + 1}:"{_truncate(c, 30)}"' for i, c in enumerate(columns))
            log.append(ParseLogEntry(
                row_number=row_number, status="error",
                message=f"Expected {EXPECTED_COLUMNS} columns but found {len(columns)}. Columns found: [{found}]",
                raw_content=line[:500],
                column_count=len(columns),
            ))
            failed_rows += 1
            continue

        try:
            order = parse_row(columns, row_number, log)
        except ValueError as e:
            failed_rows += 1
            log.append(ParseLogEntry(
                row_number=row_number, status="error",
                message=f"Failed to parse: {e}",
                raw_content=line[:500],
            ))
            continue

        orders.append(order)
        successful_rows += 1
        log.append(ParseLogEntry(
            row_number=row_number, status="success",
            message=f"Successfully parsed order #{order.order_number} - "
                    f"{len(order.products)} product(s), total: {order.order_total}",
        ))

    log.append(ParseLogEntry(
        row_number=0, status="info",
        message=f"Parsing complete: {successful_rows} successful, {failed_rows} failed "
                f"out of {len(data_lines)} data rows",
    ))
    logger.debug(f"Parsed Salla export {filename or ''}: {successful_rows} ok, {failed_rows} failed")

    return ParseResult(
        orders=orders,
        parse_log=log,
        summary=ParseSummary(
            total_rows=len(data_lines),
            successful_rows=successful_rows,
            failed_rows=failed_rows,
            delimiter=_delimiter_label(delimiter),
        ),
    )


def parse_salla_csv(text: str, filename: Optional[str] = None) -> List[SallaOrder]:
    """Orders only; raises SallaParseError on the first failed row"""
    result = parse_salla_csv_with_log(text, filename)
    if result.summary.failed_rows > 0:
        first_error = next((entry for entry in result.parse_log if entry.status == "error"), None)
        if first_error is None:
            raise SallaParseError("Failed to parse CSV")
        raise SallaParseError(first_error.message, row_number=first_error.row_number)
    return result.orders


def validate_salla_order(order: SallaOrder) -> List[str]:
    errors = []
    if not order.order_number:
        errors.append("Missing order number")
    if not order.customer_name:
        errors.append("Missing customer name")
    if not order.products:
        errors.append("No products in order")
    if order.order_total <= 0:
        errors.append("Invalid order total")
    return errors
