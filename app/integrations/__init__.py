# Marketplace Integrations Package
from .salla import (
    COLUMN_SCHEMA,
    ExportColumn,
    detect_delimiter,
    merge_multiline_rows,
    parse_salla_csv,
    parse_salla_csv_with_log,
    split_row,
    validate_salla_order,
)

__all__ = [
    "COLUMN_SCHEMA",
    "ExportColumn",
    "detect_delimiter",
    "merge_multiline_rows",
    "parse_salla_csv",
    "parse_salla_csv_with_log",
    "split_row",
    "validate_salla_order",
]
