"""
Domain Exceptions
"""
from typing import List, Optional


class ProfitCalculatorError(Exception):
    """Base exception for the calculator"""


class OrderValidationError(ProfitCalculatorError, ValueError):
    """Invalid user input, raised before any calculation runs"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class SallaParseError(ProfitCalculatorError, ValueError):
    """A Salla CSV export had rows that could not be parsed"""

    def __init__(self, message: str, row_number: Optional[int] = None):
        super().__init__(message)
        self.row_number = row_number


class ImportBlockedError(ProfitCalculatorError):
    """
    The whole import batch is blocked until the missing name mappings are added.
    """

    def __init__(
        self,
        unmapped_products: Optional[List[str]] = None,
        orders_missing_methods: Optional[List[str]] = None,
    ):
        self.unmapped_products = list(unmapped_products or [])
        self.orders_missing_methods = list(orders_missing_methods or [])

        parts = []
        if self.unmapped_products:
            parts.append(f"{len(self.unmapped_products)} unmapped product(s): {', '.join(self.unmapped_products)}")
        if self.orders_missing_methods:
            parts.append("unmapped shipping/payment methods:\n" + "\n".join(self.orders_missing_methods))
        super().__init__("Cannot import: " + "; ".join(parts))


class ImportStateError(ProfitCalculatorError):
    """Import flow action called in the wrong state"""


class SettingNotFoundError(ProfitCalculatorError, KeyError):
    """System setting row is missing"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Failed to fetch setting: {key}")

    def __str__(self) -> str:
        return self.args[0]
