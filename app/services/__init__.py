# Services Package
from .settings_service import SettingsCache, SettingsService
from .profit_share_service import ProfitShareService
from .promotion_service import PromotionService
from .product_service import ProductService
from .order_service import OrderService, validate_order_input
from .salla_mapping_service import SallaMappingService
from .import_service import SallaImportFlow
from .expense_service import ExpenseService
from .report_service import ReportService, calculate_report_metrics
from .export_service import export_orders_csv, export_expenses_csv
from .container import ServiceContainer

__all__ = [
    "SettingsCache",
    "SettingsService",
    "ProfitShareService",
    "PromotionService",
    "ProductService",
    "OrderService",
    "validate_order_input",
    "SallaMappingService",
    "SallaImportFlow",
    "ExpenseService",
    "ReportService",
    "calculate_report_metrics",
    "export_orders_csv",
    "export_expenses_csv",
    "ServiceContainer",
]
