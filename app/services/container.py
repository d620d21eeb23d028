"""
Service wiring - one set of services per repository set
"""
from app.repositories import Repositories
from .expense_service import ExpenseService
from .import_service import SallaImportFlow
from .order_service import OrderService
from .product_service import ProductService
from .profit_share_service import ProfitShareService
from .promotion_service import PromotionService
from .report_service import ReportService
from .salla_mapping_service import SallaMappingService
from .settings_service import SettingsCache, SettingsService


class ServiceContainer:

    def __init__(self, repos: Repositories, settings_cache: SettingsCache = None):
        self.repos = repos
        self.settings = SettingsService(repos.settings, settings_cache)
        self.profit_shares = ProfitShareService(repos.profit_shares)
        self.promotions = PromotionService(repos.offers, repos.quick_discounts)
        self.products = ProductService(repos)
        self.orders = OrderService(repos.orders, self.settings, self.profit_shares, self.promotions)
        self.mappings = SallaMappingService(repos)
        self.expenses = ExpenseService(repos.expenses)
        self.reports = ReportService(repos, self.profit_shares)
        self.salla_import = SallaImportFlow(self.mappings, self.orders)
