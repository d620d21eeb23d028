from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Order Profit Calculator"
    APP_PORT: int = 9202
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CURRENCY_CODE: str = "SAR"

    # Database
    DATABASE_URL: str = "sqlite:///./profit_calculator.db"

    # Order calculation
    FREE_SHIPPING_THRESHOLD_DEFAULT: float = 300.0  # used when the setting row is missing or unreadable
    AUTO_DETECT_FREE_SHIPPING: bool = True

    # Caches
    SETTINGS_CACHE_TTL_SECONDS: float = 60.0
    PROFIT_SHARE_CACHE_TTL_SECONDS: float = 300.0

    # Profit sharing
    DEFAULT_PARTICIPANTS: List[str] = ["yassir", "basim"]

    # Expenses
    EXPENSE_TAX_RATE: float = 15.0  # VAT added when an expense is entered before tax

    class Config:
        env_file = ".env"
        extra = "ignore"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
