"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # ======================
    # Database
    # ======================
    DATABASE_URL: str = "sqlite+aiosqlite:///./portfolio_advisor.db"
    AUTO_CREATE_TABLES: bool = True
    PERSISTENCE_ENABLED: bool = True

    # ======================
    # Cache (seconds)
    # ======================
    CACHE_CLEANUP_INTERVAL_SECONDS: int = 60 * 60
    CACHE_TTL_MARKET_ANALYSIS_SECONDS: int = 24 * 60 * 60
    CACHE_TTL_STOCK_DATA_SECONDS: int = 24 * 60 * 60
    CACHE_TTL_PORTFOLIO_SECONDS: int = 31 * 24 * 60 * 60
    CACHE_TTL_BACKTEST_SECONDS: int = 24 * 60 * 60

    # ======================
    # Market Data
    # ======================
    BENCHMARK_SYMBOL: str = "SPY"
    FETCH_MAX_CONCURRENCY: int = 10
    FETCH_MIN_INTERVAL_SECONDS: float = 0.01
    FETCH_RETRIES: int = 0
    FETCH_SECURITY_NAMES: bool = False

    # ======================
    # Strategy
    # ======================
    UNIVERSE_TOP_K: int = 100
    BACKTEST_LOOKBACK_MONTHS: int = 9

    # ======================
    # Scheduler
    # ======================
    SCHEDULER_ENABLED: bool = False
    DAILY_SIGNAL_REFRESH_TIME: str = "06:30"
    MONTHLY_PORTFOLIO_REFRESH_DAY: int = 1
    TIMEZONE: str = "Asia/Tokyo"

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
