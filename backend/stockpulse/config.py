from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://stockpulse:stockpulse_dev_password@db:5432/stockpulse"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Market data
    yahoo_base_url: str = "https://query2.finance.yahoo.com"
    http_timeout: float = 15.0
    market_data_max_retries: int = 2
    market_data_min_interval: float = 1.0  # seconds between yfinance calls
    history_days: int = 365

    # Google OAuth2
    google_client_id: str = ""

    # JWT Settings
    jwt_secret_key: str = "dev-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24  # 24 hours

    # Cookie settings
    cookie_domain: str | None = None  # None for localhost, set for production
    cookie_secure: bool = False  # True in production (HTTPS only)
    cookie_samesite: str = "lax"  # "strict" in production

    model_config = {"env_file": ".env", "env_prefix": "STOCKPULSE_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
