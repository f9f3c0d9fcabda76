"""Configuration management using Pydantic Settings"""

from datetime import date

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Reward round
    token_total_supply: float = 15_000_000_000  # 15B ENA, fixed
    default_pool_percent: float = 3.5
    settlement_date: date = date(2025, 9, 24)

    # Price feed
    price_api_base: str = "https://api.coingecko.com"
    price_token_id: str = "ethena"
    price_vs_currency: str = "usd"
    price_refresh_enabled: bool = True
    price_refresh_seconds: float = 300.0

    # Service
    service_name: str = "airdrop-estimator"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
