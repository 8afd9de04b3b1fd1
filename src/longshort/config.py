"""Configuration system using pydantic-settings with environment variable loading.

Only operational knobs live here. The tracked coins and the signal thresholds
are fixed constants and deliberately not configurable.
"""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketDataSettings(BaseSettings):
    """CoinGecko market data source and retry behaviour."""

    model_config = SettingsConfigDict(env_prefix="MARKET_DATA_")

    base_url: str = "https://api.coingecko.com/api/v3"
    api_key: SecretStr = SecretStr("")  # optional demo key for higher rate limits
    timeout_seconds: float = 10.0
    max_retries: int = 3  # retries after the first attempt -> 4 attempts total
    retry_base_delay: float = 1.0  # 1s, 2s, 4s
    max_empty_refetches: int = 1


class RefreshSettings(BaseSettings):
    """Refresh loop timing."""

    model_config = SettingsConfigDict(env_prefix="REFRESH_")

    interval: float = 5.0  # seconds between refresh cycles


class DashboardSettings(BaseSettings):
    """Dashboard server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    enabled: bool = True
    update_interval: int = 5  # seconds between WebSocket pushes


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    market_data: MarketDataSettings = MarketDataSettings()
    refresh: RefreshSettings = RefreshSettings()
    dashboard: DashboardSettings = DashboardSettings()
