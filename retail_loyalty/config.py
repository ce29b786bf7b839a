from decimal import Decimal
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Data paths
    data_backend: str = "csv"
    data_dir: str = "sample_data"

    # Loyalty program
    loyalty_accrual_rate: Decimal = Decimal("0.1")
    loyalty_accrual_cap: int = 500

    # Tally accounting export
    tally_enabled: bool = False
    tally_url: str = "http://localhost:9000"
    tally_timeout_seconds: float = 10.0
    tally_max_workers: int = 2

    # Privilege cards and reports
    card_template_path: Optional[str] = None
    currency_label: str = "INR"

    # Seed data settings
    default_seed_customers: int = 50
    default_seed_value: int = 42

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
