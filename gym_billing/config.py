"""Configuration management using Pydantic Settings"""

from datetime import date
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from gym_billing.domain.debt import DEFAULT_INSTALLMENT_THRESHOLD


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./gym_billing.db"

    # Service
    service_name: str = "gym-billing"
    log_level: str = "INFO"

    # Billing
    debt_installment_threshold: int = DEFAULT_INSTALLMENT_THRESHOLD
    attendance_streak_days: int = 7

    # Pins "today" for reproducible seeding and dashboards (unset = system clock)
    reference_date: Optional[date] = None


settings = Settings()
