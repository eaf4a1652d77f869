"""Runtime settings and logging setup."""

import logging
from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from VNTAX_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="VNTAX_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    default_law_version: str = Field(
        default="2026", description="Law version used when none is given (2025 or 2026)"
    )
    usd_exchange_rate: Decimal = Field(
        default=Decimal("25400"), description="VND per USD for foreign platform income"
    )

    # Logging
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings (CLI entry point only)."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format=settings.log_format,
    )
