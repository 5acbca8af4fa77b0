"""Application settings and configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from bankapp.domain.models.enums import ProductVariant


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BANKAPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Bank's System"
    app_version: str = "0.1.0"

    # Product skin: "bank" (password login, staff roles) or "atm" (PIN login)
    variant: ProductVariant = ProductVariant.BANK

    log_level: str = "INFO"
    timezone: str = "US/Eastern"

    # Identifier and credential shape
    account_id_length: int = 11
    pin_length: int = 4
    currency_places: int = 2

    # Staff accounts created on startup (bank variant only)
    seed_staff_accounts: bool = True
    manager_email: str = "manager@manager.com"
    manager_password: str = "manager@manager.com"
    clerk_email: str = "clerk@clerk.com"
    clerk_password: str = "clerk@clerk.com"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
