"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PurchasesAPISettings(BaseSettings):
    """Purchases backend (movement log provider) configuration."""

    model_config = SettingsConfigDict(env_prefix="PURCHASES_API_")

    base_url: str = "http://localhost:8000"
    prefix: str = "/api/v1"
    timeout: float = 10.0
    token: str | None = None

    # Retry settings
    max_retries: int = 3
    retry_delay: float = 0.5
    retry_multiplier: float = 2.0

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def backoff_delays(self) -> list[float]:
        """Delay before each retry, growing geometrically."""
        return [
            self.retry_delay * (self.retry_multiplier**attempt)
            for attempt in range(max(self.max_retries - 1, 1))
        ]


class InventorySettings(BaseSettings):
    """Inventory view configuration."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    default_institution_id: int = 1


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False
    cors_origins: list[str] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_origins(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return list(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "PAE Inventory Service"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    purchases_api: PurchasesAPISettings = Field(default_factory=PurchasesAPISettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    api: APISettings = Field(default_factory=APISettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
