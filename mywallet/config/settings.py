"""
Configuration Management for My Wallet

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here and handed to the
composition root as one explicit object. Nothing in the core reaches for
settings on its own, so tests can build components with whatever settings
they need.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value persistence backend configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MYWALLET_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["memory", "file"] = Field(
        default="file",
        description="Which key-value backend to use"
    )
    data_path: Path = Field(
        default=Path("data/wallet.json"),
        description="JSON file used by the file backend"
    )
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times the file backend tries a write"
    )

    @field_validator('data_path')
    @classmethod
    def validate_data_path(cls, v: Path) -> Path:
        """The data path must name a file, not a directory."""
        if v.exists() and v.is_dir():
            raise ValueError(f"Storage data path is a directory: {v}")
        return v


class ReportSettings(BaseSettings):
    """Window sizes for the dashboard reports."""

    model_config = SettingsConfigDict(
        env_prefix="MYWALLET_REPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    daily_window: int = Field(
        default=7,
        ge=1,
        le=366,
        description="Number of day buckets in the daily cash-flow series"
    )
    weekly_window: int = Field(
        default=4,
        ge=1,
        le=104,
        description="Number of week buckets in the weekly cash-flow series"
    )
    monthly_window: int = Field(
        default=6,
        ge=1,
        le=120,
        description="Number of month buckets in the monthly cash-flow series"
    )
    recent_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Transactions shown in the recent list"
    )


class SecuritySettings(BaseSettings):
    """Password hashing configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MYWALLET_SECURITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor (log2 of iterations)"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    default_currency: str = Field(
        default="$",
        min_length=1,
        max_length=4,
        description="Currency symbol used until the user picks one"
    )
    audit_log_limit: int = Field(
        default=500,
        ge=0,
        description="Maximum audit events kept in storage (0 disables persistence)"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access. Each group loads from the
    environment unless a configured instance is passed in.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYWALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    app: AppSettings = Field(default_factory=AppSettings)


# Groups in the order validate_all_settings reports them
SETTINGS_GROUPS: dict[str, type[BaseSettings]] = {
    "storage": StorageSettings,
    "report": ReportSettings,
    "security": SecuritySettings,
    "app": AppSettings,
}


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a `<name>_error`
    entry for every group that failed to load.
    """
    results = {}

    # Load each group on its own so one bad group does not hide the others
    for name, group in SETTINGS_GROUPS.items():
        try:
            group()
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
