"""
Configuration Management for Rental Manager

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Where the data lives, which labels are shown by default and how verbose
logging is can all be changed without touching code, via environment
variables or a `.env` file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local blob storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RENTAL_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".rental-manager",
        description="Directory holding the properties/expenses/settings files"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Allow `~` in the configured path."""
        return Path(v).expanduser()


class DisplaySettings(BaseSettings):
    """Built-in display defaults and labels."""

    model_config = SettingsConfigDict(
        env_prefix="RENTAL_DISPLAY_",
        extra="ignore"
    )

    default_currency: str = Field(
        default="UM",
        min_length=1,
        max_length=10,
        description="Currency label used until the user picks one"
    )
    default_business_name: str = Field(
        default="Smart Property Management System",
        min_length=1,
        max_length=200,
        description="Business name printed on reports until the user sets one"
    )
    deleted_property_label: str = Field(
        default="Deleted property",
        min_length=1,
        description="Shown for expenses whose property no longer exists"
    )
    backup_filename_prefix: str = Field(
        default="backup_",
        description="Prefix of exported backup files"
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

    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG level regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local logs"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return str(v).upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def display(self) -> DisplaySettings:
        return DisplaySettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    `<setting_name>_error` entry for each group that failed to load.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "display", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
