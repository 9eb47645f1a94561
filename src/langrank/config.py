# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to browser, timeout, output and logging settings

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="LANGRANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Browser Configuration
    headless: bool = Field(default=True, description="Run the scraping browser in headless mode")

    # Source Extraction
    source_timeout_seconds: float = Field(
        default=90.0, gt=0, description="Upper bound for one source's navigation and extraction"
    )
    navigation_attempts: int = Field(
        default=2, ge=1, description="Attempts per navigation before a source is reported as failed"
    )
    heartbeat_seconds: float = Field(
        default=5.0, gt=0, description="Interval between progress heartbeats while sources are running"
    )

    # Report Output
    output_path: Path = Field(
        default=Path("reports/language_rankings.pdf"), description="Where the rendered PDF is written"
    )
    logo_path: Path = Field(default=Path("assets/logo.png"), description="Header logo image (skipped when missing)")
    report_title: str | None = Field(default=None, description="Report title override")
    report_subtitle: str | None = Field(default=None, description="Report subtitle override")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Lazily created on first access
_config_instance: Config | None = None


def get_config() -> Config:
    """Return the process-wide settings, reading the environment on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Re-read ``LANGRANK_*`` variables and ``.env`` into a new settings object."""
    global _config_instance
    _config_instance = Config()
    return _config_instance
