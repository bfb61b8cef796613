"""Configuration management for Cardsmith."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CARDSMITH_",
        extra="ignore",
    )

    # Font resolution
    font_dirs: list[Path] = Field(default_factory=list)
    default_font_family: str = "DejaVuSans"
    default_font_size: float = 12.0
    default_font_color: str = "black"

    # Project files
    xml_encoding: str = "utf-8"

    # Export
    pdf_margin_inches: float = 0.5
    export_dpi: int = 300

    log_level: str = "INFO"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
