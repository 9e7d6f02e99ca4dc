"""Configuration management for Groom Desk.

Environment settings (backend credentials, logging, time zone) come from
the process environment or a `.env` file. UI options come from a YAML file.
"""

import sys
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from loguru import logger
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from groomdesk.config.models import AppConfig


class Settings(BaseSettings):
    """Application settings and backend credentials."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    supabase_url: str = Field(default="", description="Project URL of the hosted backend")
    supabase_anon_key: str = Field(default="", description="Public anon key")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Locale
    timezone: str = Field(default="America/Sao_Paulo", description="Business time zone")

    app_config_path: Path = Field(default=Path("config/config.yaml"))

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the time zone name is known to the system database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v}") from None
        return v

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def has_backend_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


def load_settings() -> Settings:
    """Read settings from the environment and `.env`."""
    return Settings()


def load_config(config_path: Path = Path("config/config.yaml")) -> AppConfig:
    """Load the UI configuration from YAML.

    Args:
        config_path: Path to config.yaml file

    Returns:
        Parsed configuration, or the defaults if the file is missing or invalid
    """
    if not config_path.exists():
        logger.warning(f"App config not found at {config_path}. Using defaults.")
        return AppConfig()

    logger.info(f"Loading configuration from {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_config: dict[str, Any] = yaml.safe_load(f) or {}
        config = AppConfig(**raw_config)
    except (yaml.YAMLError, ValidationError, TypeError) as e:
        logger.error(f"Failed to load app config: {e}")
        return AppConfig()

    logger.debug(f"Loaded {len(config.services)} service options")
    return config


def configure_logging(level: str = "INFO") -> None:
    """Route loguru output to a single stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
