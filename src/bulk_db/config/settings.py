"""
Configuration management for bulk-db.

This module provides environment-based configuration using Pydantic BaseSettings.
Values come from the process environment first and from a .env file second.
The .env location defaults to the project root and can be moved with the
BULK_DB_ENV_FILE environment variable.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("BULK_DB_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE

DEFAULT_BATCH_SIZE = 100

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Fields (no prefix, uppercase names):
    - DATABASE_URL: SQLAlchemy URL used by ``bulk_db.io.connectors.connect``
    - BULK_BATCH_SIZE: default number of row operations per statement
    - LOG_LEVEL: Logging level (uppercase)
    - LOG_TO_FILE: Enable the rotating file log handler
    - LOG_FILE_DIR: Directory for log files
    """

    DATABASE_URL: Optional[str] = Field(
        default=None,
        validation_alias="DATABASE_URL",
        description="Database connection URL (SQLAlchemy format)",
    )
    BULK_BATCH_SIZE: int = Field(
        default=DEFAULT_BATCH_SIZE,
        ge=1,
        validation_alias="BULK_BATCH_SIZE",
        description="Default number of row operations per statement",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    LOG_TO_FILE: bool = Field(
        default=False,
        validation_alias="LOG_TO_FILE",
        description="Also write logs to a daily rotated file",
    )
    LOG_FILE_DIR: str = Field(
        default="logs",
        validation_alias="LOG_FILE_DIR",
        description="Directory for log files",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {sorted(_VALID_LOG_LEVELS)}, got {value!r}"
            )
        return level

    def get_database_connection_string(self) -> Optional[str]:
        """Return DATABASE_URL, normalized for SQLAlchemy.

        'postgres://' is rewritten to 'postgresql://' since newer SQLAlchemy
        releases no longer accept the short scheme.
        """
        url = self.DATABASE_URL
        if url and url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    model_config = SettingsConfigDict(
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
