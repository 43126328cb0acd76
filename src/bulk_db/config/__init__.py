"""Configuration management for bulk-db.

Settings are loaded from environment variables (and an optional .env file)
with validation using Pydantic BaseSettings.

Usage:
    >>> from bulk_db.config import get_settings
    >>> settings = get_settings()
    >>> settings.BULK_BATCH_SIZE
    100
"""

from bulk_db.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
