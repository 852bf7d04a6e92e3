"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings v2.

The configuration is organized into logical groups:
- DatabaseConfig: Database connection settings
- LoggingConfig: Logging levels, files, and debugging options
- PlaybackConfig: Playback order defaults and the default playlist name
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = "sqlite+aiosqlite:///data/setlist.db"
    echo: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("data/logs/setlist.log")
    real_time_debug: bool = True


class PlaybackConfig(BaseModel):
    """Playback order defaults."""

    default_mode: str = "default"
    # Seed for the shuffle random source; None draws from system entropy
    shuffle_seed: int | None = None
    default_playlist_name: str = "Default"


# Flat (legacy) key -> nested field, per settings section
_FLAT_KEYS = {
    "database": {
        "database_url": "url",
        "database_echo": "echo",
    },
    "logging": {
        "console_log_level": "console_level",
        "file_log_level": "file_level",
        "log_file": "log_file",
        "log_real_time_debug": "real_time_debug",
    },
    "playback": {
        "playback_mode": "default_mode",
        "shuffle_seed": "shuffle_seed",
        "default_playlist_name": "default_playlist_name",
    },
}


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: DATABASE_URL, CONSOLE_LOG_LEVEL, SHUFFLE_SEED
    - Nested: DATABASE__URL, LOGGING__CONSOLE_LEVEL, PLAYBACK__SHUFFLE_SEED

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    playback: PlaybackConfig = PlaybackConfig()

    data_dir: Path = Path("data")

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Map legacy flat variables onto the nested structure.

        Flat keys passed as init kwargs or read from ``.env`` replace the
        nested value. Flat process environment variables (``DATABASE_URL``)
        only fill fields that nothing else has set.
        """
        if not isinstance(data, dict):
            return data

        environ = {key.lower(): value for key, value in os.environ.items()}

        for section, mapping in _FLAT_KEYS.items():
            for flat_key, field_key in mapping.items():
                if flat_key in data:
                    data.setdefault(section, {})
                    if isinstance(data[section], dict):
                        data[section][field_key] = data.pop(flat_key)
                elif flat_key in environ:
                    data.setdefault(section, {})
                    if isinstance(data[section], dict):
                        data[section].setdefault(field_key, environ[flat_key])

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# FLAT KEY ACCESS
# =============================================================================

_LEGACY_KEY_MAP = {
    "DATABASE_URL": lambda: settings.database.url,
    "DATABASE_ECHO": lambda: settings.database.echo,
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    "PLAYBACK_MODE": lambda: settings.playback.default_mode,
    "SHUFFLE_SEED": lambda: settings.playback.shuffle_seed,
    "DEFAULT_PLAYLIST_NAME": lambda: settings.playback.default_playlist_name,
    "DATA_DIR": lambda: settings.data_dir,
}


def get_config(key: str, default=None):
    """Get configuration value by flat key with optional default.

    Example:
        >>> db_url = get_config("DATABASE_URL")
        >>> seed = get_config("SHUFFLE_SEED", 0)
    """
    if key in _LEGACY_KEY_MAP:
        value = _LEGACY_KEY_MAP[key]()
        return default if value is None else value

    return default
