"""Configuration management for bugsnag-event-downloader using Pydantic models."""

import json
import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".bugsnag-downloader.json"
TOKEN_ENV_VAR = "BUGSNAG_AUTH_TOKEN"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class ApiConfig(BaseModel):
    """Bugsnag Data Access API section."""
    base_url: str = Field(alias="baseUrl", default="https://api.bugsnag.com")
    auth_token: str | None = Field(alias="authToken", default=None)
    per_page: int = Field(alias="perPage", default=30)
    timeout: float = 30.0

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"baseUrl must be an http(s) URL, got: {v}")
        return v.rstrip("/")

    @field_validator("per_page")
    @classmethod
    def validate_per_page(cls, v):
        """Bugsnag caps page size at 100."""
        if not (1 <= v <= 100):
            raise ValueError(f"perPage must be between 1-100, got: {v}")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeout must be > 0")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class DownloaderConfig(BaseModel):
    """Complete downloader configuration model."""
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> DownloaderConfig:
    """Load configuration from file with fallback to defaults.

    The ``BUGSNAG_AUTH_TOKEN`` environment variable fills in the access token
    when the file does not set one.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .bugsnag-downloader.json

    Returns:
        DownloaderConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            config = DownloaderConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    else:
        config = DownloaderConfig()

    if not config.api.auth_token:
        config.api.auth_token = os.environ.get(TOKEN_ENV_VAR) or None

    return config


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .bugsnag-downloader.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
