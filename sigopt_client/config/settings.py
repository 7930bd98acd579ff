"""
Configuration loading and management.
Loads settings from YAML files and environment variables.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
import yaml

DEFAULT_API_URL = "https://api.sigopt.com"


@dataclass
class ApiConfig:
    """SigOpt API connection configuration."""
    api_url: str = DEFAULT_API_URL
    api_token: str = ""
    timeout_seconds: Optional[float] = None  # None = no client-side timeout
    auto_unbox: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "text"


@dataclass
class Settings:
    """Main settings container."""
    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _find_config_file() -> Optional[Path]:
    """
    Find the configuration file.

    Returns:
        Path to config file or None if not found.
    """
    # Check environment variable first
    env_config = os.environ.get("SIGOPT_CONFIG_PATH")
    if env_config:
        path = Path(env_config)
        if path.exists():
            return path

    search_paths = [
        Path("config/sigopt.yaml"),
        Path("sigopt.yaml"),
    ]

    for path in search_paths:
        if path.exists():
            return path

    return None


def _dict_to_config(data: Optional[dict], config_class, existing=None):
    """
    Convert dictionary to dataclass, preserving defaults for missing keys.

    Args:
        data: Dictionary with configuration data.
        config_class: The dataclass type to create.
        existing: Existing instance to update (optional).

    Returns:
        Instance of config_class with data applied.
    """
    if existing is None:
        existing = config_class()

    if not isinstance(data, dict):
        return existing

    for key, value in data.items():
        if hasattr(existing, key):
            setattr(existing, key, value)

    return existing


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Load settings from configuration file and environment.

    Args:
        config_path: Optional explicit path to config file.

    Returns:
        Settings instance with loaded configuration.
    """
    settings = Settings()

    if config_path:
        path = Path(config_path)
    else:
        path = _find_config_file()

    if path and path.exists():
        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if data:
            settings.api = _dict_to_config(data.get("api"), ApiConfig, settings.api)
            settings.logging = _dict_to_config(
                data.get("logging"), LoggingConfig, settings.logging
            )

    _apply_env_overrides(settings)

    return settings


def _apply_env_overrides(settings: Settings) -> None:
    """
    Apply environment variable overrides to settings.

    Args:
        settings: Settings instance to modify.
    """
    if api_url := os.environ.get("SIGOPT_API_URL"):
        settings.api.api_url = api_url

    if api_token := os.environ.get("SIGOPT_API_TOKEN"):
        settings.api.api_token = api_token

    if timeout := os.environ.get("SIGOPT_TIMEOUT_SECONDS"):
        settings.api.timeout_seconds = float(timeout)

    if log_level := os.environ.get("LOG_LEVEL"):
        settings.logging.level = log_level.upper()

    if log_format := os.environ.get("LOG_FORMAT"):
        settings.logging.format = log_format.lower()


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings from configuration.

    Args:
        config_path: Optional explicit path to config file.

    Returns:
        New Settings instance.
    """
    global _settings
    _settings = load_settings(config_path)
    return _settings
