"""
Client configuration: settings file, environment overrides, credentials.
"""

from .credentials import API_TOKEN_ENV, API_URL_ENV, resolve_base_url, resolve_token
from .settings import (
    DEFAULT_API_URL,
    ApiConfig,
    LoggingConfig,
    Settings,
    get_settings,
    load_settings,
    reload_settings,
)

__all__ = [
    "API_TOKEN_ENV",
    "API_URL_ENV",
    "DEFAULT_API_URL",
    "ApiConfig",
    "LoggingConfig",
    "Settings",
    "get_settings",
    "load_settings",
    "reload_settings",
    "resolve_base_url",
    "resolve_token",
]
