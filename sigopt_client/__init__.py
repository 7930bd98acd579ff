"""
Thin client for the SigOpt optimization API.

Create an experiment, ask for suggestions and report observations;
every call is one HTTP round trip returning plain decoded JSON.
"""

__version__ = "0.1.0"

from .errors import ConfigurationError, EncodeError, HttpError, ParseError, SigOptError
from .config import resolve_base_url, resolve_token
from .api import (
    ClientConfig,
    SigOptClient,
    create_experiment,
    create_observation,
    create_suggestion,
    fetch_experiment,
    get_client,
    set_client,
)
from .franke import franke

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "EncodeError",
    "HttpError",
    "ParseError",
    "SigOptClient",
    "SigOptError",
    "create_experiment",
    "create_observation",
    "create_suggestion",
    "fetch_experiment",
    "franke",
    "get_client",
    "resolve_base_url",
    "resolve_token",
    "set_client",
]
