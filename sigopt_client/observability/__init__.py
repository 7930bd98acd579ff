"""
Logging for the SigOpt client.
"""

from .logger import JSONFormatter, StructuredLogger, TextFormatter, configure_logging, get_logger

__all__ = [
    "JSONFormatter",
    "StructuredLogger",
    "TextFormatter",
    "configure_logging",
    "get_logger",
]
