"""
Structured logging for the SigOpt client.
Supports JSON and text formats.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "sigopt_client"


def _record_time(record: logging.LogRecord) -> datetime:
    """UTC time at which the record was created."""
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _extra_fields(record: logging.LogRecord) -> dict:
    return getattr(record, "extra_fields", None) or {}


class JSONFormatter(logging.Formatter):
    """One JSON object per line; extra fields sit beside the message."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": _record_time(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_fields(record),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Single-line console output, e.g. `[time] LEVEL name: msg | key=value`."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"[{_record_time(record):%Y-%m-%d %H:%M:%S}] "
            f"{record.levelname:8} {record.name}: {record.getMessage()}"
        ]
        parts.extend(f"{k}={v}" for k, v in _extra_fields(record).items())
        line = " | ".join(parts)

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"

        return line


class StructuredLogger:
    """
    Wrapper around standard logger with structured logging support.
    """

    def __init__(self, name: str, logger: logging.Logger):
        self._name = name
        self._logger = logger

    def _log(self, level: int, msg: str, **kwargs) -> None:
        """Log with optional extra fields."""
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(
            self._name, level, "", 0, msg, (), None
        )
        if kwargs:
            record.extra_fields = kwargs
        self._logger.handle(record)

    def debug(self, msg: str, **kwargs) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs) -> None:
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs) -> None:
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs) -> None:
        """Log error message."""
        self._log(logging.ERROR, msg, **kwargs)

    def request(
        self,
        method: str,
        path: str,
        status_code: int,
        **kwargs
    ) -> None:
        """Log a completed API request."""
        level = logging.WARNING if status_code >= 400 else logging.DEBUG
        self._log(
            level,
            f"API: {method} {path} -> {status_code}",
            method=method,
            path=path,
            status_code=status_code,
            **kwargs
        )


# Logger registry
_loggers: dict[str, StructuredLogger] = {}

# Library default: stay silent until the application configures logging
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(
    level: str = "INFO",
    format_type: str = "text",
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure the client's log output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format_type: "json" or "text".
        stream: Output stream, stdout by default.
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if format_type.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    package_logger.addHandler(handler)
    package_logger.propagate = False


def get_logger(name: str) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically module name).

    Returns:
        StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, logging.getLogger(name))

    return _loggers[name]
