"""
Exceptions raised by the SigOpt client.
"""

from typing import Optional


class SigOptError(Exception):
    """Base class for all client errors."""


class ConfigurationError(SigOptError):
    """Client configuration is missing or invalid."""


class HttpError(SigOptError):
    """The API answered with an error status code."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        text = f"HTTP failure: {status_code}"
        if message:
            text = f"{text}\n{message}"
        super().__init__(text)
        self.status_code = status_code
        self.message = message


class ParseError(SigOptError):
    """A response body could not be decoded as JSON."""


class EncodeError(SigOptError):
    """A request body cannot be encoded as strict JSON."""
