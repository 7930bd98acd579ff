"""
API token and base URL resolution.

Both values come from the environment. The token may also be entered
interactively on first use; a successful entry is written back to
SIGOPT_API_TOKEN so the rest of the process reuses it.
"""

import os
import sys
from typing import Callable, Optional

from ..errors import ConfigurationError
from .settings import DEFAULT_API_URL

API_TOKEN_ENV = "SIGOPT_API_TOKEN"
API_URL_ENV = "SIGOPT_API_URL"


def is_interactive() -> bool:
    """Whether stdin is attached to a terminal."""
    stdin = sys.stdin
    return stdin is not None and stdin.isatty()


def resolve_token(
    force: bool = False,
    interactive: Optional[bool] = None,
    prompt: Callable[[str], str] = input
) -> str:
    """
    Get the SigOpt API token from the environment or user input.

    Args:
        force: Prompt for a token even if one is already set.
        interactive: Override terminal detection (None = detect).
        prompt: Function used to read the token.

    Returns:
        The API token.

    Raises:
        ConfigurationError: If no token is available.
    """
    env = os.environ.get(API_TOKEN_ENV, "")
    if env and not force:
        return env

    if interactive is None:
        interactive = is_interactive()

    if not interactive:
        raise ConfigurationError(
            f"Please set env var {API_TOKEN_ENV} to your SigOpt API token"
        )

    print(f"Couldn't find env var {API_TOKEN_ENV}.", file=sys.stderr)
    print("Please enter your API token and press enter:", file=sys.stderr)
    api_token = prompt(": ").strip()

    if not api_token:
        raise ConfigurationError("SigOpt API token entry failed")

    print(f"Updating {API_TOKEN_ENV} env var to the entered token", file=sys.stderr)
    os.environ[API_TOKEN_ENV] = api_token

    return api_token


def resolve_base_url() -> str:
    """
    Get the SigOpt API url from the environment, or the default.

    Returns:
        Base url for API requests.
    """
    return os.environ.get(API_URL_ENV) or DEFAULT_API_URL
