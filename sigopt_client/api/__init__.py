"""
HTTP access to the SigOpt API.
"""

from .client import (
    USER_AGENT,
    ClientConfig,
    SigOptClient,
    build_auth,
    check_response,
    encode_body,
    parse_response,
)
from .operations import (
    create_experiment,
    create_observation,
    create_suggestion,
    fetch_experiment,
    get,
    get_client,
    post,
    set_client,
)

__all__ = [
    "USER_AGENT",
    "ClientConfig",
    "SigOptClient",
    "build_auth",
    "check_response",
    "create_experiment",
    "create_observation",
    "create_suggestion",
    "encode_body",
    "fetch_experiment",
    "get",
    "get_client",
    "parse_response",
    "post",
    "set_client",
]
