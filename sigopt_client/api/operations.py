"""
Module-level API operations backed by a shared default client.

The default client is built on first use from the global settings,
prompting for a token if none is configured and stdin is a terminal.
"""

from typing import Any, Mapping, Optional

import requests

from .client import ClientConfig, SigOptClient

_client: Optional[SigOptClient] = None


def get_client() -> SigOptClient:
    """
    Get the default client, creating it if needed.

    Returns:
        SigOptClient instance.
    """
    global _client
    if _client is None:
        _client = SigOptClient(ClientConfig.from_settings())
    return _client


def set_client(client: Optional[SigOptClient]) -> None:
    """
    Replace the default client. None resets it so the next call rebuilds it.

    Args:
        client: Client to use for module-level operations.
    """
    global _client
    if _client is not None and _client is not client:
        _client.close()
    _client = client


def _client_for(api_token: Optional[str]) -> SigOptClient:
    client = get_client()
    if api_token is None or api_token == client.config.api_token:
        return client
    return client.with_token(api_token)


def get(
    path: str,
    query: Optional[Mapping[str, Any]] = None,
    api_token: Optional[str] = None
) -> requests.Response:
    """GET a SigOpt API path; the response still needs parse_response."""
    return _client_for(api_token).get(path, query)


def post(path: str, body: Any = None, api_token: Optional[str] = None) -> requests.Response:
    """POST a JSON body to a SigOpt API path; the response still needs parse_response."""
    return _client_for(api_token).post(path, body)


def create_experiment(body: Any) -> Any:
    """
    Create an experiment.

    Args:
        body: Experiment definition, e.g.
            {"name": "...", "parameters": [{"name": "x1", "type": "double",
            "bounds": {"min": 0, "max": 100}}]}

    Returns:
        Experiment created by SigOpt.
    """
    return get_client().create_experiment(body)


def fetch_experiment(experiment_id: Any, query: Optional[Mapping[str, Any]] = None) -> Any:
    """Fetch an experiment by id."""
    return get_client().fetch_experiment(experiment_id, query)


def create_suggestion(experiment_id: Any, body: Any = None) -> Any:
    """Create a suggestion for an experiment."""
    return get_client().create_suggestion(experiment_id, body)


def create_observation(experiment_id: Any, body: Any) -> Any:
    """Create an observation for an experiment."""
    return get_client().create_observation(experiment_id, body)
