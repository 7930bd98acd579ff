"""
SigOpt API client.
Handles authentication, JSON encoding and response checking.
"""

import json
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

import requests
from requests.auth import HTTPBasicAuth

from .. import __version__
from ..config.credentials import resolve_base_url, resolve_token
from ..config.settings import DEFAULT_API_URL, Settings, get_settings
from ..errors import EncodeError, HttpError, ParseError
from ..observability.logger import get_logger

logger = get_logger(__name__)

USER_AGENT = f"sigopt-client/{__version__}"


@dataclass
class ClientConfig:
    """Resolved connection settings for a client."""
    api_token: str
    api_url: str = DEFAULT_API_URL
    user_agent: str = USER_AGENT
    timeout_seconds: Optional[float] = None
    auto_unbox: bool = False

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        force_token: bool = False
    ) -> "ClientConfig":
        """
        Build a config from settings, resolving the token if unset.

        Args:
            settings: Settings to use, global settings if None.
            force_token: Prompt for a new token even if one is set.

        Returns:
            ClientConfig ready for SigOptClient.
        """
        settings = settings or get_settings()
        api = settings.api

        token = api.api_token
        if not token or force_token:
            token = resolve_token(force=force_token)

        return cls(
            api_token=token,
            api_url=api.api_url or resolve_base_url(),
            timeout_seconds=api.timeout_seconds,
            auto_unbox=api.auto_unbox,
        )


def build_auth(api_token: str) -> HTTPBasicAuth:
    """HTTP basic auth with the token as username and no password."""
    return HTTPBasicAuth(api_token, "")


def _unbox(value: Any, auto_unbox: bool) -> Any:
    """Prepare a value for JSON encoding."""
    if isinstance(value, Mapping):
        # Absent optional fields are left out entirely
        return {
            str(k): _unbox(v, auto_unbox)
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        items = [_unbox(v, auto_unbox) for v in value]
        if auto_unbox and len(items) == 1 and not isinstance(items[0], (dict, list)):
            return items[0]
        return items

    return value


def encode_body(body: Any, auto_unbox: bool = False) -> str:
    """
    JSON-encode a request body.

    Args:
        body: JSON-serializable value. None encodes as an empty object.
        auto_unbox: Encode single-element scalar lists as the bare scalar.

    Returns:
        JSON text.

    Raises:
        EncodeError: If the body holds NaN or infinite numbers.
    """
    if body is None:
        body = {}
    try:
        return json.dumps(_unbox(body, auto_unbox), allow_nan=False)
    except ValueError as e:
        raise EncodeError(f"Request body is not valid JSON: {e}") from e


def parse_response(response: requests.Response) -> Any:
    """
    Parse content returned by the SigOpt API.

    Args:
        response: Result of a request to the API.

    Returns:
        JSON decoding of the body as plain dicts and lists.

    Raises:
        ParseError: If the body is empty or not valid JSON.
    """
    try:
        text = response.content.decode("utf-8") if response.content else ""
    except UnicodeDecodeError as e:
        raise ParseError(f"Response is not valid UTF-8: {e}") from e

    if text == "":
        raise ParseError("No output to parse")

    try:
        return json.loads(text)
    except ValueError as e:
        raise ParseError(f"Invalid JSON in response: {e}") from e


def check_response(response: requests.Response) -> None:
    """
    Check the status of a response from the SigOpt API.

    Args:
        response: Result of a request to the API.

    Raises:
        HttpError: If the status code is 400 or above.
    """
    if response.status_code < 400:
        return

    message = None
    try:
        content = parse_response(response)
    except ParseError:
        content = None

    if isinstance(content, dict) and content.get("message") is not None:
        message = str(content["message"])

    raise HttpError(response.status_code, message)


class SigOptClient:
    """
    SigOpt API client.

    Each call issues exactly one HTTP request; failures are raised
    to the caller and never retried.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Resolved connection settings.
            session: HTTP session to use, a new one if None.
        """
        self.config = config
        self._auth = build_auth(config.api_token)

        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": config.user_agent
        })

        logger.debug("SigOpt client initialized", api_url=config.api_url)

    @classmethod
    def from_environment(cls, force_token: bool = False) -> "SigOptClient":
        """Create a client from global settings and the environment."""
        return cls(ClientConfig.from_settings(force_token=force_token))

    def with_token(self, api_token: str) -> "SigOptClient":
        """Client with different credentials sharing this client's session."""
        return SigOptClient(replace(self.config, api_token=api_token), session=self._session)

    def _url(self, path: str) -> str:
        return f"{self.config.api_url.rstrip('/')}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        response = self._session.request(
            method,
            self._url(path),
            auth=self._auth,
            timeout=self.config.timeout_seconds,
            **kwargs
        )
        logger.request(method, path, response.status_code)
        check_response(response)
        return response

    def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> requests.Response:
        """
        GET request to a SigOpt API path.

        Args:
            path: Path relative to the API url.
            query: Query parameters to be url-encoded.

        Returns:
            Checked response, to be decoded with parse_response.
        """
        return self._send("GET", path, params=query)

    def post(self, path: str, body: Any = None) -> requests.Response:
        """
        POST request to a SigOpt API path with a JSON body.

        Args:
            path: Path relative to the API url.
            body: Request body, will be JSON-encoded.

        Returns:
            Checked response, to be decoded with parse_response.
        """
        return self._send(
            "POST",
            path,
            data=encode_body(body, self.config.auto_unbox),
            headers={"Content-Type": "application/json"},
        )

    # =========================================================================
    # Experiments
    # =========================================================================

    def create_experiment(self, body: Any) -> Any:
        """Create an experiment."""
        return parse_response(self.post("v1/experiments", body))

    def fetch_experiment(self, experiment_id: Any, query: Optional[Mapping[str, Any]] = None) -> Any:
        """Fetch the experiment with id experiment_id."""
        return parse_response(self.get(f"v1/experiments/{experiment_id}", query))

    def create_suggestion(self, experiment_id: Any, body: Any = None) -> Any:
        """Create a suggestion for an experiment."""
        return parse_response(
            self.post(f"v1/experiments/{experiment_id}/suggestions", body)
        )

    def create_observation(self, experiment_id: Any, body: Any) -> Any:
        """
        Create an observation for an experiment.

        Args:
            experiment_id: Id of the experiment.
            body: Observation, e.g. {"suggestion": id, "value": 1.0, "value_stddev": 0.1}.

        Returns:
            Observation created by SigOpt.
        """
        return parse_response(
            self.post(f"v1/experiments/{experiment_id}/observations", body)
        )

    def close(self) -> None:
        """Close the client session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
