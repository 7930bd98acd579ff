"""
Unit tests for the SigOpt client transport, validation and parsing.
"""

import io
import json

import pytest
import requests

from conftest import make_response
from sigopt_client.api import (
    USER_AGENT,
    ClientConfig,
    SigOptClient,
    build_auth,
    check_response,
    encode_body,
    parse_response,
)
from sigopt_client.errors import EncodeError, HttpError, ParseError, SigOptError
from sigopt_client.observability import configure_logging


@pytest.fixture
def client(session):
    return SigOptClient(ClientConfig(api_token="token-123"), session=session)


def sent_json(session, call_index: int = -1):
    """Decode the JSON body of a recorded request."""
    return json.loads(session.request.call_args_list[call_index].kwargs["data"])


class TestParseResponse:
    """Tests for response parsing."""

    def test_returns_decoded_object(self):
        """Arbitrary fields come back as plain dicts and lists."""
        payload = {"id": 1, "extra": {"nested": [1, "two", None, True]}, "unknown_field": 3.5}

        assert parse_response(make_response(200, payload)) == payload

    def test_empty_body_fails(self):
        """An empty body is an error, not a default value."""
        with pytest.raises(ParseError, match="No output to parse"):
            parse_response(make_response(200, text=""))

    def test_invalid_json_fails(self):
        """Malformed JSON raises ParseError."""
        with pytest.raises(ParseError):
            parse_response(make_response(200, text="<html>oops</html>"))

    def test_invalid_utf8_body_fails(self):
        """Bytes that are not UTF-8 raise ParseError, not UnicodeDecodeError."""
        with pytest.raises(ParseError, match="UTF-8"):
            parse_response(make_response(200, content=b"\xff\xfe{}"))

    def test_utf8_body(self):
        """The body is decoded as UTF-8."""
        assert parse_response(make_response(200, text='{"name": "café"}')) == {"name": "café"}

    def test_top_level_array(self):
        """Non-object JSON values are returned unchanged."""
        assert parse_response(make_response(200, [1, 2, 3])) == [1, 2, 3]


class TestCheckResponse:
    """Tests for status validation."""

    def test_success_passes(self):
        """Status below 400 returns None."""
        assert check_response(make_response(201, {"id": 1})) is None
        assert check_response(make_response(302, text="")) is None

    def test_error_with_message(self):
        """Status and server message are both carried by the error."""
        with pytest.raises(HttpError) as exc_info:
            check_response(make_response(404, {"message": "X"}))

        err = exc_info.value
        assert err.status_code == 404
        assert err.message == "X"
        assert "404" in str(err)
        assert "X" in str(err)

    def test_error_without_message(self):
        """Errors without a message field still carry the status code."""
        with pytest.raises(HttpError) as exc_info:
            check_response(make_response(500, {"detail": "nope"}))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message is None
        assert str(exc_info.value) == "HTTP failure: 500"

    def test_error_with_empty_body(self):
        """An empty error body still raises HttpError."""
        with pytest.raises(HttpError) as exc_info:
            check_response(make_response(503, text=""))

        assert exc_info.value.status_code == 503

    def test_error_with_non_utf8_body(self):
        """A Latin-1 gateway page still gives HttpError with its status code."""
        with pytest.raises(HttpError) as exc_info:
            check_response(make_response(502, content=b"<html>Bad gateway \xe9</html>"))

        assert exc_info.value.status_code == 502
        assert exc_info.value.message is None

    def test_errors_share_base_class(self):
        """All client errors can be caught as SigOptError."""
        with pytest.raises(SigOptError):
            check_response(make_response(400, {"message": "bad"}))


class TestEncodeBody:
    """Tests for request body encoding."""

    def test_none_is_empty_object(self):
        """A missing body is sent as {}."""
        assert json.loads(encode_body(None)) == {}

    def test_none_fields_omitted(self):
        """Keys with None values are left out."""
        body = {"suggestion": 1, "value": 2.0, "value_stddev": None}

        assert json.loads(encode_body(body)) == {"suggestion": 1, "value": 2.0}

    def test_single_element_lists_kept_by_default(self):
        """Without auto_unbox, one-element arrays stay arrays."""
        body = {"parameters": [{"name": "x"}], "tags": ["a"]}

        assert json.loads(encode_body(body)) == body

    def test_auto_unbox(self):
        """With auto_unbox, one-element scalar lists become scalars."""
        body = {"value": [1.5], "tags": ["a", "b"], "parameters": [{"name": "x"}]}

        assert json.loads(encode_body(body, auto_unbox=True)) == {
            "value": 1.5,
            "tags": ["a", "b"],
            "parameters": [{"name": "x"}],
        }


    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_rejected(self, value):
        """NaN and infinity have no JSON form and are refused."""
        with pytest.raises(EncodeError):
            encode_body({"suggestion": 1, "value": value})


class TestBuildAuth:
    """Tests for credentials."""

    def test_token_as_username(self):
        """Token is the username, password is empty."""
        auth = build_auth("secret")

        assert isinstance(auth, requests.auth.HTTPBasicAuth)
        assert auth.username == "secret"
        assert auth.password == ""


class TestTransport:
    """Tests for GET/POST requests."""

    def test_user_agent_header(self, client, session):
        """Session carries the fixed user agent."""
        assert session.headers["User-Agent"] == USER_AGENT
        assert USER_AGENT.startswith("sigopt-client/")

    def test_get_request(self, client, session):
        """GET joins base url and path and passes query params."""
        session.request.return_value = make_response(200, {"id": 7})

        response = client.get("v1/experiments/7", {"fields": "id"})

        assert response.status_code == 200
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://api.sigopt.com/v1/experiments/7")
        assert kwargs["params"] == {"fields": "id"}
        assert kwargs["auth"].username == "token-123"
        assert kwargs["timeout"] is None

    def test_post_request(self, client, session):
        """POST sends a JSON body with basic auth."""
        session.request.return_value = make_response(200, {"id": 1})

        client.post("/v1/experiments", {"name": "test"})

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://api.sigopt.com/v1/experiments")
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert sent_json(session) == {"name": "test"}

    def test_custom_base_url_and_timeout(self, session):
        """Configured url and timeout are used for every request."""
        config = ClientConfig(api_token="t", api_url="http://localhost:5000/", timeout_seconds=3.0)
        client = SigOptClient(config, session=session)
        session.request.return_value = make_response(200, {})

        client.get("v1/experiments/1")

        args, kwargs = session.request.call_args
        assert args[1] == "http://localhost:5000/v1/experiments/1"
        assert kwargs["timeout"] == 3.0

    def test_error_status_raises(self, client, session):
        """Error responses raise before being returned."""
        session.request.return_value = make_response(401, {"message": "Invalid token"})

        with pytest.raises(HttpError, match="Invalid token"):
            client.post("v1/experiments", {})

        assert session.request.call_count == 1

    def test_unencodable_body_not_sent(self, client, session):
        """A body that cannot be encoded fails before any request is made."""
        with pytest.raises(EncodeError):
            client.post("v1/experiments/1/observations", {"suggestion": 2, "value": float("nan")})

        session.request.assert_not_called()

    def test_network_errors_propagate(self, client, session):
        """Transport failures are not caught or retried."""
        session.request.side_effect = requests.ConnectionError("down")

        with pytest.raises(requests.ConnectionError):
            client.get("v1/experiments/1")

        assert session.request.call_count == 1

    def test_context_manager_closes_session(self, session):
        """Leaving the with block closes the session."""
        with SigOptClient(ClientConfig(api_token="t"), session=session):
            pass

        session.close.assert_called_once()

    def test_request_logging_hides_token(self, client, session):
        """Requests are logged with method, path and status, never the token."""
        stream = io.StringIO()
        configure_logging(level="DEBUG", format_type="json", stream=stream)
        session.request.return_value = make_response(404, {"message": "missing"})

        with pytest.raises(HttpError):
            client.get("v1/experiments/9")

        configure_logging(level="WARNING", stream=io.StringIO())
        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        record = lines[-1]
        assert record["level"] == "WARNING"
        assert record["method"] == "GET"
        assert record["path"] == "v1/experiments/9"
        assert record["status_code"] == 404
        assert "token-123" not in stream.getvalue()


class TestClientConfig:
    """Tests for building a client config from settings."""

    def test_from_settings_uses_env_token(self, monkeypatch):
        """Token and url come from the environment via settings."""
        monkeypatch.setenv("SIGOPT_API_TOKEN", "env-token")
        monkeypatch.setenv("SIGOPT_API_URL", "http://local")

        config = ClientConfig.from_settings()

        assert config.api_token == "env-token"
        assert config.api_url == "http://local"

    def test_from_settings_prompts_when_missing(self, monkeypatch):
        """Missing token is resolved through the interactive resolver."""
        monkeypatch.setattr(
            "sigopt_client.api.client.resolve_token",
            lambda force=False: "prompted"
        )

        assert ClientConfig.from_settings().api_token == "prompted"
