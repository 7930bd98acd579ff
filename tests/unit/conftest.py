"""
Shared fixtures for client tests.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sigopt_client.api import operations
from sigopt_client.config import settings as settings_module


def make_response(
    status_code: int = 200,
    payload=None,
    text: str = None,
    content: bytes = None
) -> requests.Response:
    """Build a real requests.Response with a JSON, raw text or raw bytes body."""
    response = requests.Response()
    response.status_code = status_code
    if content is None:
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        content = text.encode("utf-8")
    response._content = content
    response.encoding = "utf-8"
    return response


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate tests from the caller's SigOpt env vars, config files and globals."""
    for name in (
        "SIGOPT_API_TOKEN",
        "SIGOPT_API_URL",
        "SIGOPT_CONFIG_PATH",
        "SIGOPT_TIMEOUT_SECONDS",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings_module, "_settings", None)
    monkeypatch.setattr(operations, "_client", None)
    yield


@pytest.fixture
def session():
    """HTTP session mock that records requests; set session.request.side_effect."""
    mock = MagicMock(spec=requests.Session)
    mock.headers = {}
    return mock
