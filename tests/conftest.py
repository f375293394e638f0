from unittest.mock import MagicMock

import pytest

from salesforce_api import config
from salesforce_api.auth import Session

SF_ENV_VARS = [
    "SF_USERNAME",
    "SF_PASSWORD",
    "SF_SECURITY_TOKEN",
    "SF_CONSUMER_KEY",
    "SF_CONSUMER_SECRET",
    "SF_SANDBOX",
    "SF_API_VERSION",
]


@pytest.fixture(autouse=True)
def clean_sf_state(monkeypatch):
    """
    Every test starts from the default API version and no SF_* env vars,
    whatever the developer's shell or .env file holds.
    """
    for var in SF_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config, "_api_version", config.DEFAULT_API_VERSION)


@pytest.fixture
def session():
    """A session as returned by a successful login."""
    return Session(
        access_token="00DFAKE-TOKEN",
        instance_url="https://example.my.salesforce.com",
        id="https://login.salesforce.com/id/00Dxx/005xx",
        issued_at="1404863461264",
        token_type="Bearer",
        signature="c2lnbmF0dXJl",
    )


def make_response(status_code=200, json_data=None, text=None, headers=None):
    """MagicMock shaped like a requests.Response."""
    r = MagicMock()
    r.status_code = status_code
    r.headers = headers or {"Content-Type": "application/json"}
    if json_data is not None:
        r.json.return_value = json_data
        r.text = text if text is not None else "json"
    else:
        r.json.side_effect = ValueError("No JSON object could be decoded")
        r.text = text or ""
    return r


@pytest.fixture
def fake_http():
    """Stand-in for the requests module: records calls, returns 200 {}."""
    http = MagicMock()
    http.request.return_value = make_response(200, {})
    return http


@pytest.fixture
def response_factory():
    return make_response
