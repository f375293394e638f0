"""Tests for credentials and the API version setting."""

import pytest

from salesforce_api import config
from salesforce_api.config import Credentials


class TestCredentials:
    """Tests for the Credentials dataclass."""

    def test_default_values(self):
        creds = Credentials()

        assert creds.username is None
        assert creds.security_token == ""
        assert creds.sandbox is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SF_USERNAME", "user@example.com")
        monkeypatch.setenv("SF_PASSWORD", "pw")
        monkeypatch.setenv("SF_SECURITY_TOKEN", "tok")
        monkeypatch.setenv("SF_CONSUMER_KEY", "ckey")
        monkeypatch.setenv("SF_CONSUMER_SECRET", "csecret")
        monkeypatch.setenv("SF_SANDBOX", "true")

        creds = Credentials.from_env()

        assert creds == Credentials(
            username="user@example.com",
            password="pw",
            security_token="tok",
            consumer_key="ckey",
            consumer_secret="csecret",
            sandbox=True,
        )

    @pytest.mark.parametrize(
        "raw, expected", [("1", True), ("YES", True), ("false", False), ("", False)]
    )
    def test_sandbox_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv("SF_SANDBOX", raw)

        assert Credentials.from_env().sandbox is expected

    def test_missing_lists_env_names(self):
        creds = Credentials(username="u", consumer_key="k")

        assert creds.missing() == ["SF_PASSWORD", "SF_CONSUMER_SECRET"]

    def test_security_token_is_optional(self):
        creds = Credentials(username="u", password="p", consumer_key="k", consumer_secret="s")

        assert creds.missing() == []

    def test_repr_hides_secrets(self):
        creds = Credentials(username="u", password="pw-secret", consumer_secret="cs-secret")

        assert "pw-secret" not in repr(creds)
        assert "cs-secret" not in repr(creds)


class TestApiVersion:
    """Tests for the process-wide API version."""

    def test_default(self):
        assert config.get_version() == "31.0"

    def test_set_version(self):
        config.set_version("60.0")

        assert config.get_version() == "60.0"

    def test_set_version_strips_prefix(self):
        assert config.set_version("v59.0") == "59.0"

    def test_empty_version_rejected(self):
        with pytest.raises(ValueError):
            config.set_version("v")

    def test_version_from_env(self, monkeypatch):
        assert config.version_from_env() is None
        assert config.version_from_env("31.0") == "31.0"

        monkeypatch.setenv("SF_API_VERSION", "v60.0")

        assert config.version_from_env() == "60.0"
