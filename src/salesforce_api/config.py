from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

_logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "31.0"

_TRUTHY = {"1", "true", "yes", "on"}

# Process-wide API version. Read by every client that does not pin its own.
_api_version = DEFAULT_API_VERSION


def normalize_version(v: str) -> str:
    """Accept ``"60.0"`` or ``"v60.0"`` and return ``"60.0"``."""
    v = (v or "").strip()
    if v[:1] in ("v", "V"):
        v = v[1:]
    if not v:
        raise ValueError("API version must not be empty")
    return v


def set_version(v: str) -> str:
    """Set the API version used by all subsequent calls in this process."""
    global _api_version
    _api_version = normalize_version(v)
    _logger.debug("API version set to %s", _api_version)
    return _api_version


def get_version() -> str:
    """Return the current process-wide API version."""
    return _api_version


def version_from_env(default: Optional[str] = None) -> Optional[str]:
    """Return SF_API_VERSION (normalized), or ``default`` when unset."""
    raw = os.getenv("SF_API_VERSION")
    if not raw:
        return default
    return normalize_version(raw)


# ----------------------------------------------------------------------
# Credentials
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Credentials:
    """User and connected-app credentials for the password grant."""

    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    # Appended to the password; empty when logging in from a trusted IP range
    security_token: str = field(default="", repr=False)

    # Connected App consumer key / secret
    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = field(default=None, repr=False)

    # Authenticate against test.salesforce.com instead of login.salesforce.com
    sandbox: bool = False

    @classmethod
    def from_env(cls) -> Credentials:
        """Load credentials from environment variables."""
        return cls(
            username=os.getenv("SF_USERNAME"),
            password=os.getenv("SF_PASSWORD"),
            security_token=os.getenv("SF_SECURITY_TOKEN", ""),
            consumer_key=os.getenv("SF_CONSUMER_KEY"),
            consumer_secret=os.getenv("SF_CONSUMER_SECRET"),
            sandbox=os.getenv("SF_SANDBOX", "").strip().lower() in _TRUTHY,
        )

    def missing(self) -> list[str]:
        """Names of the environment variables for required fields that are empty."""
        return [
            k
            for k, v in {
                "SF_USERNAME": self.username,
                "SF_PASSWORD": self.password,
                "SF_CONSUMER_KEY": self.consumer_key,
                "SF_CONSUMER_SECRET": self.consumer_secret,
            }.items()
            if not v
        ]
