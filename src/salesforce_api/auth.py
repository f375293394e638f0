from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

import requests

from .config import Credentials
from .exceptions import AuthenticationError

_logger = logging.getLogger(__name__)

LOGIN_HOST = "login.salesforce.com"
SANDBOX_HOST = "test.salesforce.com"

_SESSION_FIELDS = ("id", "issued_at", "token_type", "instance_url", "signature", "access_token")


@dataclass(frozen=True)
class Session:
    """Result of a password-grant login; pass it to every API call.

    Immutable. The library does not track expiry: authenticate again when
    the token stops working.
    """

    access_token: str = field(repr=False)
    instance_url: str
    id: Optional[str] = None
    issued_at: Optional[str] = None
    token_type: Optional[str] = None
    signature: Optional[str] = field(default=None, repr=False)

    # Any other keys returned by the token endpoint
    extra: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), repr=False
    )

    @classmethod
    def from_token_response(cls, payload: Mapping[str, Any]) -> Session:
        """Build a session from the decoded token endpoint body."""
        return cls(
            access_token=payload["access_token"],
            instance_url=payload["instance_url"],
            id=payload.get("id"),
            issued_at=payload.get("issued_at"),
            token_type=payload.get("token_type"),
            signature=payload.get("signature"),
            extra=MappingProxyType(
                {k: v for k, v in payload.items() if k not in _SESSION_FIELDS}
            ),
        )

    def as_dict(self) -> dict[str, Any]:
        """Token-endpoint shaped dict, e.g. for ``json.dumps``."""
        d = dict(self.extra)
        d.update({name: getattr(self, name) for name in _SESSION_FIELDS})
        return d


def auth_host(sandbox: bool = False) -> str:
    """Host serving the OAuth endpoints for production or sandbox orgs."""
    return SANDBOX_HOST if sandbox else LOGIN_HOST


def token_url(sandbox: bool = False) -> str:
    return f"https://{auth_host(sandbox)}/services/oauth2/token"


def password_grant_params(credentials: Credentials) -> dict[str, str]:
    """Form fields for the OAuth2 username-password flow."""
    return {
        "grant_type": "password",
        "client_id": credentials.consumer_key or "",
        "client_secret": credentials.consumer_secret or "",
        "username": credentials.username or "",
        "password": f"{credentials.password or ''}{credentials.security_token or ''}",
        "format": "json",
    }


def authenticate(credentials: Credentials, *, http: Optional[Any] = None) -> Session:
    """Exchange user and connected-app credentials for a :class:`Session`.

    ``http`` is anything with a ``post(url, data=...)`` method; the
    ``requests`` module is used when omitted. One request is made and
    never retried. Any failure raises :class:`AuthenticationError` with
    the raw response attached.
    """
    http = http or requests
    url = token_url(credentials.sandbox)

    _logger.debug("Requesting access token from %s for %s", url, credentials.username)
    try:
        resp = http.post(url, data=password_grant_params(credentials))
    except requests.RequestException as e:
        raise AuthenticationError(f"Token request to {url} failed: {e}") from e

    try:
        payload = resp.json()
    except ValueError:
        payload = None

    status = resp.status_code
    if not isinstance(payload, dict):
        raise AuthenticationError(
            f"Token request failed ({status}): response is not a JSON object: {resp.text[:200]}",
            response=resp,
            status_code=status,
        )

    if status >= 300:
        error = payload.get("error")
        description = payload.get("error_description")
        raise AuthenticationError(
            f"Token request failed ({status}): {error}: {description}",
            response=resp,
            status_code=status,
            error=error,
            error_description=description,
        )

    missing = [k for k in ("access_token", "instance_url") if not payload.get(k)]
    if missing:
        raise AuthenticationError(
            "Token response is missing " + ", ".join(missing),
            response=resp,
            status_code=status,
        )

    session = Session.from_token_response(payload)
    _logger.info(
        "Authenticated against %s, instance=%s",
        auth_host(credentials.sandbox),
        session.instance_url,
    )
    return session
