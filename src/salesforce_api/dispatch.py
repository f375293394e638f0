from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict

from .auth import Session

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestOptions:
    """Caller-supplied extras merged into a single request."""

    body: Optional[Union[str, bytes]] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Response:
    """Status, headers and decoded body of one API call.

    ``body`` is whatever JSON the server returned (object, array or
    scalar), or None for empty and non-JSON payloads; ``text`` always
    holds the raw payload. ``headers`` match case-insensitively, as in
    ``requests``.
    """

    status_code: int
    headers: Mapping[str, str]
    body: Any
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @classmethod
    def from_requests(cls, r: requests.Response) -> Response:
        text = r.text or ""
        body: Any = None
        if text.strip():
            try:
                body = r.json()
            except ValueError:
                _logger.debug("Non-JSON response body (status %s)", r.status_code)
        return cls(
            status_code=r.status_code,
            headers=CaseInsensitiveDict(r.headers),
            body=body,
            text=text,
        )


def request_headers(session: Session, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Caller headers plus the session's bearer token."""
    headers: Dict[str, str] = dict(extra or {})
    headers["Authorization"] = f"Bearer {session.access_token}"
    return headers


def dispatch(
    method: str,
    session: Session,
    path: str,
    options: Optional[RequestOptions] = None,
    *,
    http: Optional[Any] = None,
) -> Response:
    """Issue exactly one request against the session's instance.

    No timeout, retry or status check is applied: non-2xx responses are
    returned like any other, and transport errors propagate as raised by
    ``requests``.
    """
    http = http or requests
    opts = options or RequestOptions()
    url = session.instance_url.rstrip("/") + path

    _logger.debug("%s %s", method.upper(), url)
    r = http.request(
        method.upper(),
        url,
        data=opts.body,
        headers=request_headers(session, opts.headers),
        params=dict(opts.params) or None,
    )
    _logger.debug("%s %s -> HTTP %s", method.upper(), url, r.status_code)
    return Response.from_requests(r)
