from __future__ import annotations

from typing import Any, Optional


class SalesforceAPIError(RuntimeError):
    """Base class for errors raised by this library."""


class MissingCredentialsError(SalesforceAPIError):
    """Raised when the required Salesforce env vars are not present."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__("Missing required environment variables: " + ", ".join(missing))


class AuthenticationError(SalesforceAPIError):
    """Raised when the OAuth token exchange does not yield a session.

    The raw ``requests.Response`` (if one was received) is kept on
    ``response`` so callers can inspect status, headers and body.
    """

    def __init__(
        self,
        message: str,
        *,
        response: Optional[Any] = None,
        status_code: Optional[int] = None,
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ):
        self.response = response
        self.status_code = status_code
        self.error = error
        self.error_description = error_description
        super().__init__(message)


class UnknownRouteError(SalesforceAPIError, KeyError):
    """Raised when an endpoint key is not in the route registry."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown API route: {key!r}")

    def __str__(self) -> str:
        return self.args[0]


class RouteArityError(SalesforceAPIError, ValueError):
    """Raised when a route is resolved with the wrong number of parameters."""

    def __init__(self, key: str, expected: int, got: int):
        self.key = key
        self.expected = expected
        self.got = got
        super().__init__(f"Route {key!r} takes {expected} parameter(s), got {got}")
